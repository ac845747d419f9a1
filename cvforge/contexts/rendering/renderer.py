"""
Render orchestration: structured CV in, paginated PDF out.
"""

import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from cvforge.contexts.generation.document import StructuredDocument
from cvforge.contexts.rendering.config import StyleConfig, load_layout_config
from cvforge.contexts.rendering.draw_ops import Page
from cvforge.contexts.rendering.exceptions import MeasurementError
from cvforge.contexts.rendering.layout import contact_line, layout
from cvforge.contexts.rendering.logger import (
    _log_error,
    _log_info,
    log_layout_result,
    log_render_start,
    log_verification_result,
)
from cvforge.contexts.rendering.pdf_writer import (
    DEFAULT_FONT_FAMILY,
    CoreFontMetrics,
    normalize_document,
    write_pdf,
)
from cvforge.contexts.rendering.verifier import verify_rendered_pdf


@dataclass
class RenderResult:
    """
    Result of rendering a CV.

    Attributes:
        success: False only if verification was requested and found issues
        pages: Laid-out pages
        pdf_bytes: PDF file content
        pdf_path: Where the PDF was saved (None if not saved)
        page_count: Number of pages
        issues: Verification issues (empty if not verified or valid)
    """

    success: bool
    pages: List[Page] = field(default_factory=list)
    pdf_bytes: bytes = b""
    pdf_path: Optional[Path] = None
    page_count: int = 0
    issues: List[str] = field(default_factory=list)


def output_filename(full_name: str) -> str:
    """
    Download filename for a CV, e.g. 'Jane_Doe_CV.pdf'.

    Whitespace runs become underscores and path separators are replaced.
    """
    stem = re.sub(r"\s+", "_", full_name.strip())
    stem = re.sub(r"[\\/]", "-", stem)
    return f"{stem}_CV.pdf" if stem else "CV.pdf"


def check_single_line_text(
    document: StructuredDocument, style: StyleConfig, metrics: CoreFontMetrics
) -> None:
    """
    Measure the elements that are drawn as one line and never wrapped.

    Wrapping only measures summary and section bodies, so the name, title,
    contact line and headings are measured here in the face they are drawn in.

    Raises:
        MeasurementError: If any of them has characters the core font can't encode
    """
    single_lines = [
        (document.full_name, style.name),
        (document.title, style.title),
        (contact_line(document, style.contact_separator), style.contact),
    ]
    single_lines.extend((section.heading.upper(), style.heading) for section in document.sections)

    for text, element in single_lines:
        metrics.width(text, element.size, element.font)


def render_document(
    document: StructuredDocument,
    output_path: Optional[Path] = None,
    presets: Optional[List[str]] = None,
    family: str = DEFAULT_FONT_FAMILY,
    verify: bool = False,
) -> RenderResult:
    """
    Lay out a CV and write it as a PDF.

    Args:
        document: The complete tailored CV
        output_path: Where to save the PDF (not saved if None)
        presets: Layout presets applied over the defaults
        family: Core font family for measurement and drawing
        verify: Read the saved PDF back and check it against the layout

    Returns:
        RenderResult with pages and PDF bytes

    Raises:
        MeasurementError: If text cannot be measured in the chosen font
        LayoutConfigError: If the presets are invalid
        ValueError: If verify is requested without an output_path

    Example:
        >>> result = render_document(document, output_path=Path("Jane_Doe_CV.pdf"))
        >>> result.page_count
        2
    """
    if verify and output_path is None:
        raise ValueError("verify=True requires an output_path")

    geometry, style = load_layout_config(presets)
    document = normalize_document(document)
    metrics = CoreFontMetrics(family)

    log_render_start(document.full_name, len(document.sections), geometry)

    start_time = time.time()
    try:
        check_single_line_text(document, style, metrics)
        pages = layout(document, geometry, style, metrics.measure_width)
    except MeasurementError as e:
        _log_error(f"Layout failed: {e.message}")
        raise
    log_layout_result(pages, time.time() - start_time)

    pdf_bytes = write_pdf(
        pages,
        geometry,
        family=family,
        title=f"{document.full_name} CV".strip(),
        author=document.full_name or None,
    )

    result = RenderResult(success=True, pages=pages, pdf_bytes=pdf_bytes, page_count=len(pages))

    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(pdf_bytes)
        result.pdf_path = output_path
        _log_info(f"PDF saved to: {output_path}")

    if verify:
        verification = verify_rendered_pdf(output_path, pages)
        log_verification_result(verification)
        result.issues = verification.issues
        result.success = verification.is_valid

    return result
