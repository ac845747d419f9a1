"""
PDF serialization of laid-out pages using fpdf2 core fonts.

The writer draws exactly what the layout produced: one PDF page per Page, no
automatic page breaks, no reflow. Core fonts (Helvetica by default) are not
embedded and only cover latin-1, so documents are normalized to latin-1
typography before layout and measurement uses the same core-font metrics.
"""

from dataclasses import replace
from typing import Dict, List, Optional

from fpdf import FPDF

from cvforge.contexts.generation.document import Section, StructuredDocument
from cvforge.contexts.rendering.config import PageGeometry
from cvforge.contexts.rendering.draw_ops import Color, FontFace, LineOp, Page, TextOp
from cvforge.contexts.rendering.exceptions import MeasurementError

DEFAULT_FONT_FAMILY = "helvetica"

FONT_STYLES = {FontFace.REGULAR: "", FontFace.BOLD: "B"}

# Typographic characters LLMs emit that core fonts cannot encode
_CORE_FONT_REPLACEMENTS: Dict[int, str] = {
    0x2018: "'",  # left single quote
    0x2019: "'",  # right single quote
    0x201A: "'",
    0x201C: '"',  # left double quote
    0x201D: '"',  # right double quote
    0x201E: '"',
    0x2010: "-",  # hyphen
    0x2011: "-",  # non-breaking hyphen
    0x2012: "-",  # figure dash
    0x2013: "-",  # en dash
    0x2014: "-",  # em dash
    0x2212: "-",  # minus sign
    0x2022: "-",  # bullet
    0x25CF: "-",  # black circle
    0x25AA: "-",  # small black square
    0x2023: "-",  # triangular bullet
    0x2043: "-",  # hyphen bullet
    0x2026: "...",  # ellipsis
    0x2192: "->",  # right arrow
    0x2002: " ",  # en space
    0x2003: " ",  # em space
    0x2009: " ",  # thin space
    0x200A: " ",  # hair space
    0x202F: " ",  # narrow no-break space
    0x200B: "",  # zero-width space
    0x200D: "",  # zero-width joiner
    0xFEFF: "",  # byte order mark
}


def normalize_for_core_fonts(text: str) -> str:
    """Replace common typographic characters with latin-1 equivalents."""
    return text.translate(_CORE_FONT_REPLACEMENTS)


def normalize_document(document: StructuredDocument) -> StructuredDocument:
    """Apply normalize_for_core_fonts to every text field of a document."""
    return replace(
        document,
        full_name=normalize_for_core_fonts(document.full_name),
        title=normalize_for_core_fonts(document.title),
        email=normalize_for_core_fonts(document.email),
        phone=normalize_for_core_fonts(document.phone),
        location=normalize_for_core_fonts(document.location),
        summary=normalize_for_core_fonts(document.summary),
        sections=tuple(
            Section(
                heading=normalize_for_core_fonts(section.heading),
                content=normalize_for_core_fonts(section.content),
            )
            for section in document.sections
        ),
    )


class CoreFontMetrics:
    """
    Text widths from fpdf2's built-in core font metrics, in points.

    Example:
        >>> metrics = CoreFontMetrics()
        >>> pages = layout(document, geometry, style, metrics.measure_width)
    """

    def __init__(self, family: str = DEFAULT_FONT_FAMILY):
        self.family = family
        self._pdf = FPDF(unit="pt")

    def width(self, text: str, size: float, font: FontFace = FontFace.REGULAR) -> float:
        """
        Width of text in the given face and size.

        Raises:
            MeasurementError: If the text has characters outside the core-font encoding
        """
        try:
            text.encode("latin-1")
        except UnicodeEncodeError as e:
            bad_char = text[e.start]
            raise MeasurementError(
                f"Character {bad_char!r} (U+{ord(bad_char):04X}) is not available in core font "
                f"'{self.family}'",
                text=text,
                size=size,
                original_error=e,
            ) from e

        self._pdf.set_font(self.family, style=FONT_STYLES[font], size=size)
        return self._pdf.get_string_width(text)

    def measure_width(self, text: str, size: float) -> float:
        """Regular-face width, the measurement the layout engine wraps with."""
        return self.width(text, size, FontFace.REGULAR)


def _rgb255(color: Color) -> tuple:
    return tuple(round(component * 255) for component in color)


def write_pdf(
    pages: List[Page],
    geometry: PageGeometry,
    family: str = DEFAULT_FONT_FAMILY,
    title: Optional[str] = None,
    author: Optional[str] = None,
) -> bytes:
    """
    Serialize pages to PDF bytes.

    Layout coordinates have their origin at the bottom-left; fpdf2's is at the
    top-left, so every y is flipped against the page height.

    Args:
        pages: Pages from layout()
        geometry: The geometry the pages were laid out with
        family: Core font family
        title: Optional PDF title metadata
        author: Optional PDF author metadata

    Returns:
        PDF file content
    """
    pdf = FPDF(unit="pt", format=(geometry.page_width, geometry.page_height))
    pdf.set_auto_page_break(False)
    if title:
        pdf.set_title(title)
    if author:
        pdf.set_author(author)

    height = geometry.page_height
    for page in pages:
        pdf.add_page()
        for op in page.ops:
            if isinstance(op, TextOp):
                if not op.content:
                    continue
                pdf.set_font(family, style=FONT_STYLES[op.font], size=op.size)
                pdf.set_text_color(*_rgb255(op.color))
                pdf.text(op.x, height - op.y, op.content)
            elif isinstance(op, LineOp):
                pdf.set_draw_color(*_rgb255(op.color))
                pdf.set_line_width(op.thickness)
                pdf.line(op.start_x, height - op.start_y, op.end_x, height - op.end_y)

    return bytes(pdf.output())
