"""
Rendering Context

Responsibilities:
- Word-wraps and paginates a structured CV onto fixed-size pages
- Serializes the laid-out pages to PDF
- Verifies a written PDF against its layout

Owns: Layout, pagination, page geometry and style, PDF output
Never: Modifies CV content (beyond latin-1 typography normalization)
"""

from cvforge.contexts.rendering.config import (
    ColorRole,
    ElementStyle,
    PageGeometry,
    StyleConfig,
    load_layout_config,
)
from cvforge.contexts.rendering.draw_ops import DrawOp, FontFace, LineOp, Page, TextOp
from cvforge.contexts.rendering.exceptions import LayoutConfigError, MeasurementError
from cvforge.contexts.rendering.layout import layout
from cvforge.contexts.rendering.pdf_writer import CoreFontMetrics, write_pdf
from cvforge.contexts.rendering.renderer import RenderResult, output_filename, render_document
from cvforge.contexts.rendering.text_wrap import wrap_paragraphs, wrap_text
from cvforge.contexts.rendering.verifier import VerificationResult, verify_rendered_pdf

__all__ = [
    # Orchestration
    "render_document",
    "output_filename",
    "RenderResult",
    # Layout engine
    "layout",
    "wrap_text",
    "wrap_paragraphs",
    "Page",
    "DrawOp",
    "TextOp",
    "LineOp",
    "FontFace",
    # Configuration
    "PageGeometry",
    "StyleConfig",
    "ElementStyle",
    "ColorRole",
    "load_layout_config",
    # Backend
    "CoreFontMetrics",
    "write_pdf",
    "verify_rendered_pdf",
    "VerificationResult",
    # Errors
    "MeasurementError",
    "LayoutConfigError",
]
