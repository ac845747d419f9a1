"""
Pagination and text layout for structured CVs.

Lays a StructuredDocument out top-down onto fixed-size pages with a single
cursor. The result depends only on the document, the geometry, the style and
the width measurement, so identical inputs always produce identical pages.

Page order:
    name, title, contact line, divider, summary, then each section as
    heading + underline + body lines.

Pagination rule:
    Before any line that advances the cursor by h, if cursor - h < margin the
    current page is closed and a new one started at the top margin. Wrapped
    lines are never split across pages. Before each section a fixed minimum
    block (heading, underline and one body line) must fit, so a heading is not
    left alone at the bottom of a page. A longer first paragraph is not looked
    ahead at; only that fixed block is reserved.

Header elements (name, title, contact, divider) are placed on the first page
and never trigger a page break. There is no page limit.
"""

from typing import List

from cvforge.contexts.generation.document import StructuredDocument
from cvforge.contexts.rendering.config import ElementStyle, PageGeometry, StyleConfig
from cvforge.contexts.rendering.draw_ops import DrawOp, LineOp, Page, TextOp
from cvforge.contexts.rendering.text_wrap import MeasureWidth, wrap_paragraphs


class _PageBuilder:
    """Cursor plus the ops of the page being filled and the pages already closed."""

    def __init__(self, geometry: PageGeometry, style: StyleConfig):
        self.geometry = geometry
        self.style = style
        self.pages: List[Page] = []
        self.ops: List[DrawOp] = []
        self.y = geometry.top

    def ensure_space(self, height: float) -> None:
        # A fresh page is never skipped, even if the block is taller than it
        at_top = self.y >= self.geometry.top
        if self.y - height < self.geometry.margin and not at_top:
            self.new_page()

    def new_page(self) -> None:
        self.pages.append(Page(ops=tuple(self.ops)))
        self.ops = []
        self.y = self.geometry.top

    def text(self, content: str, element: ElementStyle) -> None:
        self.ops.append(
            TextOp(
                x=self.geometry.margin,
                y=self.y,
                content=content,
                font=element.font,
                size=element.size,
                color=self.style.color(element.color),
            )
        )

    def rule(self, width: float, thickness: float) -> None:
        self.ops.append(
            LineOp(
                start_x=self.geometry.margin,
                start_y=self.y,
                end_x=self.geometry.margin + width,
                end_y=self.y,
                thickness=thickness,
                color=self.style.accent_color,
            )
        )

    def body(self, lines: List[str]) -> None:
        """Place wrapped body lines, breaking pages between lines as needed."""
        element = self.style.body
        for line in lines:
            self.ensure_space(element.advance)
            if line:
                self.text(line, element)
            self.y -= element.advance

    def finish(self) -> List[Page]:
        self.pages.append(Page(ops=tuple(self.ops)))
        self.ops = []
        return self.pages


def contact_line(document: StructuredDocument, separator: str) -> str:
    """Join the non-empty contact fields, or return '' if there are none."""
    parts = [part for part in (document.email, document.phone, document.location) if part]
    return separator.join(parts)


def layout(
    document: StructuredDocument,
    geometry: PageGeometry,
    style: StyleConfig,
    measure_width: MeasureWidth,
) -> List[Page]:
    """
    Lay a document out onto pages.

    Args:
        document: The complete tailored CV
        geometry: Page size and margin
        style: Typography, palette and spacing
        measure_width: Width of regular-face text at a size, in geometry units

    Returns:
        Pages in order; always at least one

    Raises:
        MeasurementError: If any body text cannot be measured
    """
    builder = _PageBuilder(geometry, style)
    width = geometry.content_width

    # Name is always drawn, even when empty
    builder.text(document.full_name, style.name)
    builder.y -= style.name.advance

    if document.title:
        builder.text(document.title, style.title)
        builder.y -= style.title.advance

    contact = contact_line(document, style.contact_separator)
    if contact:
        builder.text(contact, style.contact)
        builder.y -= style.contact.advance

    builder.rule(width, style.divider_thickness)
    builder.y -= style.divider_gap

    if document.summary:
        builder.body(wrap_paragraphs(document.summary, measure_width, style.body.size, width))
        builder.y -= style.summary_gap

    for section in document.sections:
        builder.ensure_space(style.section_min_space)

        builder.text(section.heading.upper(), style.heading)
        builder.y -= style.heading.advance

        builder.rule(style.underline_width, style.underline_thickness)
        builder.y -= style.underline_gap

        builder.body(wrap_paragraphs(section.content, measure_width, style.body.size, width))
        builder.y -= style.section_gap

    return builder.finish()
