"""
Verification of a written PDF against the pages it was rendered from.

Reads the PDF back and checks that it has one page per laid-out page and that
every text line appears on the page the layout put it on. Matching uses
normalized text (lowercase alphanumerics), so spacing and punctuation
differences from text extraction are ignored.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from cvforge.contexts.rendering.draw_ops import Page
from cvforge.utils.pdf_processing import PDFDocument, normalize_for_matching


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    PAGE_COUNT_MISMATCH = "Page count mismatch: {actual} (expected {expected})"
    LINE_NOT_FOUND = "Page {page}: line not found: '{line}'"


@dataclass
class VerificationResult:
    """
    Result of verifying a rendered PDF.

    Attributes:
        page_count: Actual page count of the PDF
        expected_page_count: Number of pages the layout produced
        issues: Human-readable problems found (empty when valid)
    """

    page_count: int
    expected_page_count: int
    issues: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.issues) == 0


def verify_rendered_pdf(pdf_path: Path, pages: List[Page]) -> VerificationResult:
    """
    Compare a written PDF with the pages it was rendered from.

    Args:
        pdf_path: Path to the written PDF
        pages: The pages passed to the writer

    Returns:
        VerificationResult listing any mismatches
    """
    pdf = PDFDocument(pdf_path)
    issues = []

    if pdf.page_count != len(pages):
        issues.append(
            IssueTemplates.PAGE_COUNT_MISMATCH.format(actual=pdf.page_count, expected=len(pages))
        )

    for page_number, page in enumerate(pages, start=1):
        extracted = [normalize_for_matching(line) for line in pdf.get_lines(page_number)]
        for line in page.lines:
            line_norm = normalize_for_matching(line)
            if not line_norm:
                continue
            if not any(line_norm in candidate for candidate in extracted):
                issues.append(IssueTemplates.LINE_NOT_FOUND.format(page=page_number, line=line))

    return VerificationResult(
        page_count=pdf.page_count,
        expected_page_count=len(pages),
        issues=issues,
    )
