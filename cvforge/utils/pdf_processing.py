"""
PDF processing utilities for page counting, text extraction and line search.

Main class:
    PDFDocument: Parsed PDF with per-page text lines and search.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_plain_text: Whole-document plain text, page by page.
    normalize_for_matching: Text normalization for fuzzy matching.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
"""

from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Tuple, Union

import pdfplumber
from PyPDF2 import PdfReader


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def extract_plain_text(source: Union[bytes, BinaryIO, Path]) -> str:
    """
    Extract plain text from every page of a PDF, pages separated by blank lines.

    Args:
        source: Raw PDF bytes, a binary file object, or a path

    Returns:
        Extracted text (empty string for PDFs without a text layer)
    """
    if isinstance(source, (bytes, bytearray)):
        source = BytesIO(source)

    page_texts = []
    with pdfplumber.open(source) as pdf:
        for page in pdf.pages:
            page_texts.append(page.extract_text() or "")

    return "\n\n".join(text for text in page_texts if text.strip())


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def cluster_by_y_tolerance(chars: List, tolerance: float = 3.0) -> List[List]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: c["top"])

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    if current_line:
        lines.append(current_line)

    return lines


class PDFDocument:
    """
    Parsed PDF with line-based text extraction.

    Characters are grouped into lines by Y-coordinate clustering and ordered
    left to right. Page data is lazily loaded and cached on first access.

    Args:
        pdf_path: Path to PDF file
        y_tolerance: Max Y-distance (points) to group characters as same line.

    Example:
        >>> pdf = PDFDocument(Path("Jane_Doe_CV.pdf"))
        >>> for line in pdf.get_lines(page=1):
        ...     print(line)
    """

    def __init__(self, pdf_path: Union[str, Path], y_tolerance: float = 3.0):
        pdf_path = Path(pdf_path) if isinstance(pdf_path, str) else pdf_path
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        self.pdf_path = pdf_path
        self.y_tolerance = y_tolerance
        self._pages_cache: Optional[Dict[int, List[str]]] = None
        self._page_count: Optional[int] = None

    @property
    def page_count(self) -> int:
        if self._page_count is None:
            self._page_count = page_count(self.pdf_path) or 0
        return self._page_count

    def _extract_pages(self) -> Dict[int, List[str]]:
        """Extract text lines from all pages, keyed by 1-indexed page number."""
        pages_data: Dict[int, List[str]] = {}

        with pdfplumber.open(self.pdf_path) as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                line_clusters = cluster_by_y_tolerance(page.chars, tolerance=self.y_tolerance)

                lines = []
                for char_objs in line_clusters:
                    char_objs.sort(key=lambda c: c["x0"])
                    lines.append("".join(c["text"] for c in char_objs))

                pages_data[page_num] = lines

        return pages_data

    def _ensure_loaded(self) -> None:
        """Lazily load page data if not already cached."""
        if self._pages_cache is None:
            self._pages_cache = self._extract_pages()

    def get_lines(self, page: int) -> List[str]:
        """
        Get text lines for a specific page.

        Args:
            page: Page number (1-indexed)

        Returns:
            List of text lines, top-to-bottom order. Empty list if page doesn't exist.
        """
        self._ensure_loaded()
        return self._pages_cache.get(page, [])

    def find(self, text: str, whole_line: bool = False) -> Optional[Tuple[int, int]]:
        """
        Find first occurrence of text in the document.

        Args:
            text: Text to search for (normalized: lowercase, alphanumeric only)
            whole_line: If True, text must match entire line. If False, substring match.

        Returns:
            Tuple of (page, line_index) for first match, or None.
        """
        self._ensure_loaded()
        text_norm = normalize_for_matching(text)

        for page_num in sorted(self._pages_cache.keys()):
            for line_idx, line in enumerate(self._pages_cache[page_num]):
                line_norm = normalize_for_matching(line)
                match = (text_norm == line_norm) if whole_line else (text_norm in line_norm)
                if match:
                    return page_num, line_idx

        return None
