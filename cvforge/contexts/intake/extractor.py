"""
Resume text extraction and input validation.

Text extraction is deliberately thin: the PDF's text layer is read with
pdfplumber and returned as-is. No OCR is attempted.
"""

from pathlib import Path
from typing import Union

from cvforge.contexts.intake.exceptions import ExtractionError, InputValidationError
from cvforge.contexts.intake.logger import log_extraction_result
from cvforge.utils.pdf_processing import extract_plain_text

# Job offers at or below this length (after stripping) are rejected
MIN_JOB_OFFER_LENGTH = 20


def extract_text(pdf_bytes: bytes, source: str = "<upload>") -> str:
    """
    Extract plain text from raw PDF bytes.

    Args:
        pdf_bytes: Raw bytes of the uploaded PDF
        source: Name used in logs and error messages

    Returns:
        Extracted text

    Raises:
        ExtractionError: If the bytes are empty or cannot be parsed as a PDF
    """
    if not pdf_bytes:
        raise ExtractionError("Empty document", source=source)

    try:
        text = extract_plain_text(pdf_bytes)
    except Exception as e:
        raise ExtractionError(
            "Failed to parse PDF. Please ensure the file is a valid PDF.",
            source=source,
            original_error=e,
        ) from e

    log_extraction_result(source, text)
    return text


def extract_text_from_file(pdf_path: Union[str, Path]) -> str:
    """Read a PDF from disk and extract its text."""
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise ExtractionError("File not found", source=str(pdf_path))
    return extract_text(pdf_path.read_bytes(), source=pdf_path.name)


def validate_inputs(cv_text: str, job_offer: str) -> None:
    """
    Check that both generation inputs are usable.

    Raises:
        InputValidationError: If either input is blank, or the job offer is too short
    """
    if not cv_text or not cv_text.strip():
        raise InputValidationError("CV text is required (no text was extracted from the resume)")
    if not job_offer or not job_offer.strip():
        raise InputValidationError("Job offer is required")
    if len(job_offer.strip()) <= MIN_JOB_OFFER_LENGTH:
        raise InputValidationError(
            f"Job offer is too short ({len(job_offer.strip())} characters, "
            f"more than {MIN_JOB_OFFER_LENGTH} required)"
        )
