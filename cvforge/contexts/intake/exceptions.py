"""Custom exceptions for the intake context."""

from typing import Optional


class ExtractionError(Exception):
    """
    Exception raised when text cannot be extracted from an uploaded document.

    Attributes:
        message: Error description
        source: Name or path of the document, when known
        original_error: The underlying parser error
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.source = source
        self.original_error = original_error

        parts = [message]
        if source:
            parts.append(f"Source: {source}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class InputValidationError(ValueError):
    """Raised when the resume text or job offer is missing or too short to tailor against."""

    pass
