"""
Intake Context

Responsibilities:
- Extracts plain text from uploaded resume PDFs
- Validates the user's inputs (resume text, job offer) before generation

Owns: Text extraction, input validation
Never: Builds prompts or interprets model output
"""

from cvforge.contexts.intake.exceptions import ExtractionError, InputValidationError
from cvforge.contexts.intake.extractor import (
    MIN_JOB_OFFER_LENGTH,
    extract_text,
    extract_text_from_file,
    validate_inputs,
)

__all__ = [
    "extract_text",
    "extract_text_from_file",
    "validate_inputs",
    "MIN_JOB_OFFER_LENGTH",
    "ExtractionError",
    "InputValidationError",
]
