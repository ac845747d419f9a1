"""
Unit tests for the intake context: extraction errors and input validation.
"""

import pytest

from cvforge.contexts.intake import (
    MIN_JOB_OFFER_LENGTH,
    ExtractionError,
    InputValidationError,
    extract_text,
    extract_text_from_file,
    validate_inputs,
)


@pytest.mark.unit
class TestExtractText:
    """Tests for extract_text() failure modes."""

    def test_empty_bytes(self):
        with pytest.raises(ExtractionError, match="Empty document"):
            extract_text(b"")

    def test_not_a_pdf(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract_text(b"this is plain text, not a PDF", source="resume.pdf")

        assert exc_info.value.message == "Failed to parse PDF. Please ensure the file is a valid PDF."
        assert exc_info.value.source == "resume.pdf"
        assert exc_info.value.original_error is not None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ExtractionError, match="File not found"):
            extract_text_from_file(tmp_path / "missing.pdf")


@pytest.mark.unit
class TestValidateInputs:
    """Tests for validate_inputs()."""

    def test_valid_inputs(self):
        validate_inputs("Some CV text", "x" * (MIN_JOB_OFFER_LENGTH + 1))

    def test_job_offer_at_threshold_rejected(self):
        with pytest.raises(InputValidationError, match="too short"):
            validate_inputs("Some CV text", "x" * MIN_JOB_OFFER_LENGTH)

    def test_whitespace_does_not_count(self):
        with pytest.raises(InputValidationError):
            validate_inputs("Some CV text", "   " + "x" * MIN_JOB_OFFER_LENGTH + "\n\n")

    def test_blank_cv_rejected(self):
        with pytest.raises(InputValidationError, match="CV text is required"):
            validate_inputs(" \n\t", "x" * 50)

    def test_missing_job_offer_rejected(self):
        with pytest.raises(InputValidationError, match="Job offer is required"):
            validate_inputs("Some CV text", "")

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            validate_inputs("", "")
