"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
"""

from pathlib import Path

from loguru import logger

from cvforge.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path) -> Path:
    """Setup logger for intake context. Returns path to log file."""
    return _setup_logger(context_name="intake", log_dir=log_dir)


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_extraction_result(source: str, text: str) -> None:
    """Log the size of the extracted text, warning when nothing came out."""
    if not text.strip():
        _log_warning(f"No text extracted from {source} (scanned PDFs are not supported)")
        return
    _log_info(f"Extracted {len(text)} characters from {source}")
    _log_debug(f"  Lines: {text.count(chr(10)) + 1}")
