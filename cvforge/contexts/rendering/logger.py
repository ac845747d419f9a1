"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import List, Optional

from loguru import logger

from cvforge.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, presets: Optional[List[str]] = None) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        presets: Layout presets in use, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Layout presets": ", ".join(presets) if presets else "defaults"},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(full_name: str, section_count: int, geometry) -> None:
    """Log start of rendering with context."""
    _log_info(f"Rendering CV for '{full_name}' ({section_count} sections)")
    _log_debug(
        f"  Page: {geometry.page_width}x{geometry.page_height}pt, margin {geometry.margin}pt"
    )


def log_layout_result(pages, elapsed_time: float) -> None:
    """Log page and line counts of a finished layout."""
    line_count = sum(len(page.text_ops) for page in pages)
    _log_info(f"Laid out {line_count} text lines on {len(pages)} page(s) ({elapsed_time:.3f}s)")
    for number, page in enumerate(pages, start=1):
        _log_debug(f"  Page {number}: {len(page.ops)} draw ops")


def log_verification_result(result, verbose: bool = False) -> None:
    """
    Log the result of verifying a written PDF.

    Args:
        result: VerificationResult from verify_rendered_pdf()
        verbose: Show every issue instead of the first few
    """
    if result.is_valid:
        _log_success(f"Verification passed: {result.page_count} page(s)")
        return

    _log_error(f"Verification failed: {len(result.issues)} issue(s)")
    issue_limit = len(result.issues) if verbose else 5
    for i, issue in enumerate(result.issues[:issue_limit], 1):
        _log_error(f"  Issue {i}: {issue}")
    if len(result.issues) > issue_limit:
        _log_error(f"  ... and {len(result.issues) - issue_limit} more issues")
