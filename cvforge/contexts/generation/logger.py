"""
Generation context logger.

Provides logging interface for generation context with automatic [generate] prefix.
All generation modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvforge.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[generate]"


def setup_generation_logger(log_dir: Path, provider_name: str = None) -> Path:
    """
    Setup logger for generation context.

    Args:
        log_dir: Directory for this generation session
        provider_name: Provider/model identifier recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="generate",
        log_dir=log_dir,
        extra_provenance={"LLM provider": provider_name} if provider_name else None,
    )


# Wrapper functions with automatic [generate] prefix


def _log_info(message: str) -> None:
    """Log info message with [generate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [generate] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [generate] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [generate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level generation-specific logging helpers


def log_generation_start(provider_name: str, cv_chars: int, job_offer_chars: int, attempt: int) -> None:
    """Log start of a generation attempt with context."""
    _log_info(f"Starting generation with {provider_name} (attempt {attempt})")
    _log_debug(f"  CV text: {cv_chars} characters")
    _log_debug(f"  Job offer: {job_offer_chars} characters")


def log_stream_result(state, chunk_count: int, elapsed_time: float) -> None:
    """
    Log the outcome of a consumed stream.

    Args:
        state: Terminal StreamState from the interpreter
        chunk_count: Number of chunks received
        elapsed_time: Time spent streaming, in seconds
    """
    _log_debug(
        f"  Stream: {chunk_count} chunks, {len(state.buffer)} characters, "
        f"{state.parse_attempts} parse attempts"
    )

    if state.is_complete:
        document = state.document
        _log_success(
            f"Generated CV for '{document.full_name}': "
            f"{len(document.sections)} sections ({elapsed_time:.2f}s)"
        )
    else:
        _log_error(f"Generation failed ({elapsed_time:.2f}s): {state.error}")
        if state.buffer:
            # Raw model output verbatim, without the format template on every line
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nMODEL OUTPUT:\n{'=' * 80}\n{state.buffer}\n"
            )
