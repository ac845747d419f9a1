"""
Per-command logging with a provenance header.

Every CLI command logs to its own directory: a DEBUG file sink for the full
record and an INFO console sink for progress. The file starts with a header
saying which cvforge version ran what, so a log can be tied back to its run.

Context-specific wrappers live in contexts/{context}/logger.py and pass their
own header entries (LLM provider, layout presets) through extra_provenance.
"""

import platform
import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from cvforge import __version__
from cvforge.utils.timestamp import now

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"

HEADER_RULE = "=" * 80


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Route loguru output to a fresh log file plus the console.

    Replaces any previously configured sinks, so the last context set up in a
    process owns the log.

    Args:
        context_name: Context identifier, also the log file stem (e.g., "render")
        log_dir: Directory for this command's logs (created if missing)
        extra_provenance: Context-specific header entries

    Returns:
        Path to log file

    Example:
        >>> setup_logger("render", Path("outs/logs/render_20261019_123456"),
        ...              extra_provenance={"Layout presets": "page_letter"})
        PosixPath('outs/logs/render_20261019_123456/render.log')
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(provenance(context_name, extra_provenance))

    return log_file


def provenance(context_name: str, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Header entries for a run: version, context, command line and environment."""
    header = {
        "cvforge": __version__,
        "Context": context_name,
        "Started": now(),
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": platform.python_version(),
    }
    for key, value in (extra or {}).items():
        header[key] = str(value)
    return header


def log_provenance(header: Dict[str, str]) -> None:
    """Log header entries between rules, keys aligned."""
    width = max(len(key) for key in header)

    logger.info(HEADER_RULE)
    for key, value in header.items():
        logger.info(f"{key:<{width}} : {value}")
    logger.info(HEADER_RULE)
