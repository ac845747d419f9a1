"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Timestamp for directory names, e.g. '20261019_184540'."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today() -> str:
    """Date for dated result directories, e.g. '2026-10-19'."""
    return datetime.now().strftime("%Y-%m-%d")
