"""Custom exceptions for the rendering context."""

from typing import Optional


class MeasurementError(Exception):
    """
    Exception raised when text width cannot be measured.

    Layout cannot fall back to a guessed width: a wrong width silently corrupts
    wrapping, so this is always fatal for the layout run.

    Attributes:
        message: Error description
        text: The string that failed to measure
        size: Font size requested
        original_error: The error raised by the measuring function
    """

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        size: Optional[float] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.text = text
        self.size = size
        self.original_error = original_error

        parts = [message]

        if text is not None:
            snippet = text[:80] + "..." if len(text) > 80 else text
            parts.append(f"Text: {snippet!r}")
        if size is not None:
            parts.append(f"Size: {size}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class LayoutConfigError(ValueError):
    """
    Exception raised when page geometry or style configuration is invalid.

    Raised for impossible geometry (no room for content), unknown presets and
    preset keys that don't exist in the configuration structure.
    """

    pass
