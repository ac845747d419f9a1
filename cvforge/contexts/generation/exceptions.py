"""Custom exceptions for the generation context."""

from typing import Optional

# Characters of raw model output quoted in error messages
SNIPPET_LENGTH = 200


class GenerationError(Exception):
    """Base class for terminal failures of a generation attempt."""

    pass


class IncompleteStreamError(GenerationError):
    """
    Raised when the stream ended (or broke) before a valid document was produced.

    Attributes:
        message: Error description
        received_chars: Number of characters received before the stream ended
        original_error: The transport error, when the stream failed rather than ended
    """

    def __init__(
        self,
        message: str,
        received_chars: int = 0,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.received_chars = received_chars
        self.original_error = original_error

        parts = [message, f"Received: {received_chars} characters"]
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class InvalidOutputError(GenerationError):
    """
    Raised when the complete model output does not parse or fails schema validation.

    Attributes:
        message: Error description
        path: JSON path of the offending value (e.g., 'sections[2].heading')
        raw_text: The model output that failed, when available
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        raw_text: Optional[str] = None,
    ):
        self.message = message
        self.path = path
        self.raw_text = raw_text

        parts = [message]
        if path:
            parts.append(f"At: {path}")

        if raw_text:
            snippet = raw_text[:SNIPPET_LENGTH] + "..." if len(raw_text) > SNIPPET_LENGTH else raw_text
            parts.append(f"\nModel output:\n{snippet}")

        super().__init__("\n".join(parts))


class StreamClosedError(RuntimeError):
    """Raised when a chunk is fed to a stream that has already been finalized."""

    pass
