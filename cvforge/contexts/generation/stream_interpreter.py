"""
Incremental interpretation of a streamed structured-output response.

The model streams a single JSON object in arbitrarily split text chunks. After
each chunk the whole accumulated buffer is re-parsed; the buffer is exposed as
raw progress text until it parses and validates as a StructuredDocument.

The interpreter is a state machine with a pure transition function:

    EMPTY --chunk--> PARTIAL <--chunk--> COMPLETE
                        \\                  /
                         `--- finalize ---'--> COMPLETE (finished) | INVALID (finished)

Re-parsing the whole buffer on every chunk costs O(n) per chunk and O(n^2)
over the stream. A parse is skipped when the buffer cannot possibly hold a
complete object (it does not end with '}'), which leaves the observable
states unchanged; parse_attempts counts the parses actually performed.
"""

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from cvforge.contexts.generation.document import StructuredDocument
from cvforge.contexts.generation.exceptions import (
    IncompleteStreamError,
    InvalidOutputError,
    StreamClosedError,
)


class StreamStatus(str, Enum):
    """Parse status of the accumulated stream."""

    EMPTY = "empty"
    PARTIAL = "partial"
    COMPLETE = "complete"
    INVALID = "invalid"


@dataclass(frozen=True)
class StreamState:
    """
    Snapshot of the interpreter after a chunk.

    Attributes:
        status: Current parse status
        buffer: Everything received so far, in arrival order
        document: The validated document (COMPLETE only)
        error: Why the buffer is not (yet) a document, from the last parse
        error_path: JSON path of the offending value, for schema failures
        parse_attempts: Number of full-buffer parses performed so far
        finished: True once the stream has ended; no more chunks are accepted
    """

    status: StreamStatus = StreamStatus.EMPTY
    buffer: str = ""
    document: Optional[StructuredDocument] = None
    error: Optional[str] = None
    error_path: Optional[str] = None
    parse_attempts: int = 0
    finished: bool = False

    @property
    def raw_text(self) -> str:
        """Accumulated text, suitable for display as a progress indicator."""
        return self.buffer

    @property
    def is_complete(self) -> bool:
        return self.status is StreamStatus.COMPLETE


INITIAL_STATE = StreamState()


def _could_be_complete(buffer: str) -> bool:
    return buffer.rstrip().endswith("}")


def _parse(buffer: str) -> StructuredDocument:
    """Parse and validate the whole buffer. Raises InvalidOutputError."""
    try:
        data = json.loads(buffer)
    except json.JSONDecodeError as e:
        raise InvalidOutputError(f"Not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})")
    return StructuredDocument.from_dict(data)


def _reparse(state: StreamState, buffer: str, finished: bool) -> StreamState:
    """Parse buffer and return the resulting state, failures mapped to failed_status."""
    failed_status = StreamStatus.INVALID if finished else StreamStatus.PARTIAL
    attempts = state.parse_attempts + 1

    try:
        document = _parse(buffer)
    except InvalidOutputError as e:
        return replace(
            state,
            status=failed_status,
            buffer=buffer,
            document=None,
            error=e.message,
            error_path=e.path,
            parse_attempts=attempts,
            finished=finished,
        )

    return replace(
        state,
        status=StreamStatus.COMPLETE,
        buffer=buffer,
        document=document,
        error=None,
        error_path=None,
        parse_attempts=attempts,
        finished=finished,
    )


def transition(state: StreamState, chunk: str) -> StreamState:
    """
    Feed one chunk and return the next state.

    Never raises for truncated or malformed content: anything that does not yet
    parse and validate is PARTIAL.

    Raises:
        StreamClosedError: If the state has already been finalized
    """
    if state.finished:
        raise StreamClosedError("Stream already finished; start from a fresh state")

    buffer = state.buffer + chunk
    if not buffer:
        return state

    if not _could_be_complete(buffer):
        return replace(
            state,
            status=StreamStatus.PARTIAL,
            buffer=buffer,
            document=None,
            error=None,
            error_path=None,
        )

    return _reparse(state, buffer, finished=False)


def finalize(state: StreamState) -> StreamState:
    """
    Mark the stream as ended and return the terminal state.

    The result is COMPLETE if the buffer holds a valid document, INVALID otherwise
    (including an empty stream). No repair of the buffer is attempted.
    """
    if state.finished:
        return state

    if state.status is StreamStatus.COMPLETE:
        return replace(state, finished=True)

    if state.status is StreamStatus.EMPTY:
        return replace(
            state, status=StreamStatus.INVALID, error="No output received", finished=True
        )

    if state.error is not None:
        # Last chunk already triggered a parse of this exact buffer
        return replace(state, status=StreamStatus.INVALID, finished=True)

    return _reparse(state, state.buffer, finished=True)


class StreamInterpreter:
    """
    Stateful wrapper around transition() for one generation attempt.

    Example:
        >>> interpreter = StreamInterpreter()
        >>> for chunk in chunks:
        ...     state = interpreter.interpret(chunk)
        ...     show_progress(state.raw_text)
        >>> document = interpreter.finish()
    """

    def __init__(self):
        self.state = INITIAL_STATE

    def interpret(self, chunk: str) -> StreamState:
        """Append a chunk and return the best-known parse state."""
        self.state = transition(self.state, chunk)
        return self.state

    def finish(self) -> StructuredDocument:
        """
        End the stream and return the document.

        Raises:
            IncompleteStreamError: If nothing was received
            InvalidOutputError: If the output does not parse or fails validation
        """
        self.state = finalize(self.state)

        if self.state.status is StreamStatus.COMPLETE:
            return self.state.document
        if not self.state.buffer:
            raise IncompleteStreamError("Stream ended before any output was received")

        raise InvalidOutputError(
            self.state.error, path=self.state.error_path, raw_text=self.state.buffer
        )
