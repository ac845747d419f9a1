"""
Generation Context

Responsibilities:
- Builds the tailoring prompt and the output schema handed to the LLM
- Streams the model's response through the structured stream interpreter
- Validates the final output into a StructuredDocument

Owns: Prompting, structured-output consumption, document model
Never: Lays out or renders the document
"""

from cvforge.contexts.generation.document import DOCUMENT_SCHEMA, Section, StructuredDocument
from cvforge.contexts.generation.exceptions import (
    GenerationError,
    IncompleteStreamError,
    InvalidOutputError,
    StreamClosedError,
)
from cvforge.contexts.generation.generator import generate_document, interpret_stream
from cvforge.contexts.generation.stream_interpreter import (
    StreamInterpreter,
    StreamState,
    StreamStatus,
    finalize,
    transition,
)

__all__ = [
    # Document model
    "StructuredDocument",
    "Section",
    "DOCUMENT_SCHEMA",
    # Stream interpretation
    "StreamInterpreter",
    "StreamState",
    "StreamStatus",
    "transition",
    "finalize",
    # Orchestration
    "generate_document",
    "interpret_stream",
    # Errors
    "GenerationError",
    "IncompleteStreamError",
    "InvalidOutputError",
    "StreamClosedError",
]
