"""
Generation orchestration: stream a tailored CV from an LLM and interpret it.
"""

import time
from typing import Callable, Iterable, Optional

from cvforge.contexts.generation.document import DOCUMENT_SCHEMA, StructuredDocument
from cvforge.contexts.generation.exceptions import GenerationError, IncompleteStreamError
from cvforge.contexts.generation.logger import log_generation_start, log_stream_result
from cvforge.contexts.generation.prompts import SYSTEM_PROMPT, build_tailoring_prompt
from cvforge.contexts.generation.stream_interpreter import StreamInterpreter, StreamState
from cvforge.contexts.intake import validate_inputs
from cvforge.utils.llm import BASE_DELAY, LLMProvider, _retry_with_backoff, get_provider

UpdateCallback = Callable[[StreamState], None]


def interpret_stream(
    chunks: Iterable[str], on_update: Optional[UpdateCallback] = None
) -> StructuredDocument:
    """
    Consume a chunk stream in arrival order and return the final document.

    Args:
        chunks: Text chunks, e.g. from LLMProvider.stream()
        on_update: Called with the interpreter state after every chunk

    Returns:
        The validated StructuredDocument

    Raises:
        IncompleteStreamError: If the stream fails or ends before any output
        InvalidOutputError: If the final output does not parse or validate
    """
    interpreter = StreamInterpreter()
    chunk_count = 0
    start_time = time.time()

    iterator = iter(chunks)
    while True:
        try:
            chunk = next(iterator)
        except StopIteration:
            break
        except Exception as e:
            log_stream_result(interpreter.state, chunk_count, time.time() - start_time)
            raise IncompleteStreamError(
                "Stream failed before a valid document was produced",
                received_chars=len(interpreter.state.buffer),
                original_error=e,
            ) from e

        chunk_count += 1
        state = interpreter.interpret(chunk)
        if on_update is not None:
            on_update(state)

    try:
        return interpreter.finish()
    finally:
        log_stream_result(interpreter.state, chunk_count, time.time() - start_time)


def generate_document(
    cv_text: str,
    job_offer: str,
    provider: Optional[LLMProvider] = None,
    on_update: Optional[UpdateCallback] = None,
    max_attempts: int = 1,
    base_delay: float = BASE_DELAY,
) -> StructuredDocument:
    """
    Generate a CV tailored to a job offer.

    Each attempt streams a fresh response into a fresh interpreter; a failed
    attempt is discarded entirely. Retries happen only at this whole-attempt level.

    Args:
        cv_text: Text extracted from the candidate's existing CV
        job_offer: The job listing
        provider: LLM provider (default: get_provider() from environment)
        on_update: Called with the interpreter state after every chunk
        max_attempts: Total attempts before the last GenerationError is raised
        base_delay: Backoff delay before the second attempt, in seconds

    Returns:
        The validated StructuredDocument

    Raises:
        InputValidationError: If either input is unusable
        GenerationError: If the last attempt fails

    Example:
        >>> document = generate_document(cv_text, job_offer, on_update=lambda s: print(s.raw_text))
    """
    validate_inputs(cv_text, job_offer)

    if provider is None:
        provider = get_provider()

    user_prompt = build_tailoring_prompt(cv_text, job_offer)
    attempt_number = 0

    def attempt() -> StructuredDocument:
        nonlocal attempt_number
        attempt_number += 1
        log_generation_start(provider.name, len(cv_text), len(job_offer), attempt_number)
        chunks = provider.stream(SYSTEM_PROMPT, user_prompt, DOCUMENT_SCHEMA)
        return interpret_stream(chunks, on_update=on_update)

    return _retry_with_backoff(
        attempt,
        GenerationError,
        "Generation failed",
        max_attempts=max_attempts,
        base_delay=base_delay,
    )
