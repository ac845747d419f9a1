"""
Unit tests for generation orchestration.

Uses scripted in-memory providers, so no network or API keys are needed.
"""

import json

import pytest

from cvforge.contexts.generation.document import DOCUMENT_SCHEMA
from cvforge.contexts.generation.exceptions import (
    GenerationError,
    IncompleteStreamError,
    InvalidOutputError,
)
from cvforge.contexts.generation.generator import generate_document, interpret_stream
from cvforge.contexts.generation.stream_interpreter import StreamStatus
from cvforge.contexts.intake import InputValidationError

CV_TEXT = "Jane Doe\nData engineer at Acme since 2019.\nPython, SQL, Airflow."
JOB_OFFER = "Senior Data Engineer at Initech. Must know Python and Airflow."

DOCUMENT = {
    "fullName": "Jane Doe",
    "title": "Senior Data Engineer",
    "email": "jane@example.com",
    "phone": "",
    "location": "",
    "summary": "Data engineer with Airflow expertise.",
    "sections": [{"heading": "Experience", "content": "Acme - Data Engineer (2019-now)"}],
}
DOCUMENT_TEXT = json.dumps(DOCUMENT)


def chunked(text, size=9):
    return [text[i : i + size] for i in range(0, len(text), size)]


class ScriptedProvider:
    """Returns one scripted response per call to stream()."""

    name = "scripted/test"

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def stream(self, system_prompt, user_prompt, schema):
        self.calls.append((system_prompt, user_prompt, schema))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return iter(response)


def broken_stream(text, error):
    yield text
    raise error


@pytest.mark.unit
class TestInterpretStream:
    """Tests for interpret_stream()."""

    def test_returns_document(self):
        document = interpret_stream(chunked(DOCUMENT_TEXT))
        assert document.title == "Senior Data Engineer"

    def test_on_update_sees_every_chunk(self):
        states = []
        interpret_stream(chunked(DOCUMENT_TEXT), on_update=states.append)

        assert len(states) == len(chunked(DOCUMENT_TEXT))
        assert all(s.status is StreamStatus.PARTIAL for s in states[:-1])
        assert states[-1].status is StreamStatus.COMPLETE
        assert [len(s.raw_text) for s in states] == sorted(len(s.raw_text) for s in states)

    def test_transport_failure_is_incomplete(self):
        with pytest.raises(IncompleteStreamError) as exc_info:
            interpret_stream(broken_stream('{"fullName": "Ja', ConnectionError("reset")))

        assert exc_info.value.received_chars == len('{"fullName": "Ja')
        assert isinstance(exc_info.value.original_error, ConnectionError)

    def test_empty_stream_is_incomplete(self):
        with pytest.raises(IncompleteStreamError):
            interpret_stream([])

    def test_truncated_stream_is_invalid(self):
        with pytest.raises(InvalidOutputError):
            interpret_stream(chunked(DOCUMENT_TEXT[:-3]))


@pytest.mark.unit
class TestGenerateDocument:
    """Tests for generate_document()."""

    def test_single_attempt(self):
        provider = ScriptedProvider(chunked(DOCUMENT_TEXT))

        document = generate_document(CV_TEXT, JOB_OFFER, provider=provider)

        assert document.full_name == "Jane Doe"
        assert len(provider.calls) == 1

    def test_prompt_and_schema_are_sent(self):
        provider = ScriptedProvider(chunked(DOCUMENT_TEXT))
        generate_document(CV_TEXT, JOB_OFFER, provider=provider)

        system_prompt, user_prompt, schema = provider.calls[0]
        assert system_prompt
        assert CV_TEXT in user_prompt
        assert JOB_OFFER in user_prompt
        assert schema is DOCUMENT_SCHEMA

    def test_failed_attempt_is_retried_from_scratch(self):
        provider = ScriptedProvider(
            chunked(DOCUMENT_TEXT[:40]),
            chunked(DOCUMENT_TEXT),
        )
        states = []

        document = generate_document(
            CV_TEXT,
            JOB_OFFER,
            provider=provider,
            on_update=states.append,
            max_attempts=2,
            base_delay=0,
        )

        assert document.full_name == "Jane Doe"
        assert len(provider.calls) == 2
        # The second attempt starts from an empty buffer
        lengths = [len(state.raw_text) for state in states]
        restart = next(i for i in range(1, len(lengths)) if lengths[i] < lengths[i - 1])
        assert states[restart].raw_text == DOCUMENT_TEXT[:9]

    def test_last_error_raised_after_all_attempts(self):
        provider = ScriptedProvider(
            ["not json"],
            broken_stream("{", TimeoutError("timed out")),
        )

        with pytest.raises(IncompleteStreamError):
            generate_document(CV_TEXT, JOB_OFFER, provider=provider, max_attempts=2, base_delay=0)
        assert len(provider.calls) == 2

    def test_no_retry_by_default(self):
        provider = ScriptedProvider(["{}"], chunked(DOCUMENT_TEXT))

        with pytest.raises(GenerationError):
            generate_document(CV_TEXT, JOB_OFFER, provider=provider)
        assert len(provider.calls) == 1

    def test_non_generation_errors_are_not_retried(self):
        provider = ScriptedProvider(RuntimeError("bad API key"), chunked(DOCUMENT_TEXT))

        with pytest.raises(RuntimeError):
            generate_document(CV_TEXT, JOB_OFFER, provider=provider, max_attempts=3, base_delay=0)
        assert len(provider.calls) == 1

    @pytest.mark.parametrize(
        "cv_text, job_offer",
        [
            ("", JOB_OFFER),
            ("   \n", JOB_OFFER),
            (CV_TEXT, ""),
            (CV_TEXT, "Engineer wanted"),
            (CV_TEXT, " " * 10 + "x" * 20 + " " * 10),
        ],
    )
    def test_inputs_validated_before_calling_provider(self, cv_text, job_offer):
        provider = ScriptedProvider(chunked(DOCUMENT_TEXT))

        with pytest.raises(InputValidationError):
            generate_document(cv_text, job_offer, provider=provider)
        assert provider.calls == []
