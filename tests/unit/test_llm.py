"""
Unit tests for the LLM utilities that don't need a network connection.
"""

import pytest

from cvforge.utils.llm import LLMProvider, _retry_with_backoff, get_provider


class FlakyOperation:
    def __init__(self, failures, exception=ConnectionError):
        self.failures = failures
        self.exception = exception
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exception(f"failure {self.calls}")
        return "done"


class EchoProvider(LLMProvider):
    _provider_prefix = "echo"

    def __init__(self, chunks):
        self.chunks = chunks
        self.update_model("v1")

    def _stream_api(self, system_prompt, user_prompt, schema):
        yield from self.chunks


@pytest.mark.unit
class TestRetryWithBackoff:
    """Tests for _retry_with_backoff()."""

    def test_succeeds_after_failures(self):
        operation = FlakyOperation(failures=2)
        assert _retry_with_backoff(operation, ConnectionError, "Op failed", base_delay=0) == "done"
        assert operation.calls == 3

    def test_raises_last_error_when_attempts_exhausted(self):
        operation = FlakyOperation(failures=5)

        with pytest.raises(ConnectionError, match="failure 3"):
            _retry_with_backoff(operation, ConnectionError, "Op failed", max_attempts=3, base_delay=0)

    def test_other_exceptions_propagate_immediately(self):
        operation = FlakyOperation(failures=1, exception=KeyError)

        with pytest.raises(KeyError):
            _retry_with_backoff(operation, ConnectionError, "Op failed", base_delay=0)
        assert operation.calls == 1

    def test_single_attempt_does_not_retry(self):
        operation = FlakyOperation(failures=1)

        with pytest.raises(ConnectionError):
            _retry_with_backoff(operation, ConnectionError, "Op failed", max_attempts=1)
        assert operation.calls == 1


@pytest.mark.unit
class TestLLMProvider:
    """Tests for the provider base class and factory."""

    def test_name_combines_prefix_and_model(self):
        provider = EchoProvider([])
        assert provider.name == "echo/v1"

        provider.update_model("v2")
        assert provider.name == "echo/v2"

    def test_stream_drops_empty_chunks(self):
        provider = EchoProvider(["{", "", "}", None])
        assert list(provider.stream("system", "user", {})) == ["{", "}"]

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            get_provider("cohere")

    def test_missing_api_key(self, monkeypatch):
        pytest.importorskip("openai")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            get_provider("openai")
