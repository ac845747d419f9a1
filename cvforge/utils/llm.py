"""
LLM provider abstraction for streamed structured output.

Provides a provider-agnostic interface for streaming LLM text chunks and a
backoff helper for retrying whole operations on specific exceptions.
"""

import json
import os
import time
from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Retry configuration
MAX_RETRIES = 5
BASE_DELAY = 1.0

# Output budget for a full tailored CV
MAX_OUTPUT_TOKENS = 4096

T = TypeVar("T")


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: type[Exception],
    error_message: str,
    max_attempts: int = MAX_RETRIES,
    base_delay: float = BASE_DELAY,
) -> T:
    """
    Execute operation with exponential backoff retry on specific exception.

    Args:
        operation: Callable that performs the whole operation and returns result
        retryable_exception: Exception type that triggers retry
        error_message: Message prefix for retry logging (e.g., "Generation failed")
        max_attempts: Total number of attempts (1 disables retries)
        base_delay: Delay before the second attempt, doubled on each further attempt
    """
    for attempt in range(max_attempts):
        try:
            return operation()
        except retryable_exception as e:
            if attempt == max_attempts - 1:
                raise
            delay = base_delay * (2**attempt)
            logger.warning(
                f"{error_message} ({e}), retrying in {delay:.1f}s... "
                f"(attempt {attempt + 1}/{max_attempts})"
            )
            time.sleep(delay)


# --- LLM Provider Classes ---


class LLMProvider(ABC):
    """
    Abstract base for streaming LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "anthropic", "openai")
    - Implement _stream_api() yielding text chunks in arrival order
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str

    name: str
    model: str

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _stream_api(self, system_prompt: str, user_prompt: str, schema: dict) -> Iterator[str]:
        """Open a single streamed API call (no retries). Implemented by subclasses."""
        pass

    def stream(self, system_prompt: str, user_prompt: str, schema: dict) -> Iterator[str]:
        """
        Stream the model's response as text chunks.

        Chunk boundaries are arbitrary: a JSON token may be split across chunks.
        Retrying is left to the caller, at the granularity of a whole request.
        """
        for chunk in self._stream_api(system_prompt, user_prompt, schema):
            if chunk:
                yield chunk


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider. The output schema is passed in the system prompt."""

    _provider_prefix = "anthropic"

    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        # Lazy import - anthropic SDK is heavy, only load if this provider is used
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install anthropic")

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(api_key=api_key)
        self.update_model(model)

    def _stream_api(self, system_prompt: str, user_prompt: str, schema: dict) -> Iterator[str]:
        system = (
            f"{system_prompt}\n\n"
            "Respond with a single JSON object only, no prose and no code fences, "
            f"matching this JSON schema:\n{json.dumps(schema, indent=2)}"
        )
        with self.client.messages.stream(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            system=system,
            messages=[{"role": "user", "content": user_prompt}],
        ) as stream:
            yield from stream.text_stream


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider using strict JSON-schema structured output."""

    _provider_prefix = "openai"

    def __init__(self, model: str = "gpt-4o-mini"):
        # Lazy import - openai SDK is heavy, only load if this provider is used
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.client = openai.OpenAI(api_key=api_key)
        self.update_model(model)

    def _stream_api(self, system_prompt: str, user_prompt: str, schema: dict) -> Iterator[str]:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {"name": "tailored_cv", "strict": True, "schema": schema},
            },
            stream=True,
        )
        for event in response:
            if not event.choices:
                continue
            content = event.choices[0].delta.content
            if content:
                yield content


# --- Provider Factory ---


def get_provider(provider_name: Optional[str] = None, model: Optional[str] = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: LLM_MODEL env var, else provider-specific default)

    Returns:
        LLMProvider instance
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "openai")
    provider_name = provider_name.lower()
    if model is None:
        model = os.getenv("LLM_MODEL") or None

    if provider_name == "anthropic":
        return AnthropicProvider(model=model) if model else AnthropicProvider()
    elif provider_name == "openai":
        return OpenAIProvider(model=model) if model else OpenAIProvider()
    else:
        raise ValueError(f"Unknown provider: {provider_name}. Use 'anthropic' or 'openai'")
