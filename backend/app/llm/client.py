"""AI client for explanations, summaries and related sources with OpenAI integration.

Security: Reads API key from environment only, never hardcoded.
Provides a deterministic stub when no key is present for local runs and tests.
"""

import json
import logging
from typing import Any, Protocol, TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from backend.app.config import Settings, get_settings
from backend.app.errors import RemoteServiceError
from backend.app.models.ai import Explanation, SourceList, Summary
from backend.app.remote.executor import RemoteCallContext, RemoteCallExecutor

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

EXPLAIN_SYSTEM_PROMPT = (
    "You are a helpful assistant that explains complex concepts clearly and concisely. "
    "Format your response as JSON with the following structure: "
    "{ 'explanation': string, 'key_points': array of strings, "
    "'additional_resources'?: array of objects with title and description }."
)

SUMMARIZE_SYSTEM_PROMPT = (
    "You are a helpful assistant that summarizes text concisely while preserving key "
    "information and main points. Provide clear, well-structured summaries."
)

SOURCES_SYSTEM_PROMPT = (
    "You are a helpful research assistant. When given a topic or text, suggest related "
    "academic sources, articles, or books that would help the user learn more. Format your "
    "response as JSON with the structure: { 'sources': array of objects with title, author, "
    "year, and brief description }."
)


def trim_text(text: str, max_chars: int) -> str:
    """Trim text to ``max_chars`` characters, marking the cut with an ellipsis."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


class AIClient(Protocol):
    """Protocol for AI client implementations."""

    async def explain(self, text: str) -> Explanation:
        """Explain a text selection.

        Args:
            text: Selected text

        Returns:
            Explanation with prose, key points and optional resources

        Raises:
            RemoteServiceError: The AI call failed or returned an invalid payload
        """
        ...

    async def summarize(self, text: str) -> str:
        """Summarize a text.

        Args:
            text: Plain text to summarize

        Returns:
            Summary prose

        Raises:
            RemoteServiceError: The AI call failed
        """
        ...

    async def find_sources(self, text: str) -> SourceList:
        """Suggest related sources for a text.

        Args:
            text: Topic or passage

        Returns:
            SourceList of suggested reading

        Raises:
            RemoteServiceError: The AI call failed or returned an invalid payload
        """
        ...


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required)."""

    async def explain(self, text: str) -> Explanation:
        """Generate deterministic stub explanation."""
        preview = trim_text(text, 80)
        return Explanation(
            explanation=f"This passage says: {preview}",
            key_points=[f"Key point (stub): {preview}"],
            additional_resources=None,
        )

    async def summarize(self, text: str) -> str:
        """Generate deterministic stub summary."""
        word_count = len(text.split())
        return f"Summary of a {word_count}-word text (stub): {trim_text(text, 200)}"

    async def find_sources(self, text: str) -> SourceList:
        """Generate deterministic stub source list."""
        return SourceList(sources=[])


class OpenAIClient:
    """OpenAI-backed AI client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        *,
        timeout_seconds: float = 30.0,
        summary_max_chars: int = 12000,
        executor: RemoteCallExecutor | None = None,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use
            timeout_seconds: Hard timeout per call
            summary_max_chars: Summaries see at most this many characters of input
            executor: Optional remote call executor
        """
        # Failed calls are surfaced to the user, never retried
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout_seconds, max_retries=0)
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.summary_max_chars = summary_max_chars
        self._executor = executor or RemoteCallExecutor()

    async def explain(self, text: str) -> Explanation:
        """Explain a text selection using OpenAI JSON mode."""
        content = await self._complete(
            "explain",
            system_prompt=EXPLAIN_SYSTEM_PROMPT,
            user_prompt=(
                f"Please explain the following text in a clear, educational manner:\n\n{text}"
            ),
            json_mode=True,
        )
        return self._parse_json("explain", content, Explanation)

    async def summarize(self, text: str) -> str:
        """Summarize text using OpenAI."""
        trimmed = trim_text(text, self.summary_max_chars)
        content = await self._complete(
            "summarize",
            system_prompt=SUMMARIZE_SYSTEM_PROMPT,
            user_prompt=f"Please summarize the following text:\n\n{trimmed}",
            json_mode=False,
        )
        return Summary(summary=content).summary

    async def find_sources(self, text: str) -> SourceList:
        """Suggest related sources using OpenAI JSON mode."""
        content = await self._complete(
            "find_sources",
            system_prompt=SOURCES_SYSTEM_PROMPT,
            user_prompt=(
                f"Please suggest related sources for further reading on this topic:\n\n{text}"
            ),
            json_mode=True,
        )
        return self._parse_json("find_sources", content, SourceList)

    async def _complete(
        self, operation: str, *, system_prompt: str, user_prompt: str, json_mode: bool
    ) -> str:
        """Run one chat completion and return its non-empty message content."""
        ctx = RemoteCallContext(service="openai", operation=operation, target=self.model)

        async def call() -> str:
            kwargs: dict[str, Any] = {}
            if json_mode:
                kwargs["response_format"] = {"type": "json_object"}

            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **kwargs,
            )
            return response.choices[0].message.content or ""

        content = await self._executor.execute(ctx, call, self.timeout_seconds)

        if not content.strip():
            logger.warning(f"OpenAI returned empty response for {operation}")
            raise RemoteServiceError(
                "empty response", service="openai", operation=operation, target=self.model
            )

        return content

    def _parse_json(self, operation: str, content: str, model: type[ResultT]) -> ResultT:
        """Validate a JSON-mode response into a typed result."""
        try:
            return model.model_validate(json.loads(content))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.error(f"OpenAI returned an invalid {operation} payload: {e}")
            raise RemoteServiceError(
                "invalid response payload",
                service="openai",
                operation=operation,
                target=self.model,
            ) from e


def get_ai_client(settings: Settings | None = None) -> AIClient:
    """Factory function to get appropriate AI client based on config.

    Args:
        settings: Settings to read the key, model and limits from
            (default: environment-derived settings)

    Returns:
        OpenAIClient if API key is configured, DeterministicStubClient otherwise
    """
    settings = settings or get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client")
        return OpenAIClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            timeout_seconds=settings.ai_timeout_seconds,
            summary_max_chars=settings.summary_max_chars,
        )
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub client")
        return DeterministicStubClient()
