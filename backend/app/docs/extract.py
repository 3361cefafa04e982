"""Web content extraction using readability-lxml.

Fetches a URL with httpx, runs the readability algorithm over the page and
returns the article body as HTML together with its title and an estimated
reading time.
"""

import asyncio
import logging
import math
from typing import Protocol

import httpx
from bs4 import BeautifulSoup
from readability import Document as ReadabilityDocument
from readability.readability import Unparseable

from backend.app.errors import ExtractionError
from backend.app.models.docs import ExtractedArticle
from backend.app.remote.executor import RemoteCallContext, RemoteCallExecutor

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ReadAI/1.0; +https://readai.app)"
DEFAULT_WORDS_PER_MINUTE = 200


class ContentExtractor(Protocol):
    """Protocol for content extractor implementations."""

    async def extract(self, url: str) -> ExtractedArticle:
        """Extract a readable article from a URL.

        Args:
            url: Page to fetch

        Returns:
            ExtractedArticle with HTML content, title and reading time

        Raises:
            ExtractionError: Fetch failed or no article could be found
        """
        ...


def html_to_text(html: str) -> str:
    """Get the visible text of an HTML fragment, whitespace-collapsed."""
    soup = BeautifulSoup(html, "lxml")
    return " ".join(soup.get_text(" ").split())


def estimate_reading_time(text: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    """Estimate reading time in whole minutes, never less than one."""
    word_count = len(text.split())
    return max(1, math.ceil(word_count / words_per_minute))


def parse_article(
    html: str, url: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
) -> ExtractedArticle:
    """Run readability over a fetched page.

    Raises:
        ExtractionError: Page is unparseable or has no article body
    """
    try:
        doc = ReadabilityDocument(html, url=url)
        content = doc.summary(html_partial=True)
        title = doc.short_title() or doc.title()
    except Unparseable as e:
        raise ExtractionError(url, "unparseable article") from e

    text = html_to_text(content)
    if not text:
        raise ExtractionError(url, "no article body")

    return ExtractedArticle(
        content=content,
        title=title or url,
        estimated_read_time=estimate_reading_time(text, words_per_minute),
    )


class ReadabilityExtractor:
    """httpx + readability-lxml backed content extractor."""

    def __init__(
        self,
        *,
        timeout_seconds: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
        client: httpx.AsyncClient | None = None,
        executor: RemoteCallExecutor | None = None,
    ) -> None:
        """Initialize extractor.

        Args:
            timeout_seconds: Hard timeout for fetch plus parse
            user_agent: User-Agent header sent with the fetch
            words_per_minute: Reading speed used for the time estimate
            client: Optional httpx client (for testing with mocks)
            executor: Optional remote call executor
        """
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent
        self._words_per_minute = words_per_minute
        self._client = client
        self._executor = executor or RemoteCallExecutor()

    async def extract(self, url: str) -> ExtractedArticle:
        """Extract a readable article from a URL."""
        ctx = RemoteCallContext(service="extractor", operation="extract", target=url)
        return await self._executor.execute(
            ctx,
            lambda: self._fetch_and_parse(url),
            self._timeout_seconds,
            error_factory=lambda reason: ExtractionError(url, reason),
        )

    async def _fetch_and_parse(self, url: str) -> ExtractedArticle:
        html = await self._fetch(url)
        # readability is CPU-bound; keep it off the event loop
        return await asyncio.to_thread(parse_article, html, url, self._words_per_minute)

    async def _fetch(self, url: str) -> str:
        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_seconds, follow_redirects=True)
            close_client = True

        try:
            response = await client.get(url, headers={"User-Agent": self._user_agent})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExtractionError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ExtractionError(url, type(e).__name__) from e
        finally:
            if close_client:
                await client.aclose()

        content_type = response.headers.get("content-type", "")
        if content_type and "html" not in content_type.lower():
            raise ExtractionError(url, f"unsupported content type {content_type!r}")

        return response.text
