"""
Web page fetcher.

Fetches a page over plain HTTP and reduces it to whitespace-normalized text.
Main-content extraction is done by trafilatura; pages it cannot extract from
(short fragments, listing pages) fall back to the full visible text parsed by
BeautifulSoup. No JavaScript rendering.

Dependencies: httpx, trafilatura, beautifulsoup4
System role: Source data adapter for page ingestion
"""

import logging
import re

import httpx
import trafilatura
from bs4 import BeautifulSoup

from craftsman_rag.core.exceptions import SourceAPIError

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


def _visible_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    return soup.get_text(" ")


def clean_html(html: str) -> str:
    """Extract readable text from ``html`` and collapse whitespace. Entities are decoded."""
    if not html or not html.strip():
        return ""
    text = trafilatura.extract(html, include_comments=False, include_tables=False)
    if not text:
        text = _visible_text(html)
    return _WS_RE.sub(" ", text).strip()


class PageFetcher:
    """Blocking HTTP page fetcher."""

    def __init__(self, timeout: float = 30.0, http_client: httpx.Client | None = None) -> None:
        self._client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        self._client.close()

    def fetch_text(self, url: str) -> str:
        """
        Fetch ``url`` and return its cleaned text.

        Raises:
            SourceAPIError: If the page cannot be fetched
        """
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SourceAPIError(
                "Page returned an error status",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise SourceAPIError("Page fetch failed", url=url, details={"error": str(e)}) from e

        text = clean_html(response.text)
        logger.info(f"{__name__}:fetch_text - Fetched {url} ({len(text)} chars after cleanup)")
        return text
