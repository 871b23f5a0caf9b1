"""divinehours.fetchers — swappable sources of the raw office page.

Any object with an ``async fetch_text()`` coroutine satisfies
:class:`OfficeFetcher`, so tests can hand the loader a fixed fixture instead
of the network::

    loader = OfficeLoader(StaticOfficeFetcher(html))
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from divinehours import settings
from divinehours.query import FetchError, decode_body, fetch_html

logger = logging.getLogger(__name__)


@runtime_checkable
class OfficeFetcher(Protocol):
    """Produces the page text, or raises :class:`~divinehours.query.FetchError`."""

    async def fetch_text(self) -> str:
        ...


class HttpOfficeFetcher:
    """Fetch the page over HTTP without blocking the event loop.

    Args:
        url:         Page URL (defaults to the configured source).
        timeout:     Per-request timeout in seconds.
        user_agent:  Optional User-Agent override.
        max_retries: Retries on transient errors.
        proxy:       Optional proxy URL.
    """

    def __init__(
        self,
        url: str = settings.SOURCE_URL,
        *,
        timeout: int = settings.DOWNLOAD_TIMEOUT,
        user_agent: str | None = None,
        max_retries: int = settings.RETRY_TIMES,
        proxy: str | None = None,
    ) -> None:
        self.url = url
        self._timeout = timeout
        self._user_agent = user_agent
        self._max_retries = max_retries
        self._proxy = proxy

    async def fetch_text(self) -> str:
        logger.info("Fetching %s", self.url)
        return await asyncio.to_thread(
            fetch_html,
            self.url,
            timeout=self._timeout,
            user_agent=self._user_agent,
            max_retries=self._max_retries,
            proxy=self._proxy,
        )


class FileOfficeFetcher:
    """Read a saved copy of the page from disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def fetch_text(self) -> str:
        try:
            raw = await asyncio.to_thread(self.path.read_bytes)
        except OSError as exc:
            raise FetchError(f"Could not read {self.path}: {exc}", url=str(self.path)) from exc
        return decode_body(raw, url=str(self.path))


class StaticOfficeFetcher:
    """Return a fixed HTML string; handy for tests and offline rendering."""

    def __init__(self, html: str) -> None:
        self._html = html

    async def fetch_text(self) -> str:
        return self._html
