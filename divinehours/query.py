"""divinehours.query - fetch the Divine Hours page and extract the office.

Uses only the stdlib (``urllib``) for HTTP.

Basic usage::

    from divinehours.query import fetch

    office = fetch()
    print(office.title)
    for section in office.sections:
        print(section.title, section.citation)

Low-level access::

    from divinehours.query import fetch_html, extract

    html = fetch_html("https://www.a2cc.org/resources/pray-the-divine-hours")
    office = extract(html)
"""

from __future__ import annotations

import gzip
import logging
import random
import time
import urllib.error
import urllib.request
import zlib
from urllib.parse import urlparse

from divinehours import settings
from divinehours.extractors.citation import extract_citation
from divinehours.extractors.container import isolate_main_content
from divinehours.extractors.header import extract_header
from divinehours.extractors.normalize import normalize_content
from divinehours.extractors.sections import extract_section_fields, split_sections
from divinehours.items import Document, Section

logger = logging.getLogger(__name__)

DECODE_FAILURE_MESSAGE = "Failed to load content"


# ---------------------------------------------------------------------------
# Public exceptions
# ---------------------------------------------------------------------------

class FetchError(RuntimeError):
    """Raised when the page cannot be retrieved.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
        body   -- decoded error body, when the server sent one
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        status: int = 0,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body


class DecodeError(FetchError):
    """Raised when the page was retrieved but is not valid UTF-8 text."""

    def __init__(self, url: str = "") -> None:
        super().__init__(DECODE_FAILURE_MESSAGE, url=url)


# ---------------------------------------------------------------------------
# Body decoding
# ---------------------------------------------------------------------------

def _decompress(raw: bytes, headers: object | None, url: str) -> bytes:
    encoding = ""
    if headers is not None:
        getter = getattr(headers, "get", None)
        if getter is not None:
            encoding = str(getter("Content-Encoding", "") or "").lower().strip()

    try:
        if encoding == "gzip":
            return gzip.decompress(raw)
        if encoding in ("deflate", "zlib"):
            return zlib.decompress(raw)
    except (OSError, EOFError, zlib.error) as exc:
        raise FetchError(f"{encoding} decompression failed for {url}: {exc}", url=url) from exc
    return raw


def decode_body(raw: bytes, url: str = "") -> str:
    """Decode *raw* as strict UTF-8.

    Raises:
        DecodeError: If *raw* is not valid UTF-8.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.warning("Response from %s is not valid UTF-8: %s", url or "<local>", exc)
        raise DecodeError(url=url) from exc


# ---------------------------------------------------------------------------
# Low-level HTTP fetch
# ---------------------------------------------------------------------------

def fetch_html(
    url: str = settings.SOURCE_URL,
    *,
    timeout: int = settings.DOWNLOAD_TIMEOUT,
    user_agent: str | None = None,
    max_retries: int = settings.RETRY_TIMES,
    proxy: str | None = None,
) -> str:
    """Fetch *url* and return the response body as text.

    Retries up to *max_retries* times with jittered exponential backoff on
    transient errors (429, 500, 502, 503, 504, and network-level failures).

    Args:
        url:         Fully-qualified HTTP/HTTPS URL.
        timeout:     Request timeout in seconds.
        user_agent:  Override the configured User-Agent string.
        max_retries: Maximum number of retry attempts.
        proxy:       Optional proxy URL (e.g. ``"http://host:port"``).

    Returns:
        Response body decoded as UTF-8.

    Raises:
        DecodeError: If the body is not valid UTF-8.
        FetchError:  On HTTP errors, connection failures, or invalid URLs.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)

    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    if proxy:
        proxy_handler = urllib.request.ProxyHandler({"http": proxy, "https": proxy})
        _open = urllib.request.build_opener(proxy_handler).open
    else:
        _open = urllib.request.urlopen

    last_exc: FetchError | None = None
    for attempt in range(max_retries + 1):
        try:
            with _open(req, timeout=timeout) as resp:
                raw: bytes = resp.read()
                return decode_body(_decompress(raw, resp.headers, url), url=url)

        except urllib.error.HTTPError as exc:
            body_text = ""
            try:
                body_text = exc.read().decode("utf-8", errors="replace")
            except OSError:
                body_text = ""
            last_exc = FetchError(
                f"HTTP {exc.code} fetching {url}: {exc.reason}",
                url=url,
                status=exc.code,
                body=body_text,
            )
            if exc.code in settings.RETRY_HTTP_CODES and attempt < max_retries:
                retry_after = 0
                ra_header = exc.headers.get("Retry-After", "") if exc.headers else ""
                if ra_header and ra_header.strip().isdigit():
                    retry_after = min(int(ra_header), timeout)
                delay = max(retry_after, 2 ** attempt) + random.uniform(0, 1)
                logger.debug(
                    "HTTP %d for %s — retrying in %.1fs (attempt %d/%d)",
                    exc.code, url, delay, attempt + 1, max_retries,
                )
                time.sleep(delay)
                continue
            raise last_exc from exc

        except urllib.error.URLError as exc:
            last_exc = FetchError(f"URL error fetching {url}: {exc.reason}", url=url)
            if attempt < max_retries:
                delay = (2 ** attempt) + random.uniform(0, 1)
                logger.debug(
                    "URL error for %s — retrying in %.1fs (attempt %d/%d): %s",
                    url, delay, attempt + 1, max_retries, exc.reason,
                )
                time.sleep(delay)
                continue
            raise last_exc from exc

        except OSError as exc:
            last_exc = FetchError(f"Network error fetching {url}: {exc}", url=url)
            if attempt < max_retries:
                delay = (2 ** attempt) + random.uniform(0, 1)
                logger.debug(
                    "Network error for %s — retrying in %.1fs (attempt %d/%d): %s",
                    url, delay, attempt + 1, max_retries, exc,
                )
                time.sleep(delay)
                continue
            raise last_exc from exc

    raise last_exc or FetchError(f"All retries exhausted for {url}", url=url)


# ---------------------------------------------------------------------------
# Extraction (pure HTML -> Document, no network)
# ---------------------------------------------------------------------------

def extract(html: str) -> Document:
    """Extract the prayer office from *html* and return a :class:`Document`.

    Never raises on missing or malformed markup: a missing container falls
    back to the whole page, a missing title to the default one, and chunks
    without a heading are skipped.

    Args:
        html: Raw HTML string of the page.

    Returns:
        :class:`~divinehours.items.Document` with sections in page order.
    """
    region = isolate_main_content(html)
    header = extract_header(region)

    sections: list[Section] = []
    for chunk in split_sections(region):
        fields = extract_section_fields(chunk)
        if fields is None:
            continue
        sections.append(
            Section(
                title=fields.title,
                content=normalize_content(fields.raw_content, fields.title),
                citation=extract_citation(chunk),
            ),
        )

    logger.debug("Extracted %d section(s) for %r", len(sections), header.title)
    return Document(title=header.title, subtitle=header.subtitle, sections=tuple(sections))


# ---------------------------------------------------------------------------
# Main public API
# ---------------------------------------------------------------------------

def fetch(
    url: str = settings.SOURCE_URL,
    *,
    timeout: int = settings.DOWNLOAD_TIMEOUT,
    user_agent: str | None = None,
    max_retries: int = settings.RETRY_TIMES,
    proxy: str | None = None,
) -> Document:
    """Fetch *url* and return the extracted :class:`~divinehours.items.Document`.

    Raises:
        :class:`DecodeError`: If the page is not valid UTF-8.
        :class:`FetchError`:  If the page cannot be retrieved.

    Example::

        from divinehours.query import fetch

        office = fetch()
        print(office.title, len(office.sections))
        data = office.model_dump()
    """
    logger.info("fetch: %s", url)
    html = fetch_html(
        url,
        timeout=timeout,
        user_agent=user_agent,
        max_retries=max_retries,
        proxy=proxy,
    )
    return extract(html)
