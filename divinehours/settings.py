"""Project settings for divinehours.

Plain module-level constants.  A handful can be overridden from the
environment so the CLI and the loader pick them up without extra wiring:

- ``DIVINEHOURS_URL``            source page URL
- ``DIVINEHOURS_TIMEOUT``        per-request timeout (seconds)
- ``DIVINEHOURS_RETRY_TIMES``    retries on transient HTTP/network errors
- ``DIVINEHOURS_USER_AGENT``     User-Agent header sent with requests
- ``DIVINEHOURS_TRACKER_PATH``   JSON file backing the prayed-day tracker
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer); using %d", name, raw, default)
        return default


# ---------------------------------------------------------------------------
# Source
# ---------------------------------------------------------------------------
SOURCE_URL = os.getenv(
    "DIVINEHOURS_URL",
    "https://www.a2cc.org/resources/pray-the-divine-hours",
)

# Title used when the page carries no usable <h1>
DEFAULT_TITLE = "The Divine Hours"

# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------
DOWNLOAD_TIMEOUT = _int_env("DIVINEHOURS_TIMEOUT", 30)

RETRY_TIMES = _int_env("DIVINEHOURS_RETRY_TIMES", 3)
RETRY_HTTP_CODES = frozenset({429, 500, 502, 503, 504})

USER_AGENT = os.getenv(
    "DIVINEHOURS_USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36",
)

# ---------------------------------------------------------------------------
# Day tracker
# ---------------------------------------------------------------------------
TRACKER_PATH = Path(
    os.getenv("DIVINEHOURS_TRACKER_PATH", "~/.divinehours/prayed_days.json"),
).expanduser()

DATE_KEY_FORMAT = "%Y-%m-%d"
