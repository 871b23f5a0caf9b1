"""Office title and subtitle."""

from __future__ import annotations

import re
from typing import NamedTuple

from divinehours.settings import DEFAULT_TITLE

from .entities import decode_entities, first_group

_TITLE_RE = re.compile(r"<h1[^>]*>([^<]+)</h1>")
_SUBTITLE_RE = re.compile(r"<h1[^>]*>.*?</h1>\s*<p[^>]*>([^<]+)</p>", re.DOTALL)


class Header(NamedTuple):
    title: str
    subtitle: str


def extract_header(region: str) -> Header:
    """Recover the ``<h1>`` title and the paragraph right after it.

    Falls back to :data:`~divinehours.settings.DEFAULT_TITLE` and an empty
    subtitle when either is missing.
    """
    title = first_group(_TITLE_RE, region) or DEFAULT_TITLE
    subtitle = first_group(_SUBTITLE_RE, region) or ""
    return Header(
        title=decode_entities(title).strip(),
        subtitle=decode_entities(subtitle).strip(),
    )
