"""Attribution lines (scripture references and the like) under a section."""

from __future__ import annotations

import re

from .entities import decode_entities

_CITATION_RE = re.compile(
    r'<p[^>]*class="[^"]*text-sm[^"]*text-gray-500[^"]*italic[^"]*"[^>]*>(.*?)</p>',
    re.DOTALL,
)
_TAG_RE = re.compile(r"<[^>]+>")
_LEADING_DASHES_RE = re.compile(r"^[—–-]+\s*")

CITATION_PREFIX = "— "
CITATION_SEPARATOR = " | "


def _clean_fragment(raw: str) -> str:
    text = _TAG_RE.sub("", raw).strip()
    text = _LEADING_DASHES_RE.sub("", text)
    text = text.replace("&mdash;", "").replace("<!-- -->", "").strip()
    return decode_entities(text).strip().replace("\n", " ")


def extract_citation(chunk: str) -> str | None:
    """Merge every muted-italic attribution in *chunk* into one citation.

    Leading dashes are stripped from each fragment and a single ``"— "`` is
    put in front of the joined result.  Returns ``None`` if nothing is left.
    """
    fragments: list[str] = []
    for match in _CITATION_RE.finditer(chunk):
        cleaned = _clean_fragment(match.group(1))
        if cleaned:
            fragments.append(cleaned)
    if not fragments:
        return None
    return CITATION_PREFIX + CITATION_SEPARATOR.join(fragments)
