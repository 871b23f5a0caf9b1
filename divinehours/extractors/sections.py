"""Split the content region into section chunks and pull out their fields."""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from .entities import decode_entities, first_group

logger = logging.getLogger(__name__)

# Every section body opens with this attribute; text before the first one
# is page preamble.
SECTION_MARKER = 'class="prose max-w-none"'

_SECTION_TITLE_RE = re.compile(r"<h2[^>]*>([^<]+)</h2>")
_SUBHEADER_RE = re.compile(r"<h3[^>]*>([^<]+)</h3>")
_CONTENT_BLOCK_RE = re.compile(
    r'<div[^>]*class="[^"]*whitespace-pre-line[^"]*"[^>]*>(.*?)</div>',
    re.DOTALL,
)


class RawSection(NamedTuple):
    title: str
    subheader: str
    blocks: list[str]

    @property
    def raw_content(self) -> str:
        """Blocks joined by blank lines, led by the bolded subheader if any."""
        body = "\n\n".join(self.blocks)
        if self.subheader:
            return f"**{self.subheader}**\n\n{body}"
        return body


def split_sections(region: str) -> list[str]:
    """Return the raw section chunks of *region* in document order."""
    return region.split(SECTION_MARKER)[1:]


def extract_section_fields(chunk: str) -> RawSection | None:
    """Recover title, optional subheader and content blocks from *chunk*.

    Returns ``None`` when the chunk has no ``<h2>`` or its text is blank
    once decoded.
    """
    title = decode_entities(first_group(_SECTION_TITLE_RE, chunk) or "").strip()
    if not title:
        logger.debug("Skipping section chunk without a heading (%d chars)", len(chunk))
        return None

    subheader = decode_entities(first_group(_SUBHEADER_RE, chunk) or "").strip()
    blocks = [m.group(1) for m in _CONTENT_BLOCK_RE.finditer(chunk)]
    return RawSection(title=title, subheader=subheader, blocks=blocks)
