"""Turn raw section markup into reflowed, reader-friendly text.

Pipeline (in order):

1. decode entities
2. ``<br>`` variants and carriage returns become ``\\n``
3. strip residual tags
4. reflow: blank lines stay paragraph breaks, single newlines become spaces
5. trim every line
6. cap blank-line runs at one blank line
7. trim the whole text
"""

from __future__ import annotations

import logging
import re

from .entities import decode_entities

logger = logging.getLogger(__name__)

# Section titles that read as continuous prose.
PROSE_SECTIONS: tuple[str, ...] = (
    "A Reading",
    "The Prayer Appointed for the Week",
    "The Concluding Prayer of the Church",
    "The Collect",
)

_BR_RE = re.compile(r"<br\s*/?>")
_CR_RE = re.compile(r"\r\n?")
_TAG_RE = re.compile(r"<[^>]+>")
_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")

_PARAGRAPH_BREAK = "[[PARAGRAPH_BREAK]]"
_HORIZONTAL_WS = " \t\u00a0"


def is_prose_section(section_title: str) -> bool:
    """True when *section_title* contains one of :data:`PROSE_SECTIONS`, ignoring case."""
    lowered = section_title.casefold()
    return any(phrase.casefold() in lowered for phrase in PROSE_SECTIONS)


def reflow(text: str) -> str:
    """Collapse single newlines to spaces while keeping ``\\n\\n`` paragraph breaks."""
    text = text.replace("\n\n", _PARAGRAPH_BREAK)
    text = text.replace("\n", " ")
    return text.replace(_PARAGRAPH_BREAK, "\n\n")


def normalize_content(raw: str, section_title: str = "") -> str:
    """Normalize the raw content of the section titled *section_title*."""
    content = decode_entities(raw)
    content = _CR_RE.sub("\n", content)
    content = _BR_RE.sub("\n", content)
    content = _TAG_RE.sub("", content)

    # TODO: keep line breaks for psalms and hymns once a separate policy for
    # non-prose sections is agreed; every section is collapsed for now.
    if is_prose_section(section_title):
        logger.debug("Prose section %r", section_title)
    content = reflow(content)

    content = "\n".join(line.strip(_HORIZONTAL_WS) for line in content.split("\n"))
    content = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", content)
    return content.strip()
