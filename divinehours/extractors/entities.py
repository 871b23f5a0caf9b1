"""Decoding of the fixed set of HTML entities the source page uses."""

from __future__ import annotations

import re

# Applied in order.  ``&amp;`` runs before ``&#x27;`` so an escaped
# apostrophe (``&amp;#x27;``) still ends up as a plain ``'``.
ENTITY_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&quot;", '"'),
    ("&ldquo;", '"'),
    ("&rdquo;", '"'),
    ("&lsquo;", "'"),
    ("&rsquo;", "'"),
    ("&apos;", "'"),
    ("&amp;", "&"),
    ("&#x27;", "'"),
    ("&mdash;", "—"),
)


def decode_entities(text: str) -> str:
    """Replace every known named/numeric entity in *text* with its character.

    Unknown entities are left untouched.  No trimming is done here.
    """
    for entity, char in ENTITY_REPLACEMENTS:
        text = text.replace(entity, char)
    return text


def first_group(pattern: re.Pattern[str], text: str) -> str | None:
    """Return the first capture group of *pattern* in *text*, stripped, or None."""
    match = pattern.search(text)
    if match is None:
        return None
    return match.group(1).strip()
