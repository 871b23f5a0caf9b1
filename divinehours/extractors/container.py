"""Narrow a full page down to its centered main-content region."""

from __future__ import annotations

import logging
import re

from .entities import first_group

logger = logging.getLogger(__name__)

# The office lives in ``<div class="max-w-4xl mx-auto ...">`` nested three
# wrappers deep inside ``<main>``.
_CONTAINER_RE = re.compile(
    r'<div[^>]*class="[^"]*max-w-4xl\s+mx-auto[^"]*"[^>]*>(.*?)'
    r"</div>\s*</div>\s*</div>\s*</div>\s*</main>",
    re.DOTALL,
)


def isolate_main_content(html: str) -> str:
    """Return the main-content region of *html*, or *html* itself if not found."""
    region = first_group(_CONTAINER_RE, html)
    if region is None:
        logger.debug("Main content container not found; using whole document")
        return html
    return region
