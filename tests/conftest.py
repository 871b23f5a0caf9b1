"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Opening and closing wrappers around the centered content region.
CONTAINER_OPEN = (
    '<main><div class="bg-white"><div class="container"><div class="py-12">'
    '<div class="max-w-4xl mx-auto px-4">'
)
CONTAINER_CLOSE = "</div></div></div></div></main>"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def section_html(
    title: str,
    *blocks: str,
    subheader: str = "",
    citations: tuple[str, ...] = (),
) -> str:
    """Build one ``prose max-w-none`` section the way the source page does."""
    parts = ['<section><div class="prose max-w-none">']
    if title:
        parts.append(f'<h2 class="text-xl">{title}</h2>')
    if subheader:
        parts.append(f'<h3 class="text-lg">{subheader}</h3>')
    for block in blocks:
        parts.append(f'<div class="whitespace-pre-line font-serif">{block}</div>')
    for citation in citations:
        parts.append(f'<p class="text-sm text-gray-500 italic mt-2">{citation}</p>')
    parts.append("</div></section>")
    return "".join(parts)


def page_html(*sections: str, title: str = "Morning", subtitle: str = "", wrapped: bool = True) -> str:
    """Build a whole page around *sections*."""
    header = f"<h1>{title}</h1>"
    if subtitle:
        header += f"\n<p>{subtitle}</p>"
    body = header + "".join(sections)
    if wrapped:
        body = CONTAINER_OPEN + body + CONTAINER_CLOSE
    return f"<html><body>{body}</body></html>"


@pytest.fixture
def office_html() -> str:
    return _read_fixture("office.html")


@pytest.fixture
def office_path() -> Path:
    return FIXTURES_DIR / "office.html"
