"""Reader-friendly renderings of an extracted office."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console

    from divinehours.items import Document

NO_DATA_MESSAGE = "No data available"

_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")


def format_markdown_office(office: Document) -> str:
    """Render *office* as a Markdown document."""
    lines: list[str] = [f"# {office.title}", ""]
    if office.subtitle:
        lines.extend([f"*{office.subtitle}*", ""])

    if office.is_empty:
        lines.append(NO_DATA_MESSAGE)
        return "\n".join(lines)

    for section in office.sections:
        lines.append(f"## {section.title.upper()}")
        lines.append("")
        if section.content:
            lines.append(section.content)
            lines.append("")
        if section.citation:
            lines.append(f"*{section.citation}*")
            lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def format_text_office(office: Document) -> str:
    """Render *office* as plain text (no Markdown markers)."""
    lines: list[str] = [office.title]
    if office.subtitle:
        lines.append(office.subtitle)
    lines.append("")

    if office.is_empty:
        lines.append(NO_DATA_MESSAGE)
        return "\n".join(lines)

    for section in office.sections:
        lines.append(section.title.upper())
        if section.content:
            lines.append(_BOLD_RE.sub(r"\1", section.content))
        if section.citation:
            lines.append(section.citation)
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def print_office(office: Document, console: Console | None = None) -> None:
    """Print *office* to a rich console."""
    from rich.console import Console
    from rich.markdown import Markdown
    from rich.panel import Panel
    from rich.rule import Rule
    from rich.text import Text

    console = console or Console()

    header = Text(office.title, style="bold", justify="center")
    if office.subtitle:
        header.append("\n")
        header.append(office.subtitle, style="italic dim")
    console.print(Panel(header, expand=True))

    if office.is_empty:
        console.print(Text(NO_DATA_MESSAGE, justify="center"))
        return

    for section in office.sections:
        console.print(Rule(Text(section.title.upper(), style="bold cyan"), align="left"))
        if section.content:
            console.print(Markdown(section.content))
        if section.citation:
            console.print(Text(section.citation, style="italic dim", justify="right"))
        console.print()
