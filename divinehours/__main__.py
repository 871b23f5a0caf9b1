"""CLI entry point: python -m divinehours [--url URL | --file PATH] [options]"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from divinehours import settings
from divinehours.fetchers import FileOfficeFetcher, HttpOfficeFetcher, OfficeFetcher
from divinehours.loader import LoadState, OfficeLoader
from divinehours.render import format_markdown_office, format_text_office, print_office
from divinehours.tracker import PrayedDayTracker

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="divinehours",
        description="Fetch today's Divine Hours office and print it for reading.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", default=settings.SOURCE_URL, metavar="URL",
                        help=f"Page to fetch (default: {settings.SOURCE_URL})")
    source.add_argument("--file", default=None, metavar="PATH",
                        help="Read a saved copy of the page instead of fetching it")
    parser.add_argument("--format", default="rich",
                        choices=["rich", "markdown", "text", "json"],
                        help="Output format (default: rich)")
    parser.add_argument("--timeout", type=int, default=settings.DOWNLOAD_TIMEOUT, metavar="SECS",
                        help=f"Network timeout in seconds (default: {settings.DOWNLOAD_TIMEOUT})")
    parser.add_argument("--no-track", action="store_true", default=False,
                        help="Do not record today as prayed")
    parser.add_argument("--tracker", default=str(settings.TRACKER_PATH), metavar="PATH",
                        help=f"Prayed-day file (default: {settings.TRACKER_PATH})")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    return parser


def _print_banner(source: str) -> None:
    from rich.console import Console

    Console(stderr=True).print(f"[dim]Gathering the Hours from[/dim] [green]{source}[/green]")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    fetcher: OfficeFetcher
    if args.file:
        fetcher = FileOfficeFetcher(args.file)
    else:
        fetcher = HttpOfficeFetcher(args.url, timeout=args.timeout)

    tracker = None if args.no_track else PrayedDayTracker(args.tracker)
    loader = OfficeLoader(fetcher, tracker=tracker)

    if args.format == "rich":
        _print_banner(args.file or args.url)

    status = asyncio.run(loader.load())
    if status.state is not LoadState.LOADED or status.office is None:
        print(f"ERROR: {status.error or 'Failed to load content'}", file=sys.stderr)
        return 1

    office = status.office
    if args.format == "json":
        print(office.model_dump_json(indent=2))
    elif args.format == "markdown":
        print(format_markdown_office(office), end="")
    elif args.format == "text":
        print(format_text_office(office), end="")
    else:
        print_office(office)
    return 0


if __name__ == "__main__":
    sys.exit(main())
