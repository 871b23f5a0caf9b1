"""divinehours - read the Divine Hours office from its web page.

Quick usage::

    from divinehours import fetch

    office = fetch()
    print(office.title)
    for section in office.sections:
        print(section.title)
        print(section.content)

Offline extraction::

    from divinehours import extract

    office = extract(open("office.html", encoding="utf-8").read())

Observable loading (async, injectable fetcher)::

    import asyncio
    from divinehours import OfficeLoader, StaticOfficeFetcher

    loader = OfficeLoader(StaticOfficeFetcher(html))
    status = asyncio.run(loader.load())
"""

from divinehours.fetchers import (
    FileOfficeFetcher,
    HttpOfficeFetcher,
    OfficeFetcher,
    StaticOfficeFetcher,
)
from divinehours.items import Document, Section
from divinehours.loader import LoaderStatus, LoadState, OfficeLoader
from divinehours.query import DecodeError, FetchError, extract, fetch, fetch_html
from divinehours.tracker import DayTracker, PrayedDayTracker

__version__ = "0.1.0"
__all__ = [
    "DayTracker",
    "DecodeError",
    "Document",
    "FetchError",
    "FileOfficeFetcher",
    "HttpOfficeFetcher",
    "LoadState",
    "LoaderStatus",
    "OfficeFetcher",
    "OfficeLoader",
    "PrayedDayTracker",
    "Section",
    "StaticOfficeFetcher",
    "extract",
    "fetch",
    "fetch_html",
]
