"""divinehours.loader — observable fetch-then-extract state machine.

States::

    IDLE ──load()──▶ LOADING ──▶ LOADED(office)
                        │
                        └──────▶ FAILED(reason)

``load()`` again from ``LOADED`` or ``FAILED`` is a retry.  Only one fetch
runs at a time: concurrent ``load()`` calls share the in-flight one.

Usage::

    loader = OfficeLoader(HttpOfficeFetcher(), tracker=PrayedDayTracker())
    loader.subscribe(lambda status: print(status.state))
    status = asyncio.run(loader.load())
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from divinehours.fetchers import HttpOfficeFetcher, OfficeFetcher
from divinehours.items import Document
from divinehours.query import FetchError, extract
from divinehours.tracker import DayTracker

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoaderStatus:
    """Snapshot of the loader.

    ``office`` is set only in ``LOADED``; ``error`` only in ``FAILED``.
    """

    state: LoadState = LoadState.IDLE
    office: Document | None = None
    error: str | None = None


Subscriber = Callable[[LoaderStatus], None]


class OfficeLoader:
    """Fetch the office page through an injected fetcher and extract it.

    Args:
        fetcher: Source of the page text.  Defaults to
                 :class:`~divinehours.fetchers.HttpOfficeFetcher`.
        tracker: Optional :class:`~divinehours.tracker.DayTracker`, told
                 about the day once per successful load.
    """

    def __init__(
        self,
        fetcher: OfficeFetcher | None = None,
        tracker: DayTracker | None = None,
    ) -> None:
        self._fetcher: OfficeFetcher = fetcher or HttpOfficeFetcher()
        self._tracker = tracker
        self._status = LoaderStatus()
        self._subscribers: list[Subscriber] = []
        self._inflight: asyncio.Task[LoaderStatus] | None = None

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def status(self) -> LoaderStatus:
        return self._status

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call *callback* with the current status now and on every change.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)
        callback(self._status)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _set(self, status: LoaderStatus) -> LoaderStatus:
        self._status = status
        for callback in list(self._subscribers):
            callback(status)
        return status

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> LoaderStatus:
        """Fetch and extract the office, returning the final status.

        Transport, decode and any other fetcher failures end in ``FAILED``;
        they are never raised.  Raises :class:`asyncio.CancelledError` if :meth:`cancel`
        is called while the load is in flight.
        """
        if self._inflight is None or self._inflight.done():
            self._set(LoaderStatus(LoadState.LOADING))
            self._inflight = asyncio.create_task(self._run())
        return await asyncio.shield(self._inflight)

    async def retry(self) -> LoaderStatus:
        return await self.load()

    def cancel(self) -> bool:
        """Cancel the in-flight load, if any.  The loader returns to ``IDLE``."""
        if self._inflight is None or self._inflight.done():
            return False
        cancelled = self._inflight.cancel()
        if cancelled:
            self._inflight = None
            logger.info("Office load cancelled")
            self._set(LoaderStatus(LoadState.IDLE))
        return cancelled

    async def _run(self) -> LoaderStatus:
        try:
            html = await self._fetcher.fetch_text()
        except FetchError as exc:
            logger.warning("Office load failed: %s", exc)
            return self._set(LoaderStatus(LoadState.FAILED, error=str(exc)))
        except Exception as exc:
            logger.warning("Office load failed: %s: %s", type(exc).__name__, exc)
            return self._set(LoaderStatus(LoadState.FAILED, error=str(exc) or type(exc).__name__))

        office = extract(html)
        logger.info("Loaded %r with %d section(s)", office.title, len(office.sections))
        status = self._set(LoaderStatus(LoadState.LOADED, office=office))
        self._record_day()
        return status

    def _record_day(self) -> None:
        if self._tracker is None:
            return
        try:
            self._tracker.mark_prayed()
        except OSError as exc:
            logger.warning("Could not record prayed day: %s", exc)
