"""Local record of the days on which the office was prayed.

Stored as a small JSON object keyed by ``YYYY-MM-DD``::

    {"2026-10-15": true, "2026-10-16": true}
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Protocol, runtime_checkable

from divinehours import settings

logger = logging.getLogger(__name__)


def day_key(day: date | None = None) -> str:
    """Return the storage key for *day* (today when omitted)."""
    return (day or date.today()).strftime(settings.DATE_KEY_FORMAT)


@runtime_checkable
class DayTracker(Protocol):
    """Anything that can record a completed day."""

    def mark_prayed(self, day: date | None = None) -> None:
        ...


class PrayedDayTracker:
    """JSON-file backed :class:`DayTracker`."""

    def __init__(self, path: str | Path = settings.TRACKER_PATH) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, bool]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s, starting fresh: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): bool(v) for k, v in data.items()}

    def _save(self, days: dict[str, bool]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(days, indent=2, sort_keys=True, ensure_ascii=False),
            encoding="utf-8",
        )

    def mark_prayed(self, day: date | None = None) -> None:
        days = self._load()
        key = day_key(day)
        days[key] = True
        self._save(days)
        logger.debug("Marked %s as prayed in %s", key, self.path)

    def is_prayed(self, day: date | None = None) -> bool:
        return self._load().get(day_key(day), False)

    def prayed_days(self) -> list[str]:
        return sorted(k for k, v in self._load().items() if v)
