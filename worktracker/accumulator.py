"""Per-category minute accounting for the work tracker.

``TimeAccumulator`` is the single owner of the "currently running" entry and
of the accumulated minutes per category.  Only one category can run at a
time: starting another one stops the running category first.  Every state
change is reported as a ``ToggleEvent`` so the UI can relabel exactly the
buttons that changed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

_ONE_MINUTE = timedelta(minutes=1)


class Status(Enum):
    STARTED = "started"
    STOPPED = "stopped"


@dataclass(frozen=True)
class ToggleEvent:
    category: str
    status: Status
    total: int


class UnknownCategoryError(ValueError):
    """Raised when toggling a category that was not configured."""


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Return the number of complete minutes from ``start`` to ``end``.

    Partial minutes are truncated, never rounded.  A clock that went
    backwards yields 0 rather than a negative amount.
    """
    return max(0, (end - start) // _ONE_MINUTE)


class TimeAccumulator:
    """
    Tracks the running category and the minutes accrued per category.
    """

    def __init__(self, categories: Iterable[str]) -> None:
        self.categories: List[str] = list(dict.fromkeys(categories))
        self._known = set(self.categories)
        # (category, started_at) of the running category, if any
        self._running: Optional[Tuple[str, datetime]] = None
        self._minutes: Dict[str, int] = {}
        self._listeners: List[Callable[[ToggleEvent], None]] = []

    @property
    def running(self) -> Optional[str]:
        """Name of the running category, or ``None``."""
        return self._running[0] if self._running else None

    @property
    def running_since(self) -> Optional[datetime]:
        return self._running[1] if self._running else None

    def is_running(self, category: str) -> bool:
        return self.running == category

    def total(self, category: str) -> int:
        return self._minutes.get(category, 0)

    def totals(self) -> Dict[str, int]:
        """Accrued minutes for every configured category, in configured order."""
        return {category: self.total(category) for category in self.categories}

    def add_listener(self, callback: Callable[[ToggleEvent], None]) -> None:
        """Register ``callback`` to receive every emitted ``ToggleEvent``."""
        self._listeners.append(callback)

    def seed(self, totals: Mapping[str, int]) -> None:
        """
        Merge previously saved totals into the accumulator.

        Categories that are not configured and negative amounts are ignored
        so the per-category minutes never go below what was accrued.
        """
        for category, minutes in totals.items():
            if category not in self._known:
                logger.debug("Ignoring resumed minutes for unknown category %r", category)
                continue
            if minutes < 0:
                continue
            self._minutes[category] = self.total(category) + int(minutes)

    def toggle(self, category: str, now: datetime) -> List[ToggleEvent]:
        """
        Start or stop ``category`` at ``now``.

        Toggling the running category stops it.  Toggling any other category
        stops whatever is running and then starts the new one.  The returned
        events are in the order they happened.

        :raises UnknownCategoryError: if ``category`` is not configured.
        """
        if category not in self._known:
            raise UnknownCategoryError(f"Unknown category: {category!r}")

        events: List[ToggleEvent] = []
        if self.running == category:
            events.append(self._stop(now))
        else:
            if self._running is not None:
                events.append(self._stop(now))
            self._running = (category, now)
            events.append(ToggleEvent(category, Status.STARTED, self.total(category)))

        for event in events:
            logger.debug("%s %s (%d min)", event.status.value, event.category, event.total)
            for callback in self._listeners:
                callback(event)
        return events

    def _stop(self, now: datetime) -> ToggleEvent:
        assert self._running is not None
        category, started_at = self._running
        self._running = None
        self._minutes[category] = self.total(category) + whole_minutes_between(started_at, now)
        return ToggleEvent(category, Status.STOPPED, self._minutes[category])
