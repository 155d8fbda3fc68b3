"""
Polling and stale-data policy for one mounted sheet view.

A ``GridSession`` holds the last good grid for the mounted (area, kind)
pair. Every fetch is tagged with a ``FetchTicket`` taken at dispatch time;
results whose ticket is no longer live (the view was unmounted or switched
to another key meanwhile) are dropped instead of applied.
"""

from __future__ import annotations

import datetime as dt
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from src.data.errors import ViewerError
from src.data.grid import Grid
from src.data.loader import GridFetcher

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 30.0
# fraction of the interval after which a refresh counts as due
DUE_TOLERANCE = 0.9

ViewKey = Tuple[str, str]


@dataclass(frozen=True)
class FetchTicket:
    key: ViewKey
    generation: int


class GridSession:
    def __init__(
        self,
        fetcher: GridFetcher,
        interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.fetcher = fetcher
        self.interval = interval
        self._clock = clock
        self.key: Optional[ViewKey] = None
        self.grid: Optional[Grid] = None
        self.error: Optional[str] = None
        self.last_updated: Optional[dt.datetime] = None
        self._generation = 0
        self._alive = False
        self._last_attempt: Optional[float] = None

    @property
    def mounted(self) -> bool:
        return self._alive

    def is_live(self, ticket: FetchTicket) -> bool:
        return self._alive and ticket.generation == self._generation and ticket.key == self.key

    def mount(self, area: str, kind: str) -> None:
        """Start a view for (area, kind) and perform the initial load.

        Any in-flight request of a previous key becomes stale. An initial
        failure is reported through ``error`` and is not retried here.
        """
        self._generation += 1
        self._alive = True
        self.key = (area, kind)
        self.grid = None
        self.error = None
        self.last_updated = None
        self._run(FetchTicket(self.key, self._generation), initial=True)

    def ensure_mounted(self, area: str, kind: str) -> bool:
        """Mount unless (area, kind) is already the live key. Returns True on a new mount."""
        if self._alive and self.key == (area, kind):
            return False
        self.mount(area, kind)
        return True

    def unmount(self) -> None:
        self._alive = False
        self._generation += 1
        self._last_attempt = None

    def refresh(self) -> None:
        """Background refresh; failures keep the previous grid and set no error."""
        if not self._alive or self.key is None:
            return
        self._run(FetchTicket(self.key, self._generation), initial=False)

    def due(self) -> bool:
        """True once roughly ``interval`` has passed since the last attempt.

        The UI timer fires on a fixed schedule while the attempt time is taken
        a variable delay after each tick, so ticks landing slightly early still
        count as due.
        """
        if not self._alive or self._last_attempt is None:
            return False
        return self._clock() - self._last_attempt >= self.interval * DUE_TOLERANCE

    def refresh_if_due(self) -> bool:
        if not self.due():
            return False
        self.refresh()
        return True

    def _run(self, ticket: FetchTicket, initial: bool) -> None:
        area, kind = ticket.key
        self._last_attempt = self._clock()
        try:
            grid = self.fetcher.fetch(area, kind)
        except ViewerError as exc:
            if not self.is_live(ticket):
                logger.debug("Dropping stale failure for %s", ticket.key)
                return
            if initial:
                logger.exception("Failed to fetch sheet data for area=%s type=%s", area, kind)
                self.error = str(exc)
            else:
                logger.warning("Background refresh failed for area=%s type=%s: %s", area, kind, exc)
            return
        self._apply(ticket, grid)

    def _apply(self, ticket: FetchTicket, grid: Grid) -> bool:
        if not self.is_live(ticket):
            logger.debug("Dropping stale response for %s", ticket.key)
            return False
        self.grid = grid
        self.error = None
        self.last_updated = dt.datetime.now()
        return True
