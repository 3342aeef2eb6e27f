"""Fan-out of status snapshots to registered observers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pytics.models.status import StatusSnapshot

_LOGGER = logging.getLogger(__name__)

StatusObserver = Callable[[StatusSnapshot], None]


class StatusPublisher:
    """Fire-and-forget delivery of :class:`StatusSnapshot`s.

    With a *loop*, every delivery is scheduled through
    ``loop.call_soon_threadsafe``; callbacks run in FIFO order so a snapshot
    is never overtaken by an earlier one. Without a loop, observers are
    called inline.
    """

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._logger = logger or _LOGGER
        self._observers: list[StatusObserver] = []

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: StatusObserver) -> Callable[[], None]:
        """Register *observer*; the returned callable unregisters it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def publish(self, snapshot: StatusSnapshot) -> None:
        self._logger.debug(
            "Publishing status alarm=%s proximity=%s rssi=%s distance=%.2f",
            snapshot.alarm,
            snapshot.proximity,
            snapshot.signal_strength,
            snapshot.distance_m,
        )
        for observer in list(self._observers):
            if self._loop is None:
                self._deliver(observer, snapshot)
            else:
                self._loop.call_soon_threadsafe(self._deliver, observer, snapshot)

    def _deliver(self, observer: StatusObserver, snapshot: StatusSnapshot) -> None:
        try:
            observer(snapshot)
        except Exception:
            self._logger.debug("Status observer failed", exc_info=True)
