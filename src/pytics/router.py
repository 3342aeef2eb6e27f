"""Exact-topic dispatch of inbound payloads."""

from __future__ import annotations

import logging
from collections.abc import Callable

_LOGGER = logging.getLogger(__name__)

TopicHandler = Callable[[str], None]


class TopicRouter:
    """Map exact topic strings to payload handlers.

    Messages on topics without a handler are dropped silently.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._handlers: dict[str, TopicHandler] = {}
        self._logger = logger or _LOGGER

    @property
    def topics(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def register(self, topic: str, handler: TopicHandler) -> None:
        if topic in self._handlers:
            raise ValueError(f"handler already registered for topic {topic!r}")
        self._handlers[topic] = handler

    def dispatch(self, topic: str, payload: str) -> bool:
        """Run the handler for *topic*; return ``False`` when there is none."""
        handler = self._handlers.get(topic)
        if handler is None:
            self._logger.debug("Ignoring message on unrouted topic=%s", topic)
            return False
        handler(payload)
        return True
