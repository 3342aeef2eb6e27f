"""Hand-off of alert events to the user-notification collaborator."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from pytics.exceptions import TicsPermissionDeniedError
from pytics.models.alert import AlertEvent

_LOGGER = logging.getLogger(__name__)


class Notifier(Protocol):
    """Posts a user-visible notification.

    Implementations raise :class:`TicsPermissionDeniedError` when the user
    has not granted notification permission.
    """

    def notify(self, title: str, body: str, identifier: int) -> None: ...


class LoggingNotifier:
    """Notifier that writes alerts to a logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _LOGGER

    def notify(self, title: str, body: str, identifier: int) -> None:
        self._logger.warning("[%s] %s: %s", identifier, title, body)


def _always_granted() -> bool:
    return True


class NotificationGate:
    """Deliver alerts unless notification permission is missing.

    Notifier failures are logged and never reach the caller.

    A missing permission is not an error: the alert was already computed
    and state updated; only the notification is dropped.
    """

    def __init__(
        self,
        notifier: Notifier | None = None,
        *,
        permission: Callable[[], bool] = _always_granted,
        enabled: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._notifier: Notifier = notifier or LoggingNotifier()
        self._permission = permission
        self._enabled = enabled
        self._logger = logger or _LOGGER

    def deliver(self, alert: AlertEvent) -> bool:
        """Forward *alert*; return whether a notification was posted."""
        if not self._enabled:
            return False
        try:
            if not self._permission():
                self._logger.debug("Notification permission missing, skipping alert=%s", alert.kind)
                return False
            self._notifier.notify(alert.title, alert.message, alert.identifier)
        except TicsPermissionDeniedError:
            self._logger.debug("Notification permission denied, skipping alert=%s", alert.kind)
            return False
        except Exception:
            self._logger.warning("Notifier failed for alert=%s", alert.kind, exc_info=True)
            return False
        return True
