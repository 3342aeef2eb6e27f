"""Custom exception hierarchy for pytics."""

from __future__ import annotations


class TicsError(Exception):
    """Base exception for all pytics errors."""


class TicsConfigError(TicsError):
    """Invalid or missing configuration."""


class TicsConnectionError(TicsError):
    """Broker unreachable, handshake refused or timed out."""

    def __init__(
        self,
        message: str,
        *,
        host: str = "",
        port: int | None = None,
        reason: str = "",
    ) -> None:
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(message)


class TicsParseError(TicsError):
    """Payload could not be decoded as the expected type.

    Only raised by the strict codec helpers; the engine always recovers
    by substituting a fallback value.
    """

    def __init__(self, message: str, *, payload: str = "") -> None:
        self.payload = payload
        super().__init__(message)


class TicsPermissionDeniedError(TicsError):
    """The notification collaborator is not allowed to post notifications.

    Raised by :class:`pytics.notifications.Notifier` implementations.
    Suppressed by the notification gate; never fatal.
    """
