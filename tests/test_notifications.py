from __future__ import annotations

import logging

import pytest

from pytics.exceptions import TicsPermissionDeniedError
from pytics.models.alert import AlertEvent
from pytics.notifications import LoggingNotifier, NotificationGate


class _DenyingNotifier:
    def notify(self, title: str, body: str, identifier: int) -> None:
        raise TicsPermissionDeniedError("POST_NOTIFICATIONS not granted")


class _RecordingNotifier:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, int]] = []

    def notify(self, title: str, body: str, identifier: int) -> None:
        self.calls.append((title, body, identifier))


def test_gate_forwards_title_body_identifier() -> None:
    notifier = _RecordingNotifier()
    alert = AlertEvent.smoke_detected()

    assert NotificationGate(notifier).deliver(alert)
    assert notifier.calls == [(alert.title, alert.message, alert.identifier)]


def test_gate_skips_without_permission() -> None:
    notifier = _RecordingNotifier()

    assert not NotificationGate(notifier, permission=lambda: False).deliver(AlertEvent.smoke_detected())
    assert notifier.calls == []


def test_gate_suppresses_permission_denied() -> None:
    assert not NotificationGate(_DenyingNotifier()).deliver(AlertEvent.proximity_lost(-70))


def test_disabled_gate_posts_nothing() -> None:
    notifier = _RecordingNotifier()

    assert not NotificationGate(notifier, enabled=False).deliver(AlertEvent.smoke_detected())
    assert notifier.calls == []


def test_logging_notifier_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("pytics.test.notifier")

    with caplog.at_level(logging.WARNING, logger="pytics.test.notifier"):
        LoggingNotifier(logger).notify("Smoke alert!", "Smoke detected", 2)

    assert "Smoke alert!" in caplog.text


class _BrokenNotifier:
    def notify(self, title: str, body: str, identifier: int) -> None:
        raise RuntimeError("notification backend down")


def test_gate_contains_notifier_failures() -> None:
    assert not NotificationGate(_BrokenNotifier()).deliver(AlertEvent.smoke_detected())


def test_gate_contains_permission_check_failures() -> None:
    def _permission() -> bool:
        raise RuntimeError("permission service unavailable")

    notifier = _RecordingNotifier()

    assert not NotificationGate(notifier, permission=_permission).deliver(AlertEvent.smoke_detected())
    assert notifier.calls == []
