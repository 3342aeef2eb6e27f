from __future__ import annotations

import math

import pytest

from pytics.config import ProximityMode, TicsConfig
from pytics.engine import ReconciliationEngine
from pytics.models.alert import AlertKind
from pytics.models.state import AlarmState, ProximityState
from pytics.models.status import StatusSnapshot
from pytics.notifications import NotificationGate
from pytics.publisher import StatusPublisher

ALARM = "tics/grupo1/esp32/tele/alarmSmoke"
RSSI = "tics/grupo1/esp32/tele/rssi"
BRACELET = "tics/grupo1/esp32/tele/braceletNear"


class _RecordingNotifier:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, int]] = []

    def notify(self, title: str, body: str, identifier: int) -> None:
        self.calls.append((title, body, identifier))


def _engine(config: TicsConfig | None = None) -> tuple[ReconciliationEngine, list[StatusSnapshot], _RecordingNotifier]:
    snapshots: list[StatusSnapshot] = []
    publisher = StatusPublisher()
    publisher.subscribe(snapshots.append)
    notifier = _RecordingNotifier()
    engine = ReconciliationEngine(config, publisher=publisher, notifications=NotificationGate(notifier))
    return engine, snapshots, notifier


def test_default_subscription_set_excludes_bracelet_channel() -> None:
    engine, _snapshots, _notifier = _engine()

    assert engine.topics == (ALARM, RSSI)


def test_channel_mode_adds_bracelet_topic() -> None:
    engine, _snapshots, _notifier = _engine(TicsConfig(proximity_mode=ProximityMode.CHANNEL))

    assert BRACELET in engine.topics


def test_end_to_end_scenario() -> None:
    engine, snapshots, notifier = _engine()

    assert engine.feed(ALARM, "0") == []
    assert engine.feed(RSSI, "-45") == []
    third = engine.feed(ALARM, "1")
    fourth = engine.feed(RSSI, "-75")

    assert [alert.kind for alert in third] == [AlertKind.SMOKE_DETECTED]
    assert [alert.kind for alert in fourth] == [AlertKind.PROXIMITY_LOST]
    assert [identifier for _title, _body, identifier in notifier.calls] == [2, 3]
    assert len(snapshots) == 4

    final = snapshots[-1]
    assert final.alarm == 1
    assert final.proximity == 0
    assert final.signal_strength == -75
    assert final.distance_m == pytest.approx(10 ** (23 / 56.5))


def test_repeated_alarm_raises_single_alert_but_publishes_each_time() -> None:
    engine, snapshots, notifier = _engine()

    first = engine.feed(ALARM, "1")
    second = engine.feed(ALARM, "1")

    assert len(first) == 1
    assert second == []
    assert len(notifier.calls) == 1
    assert len(snapshots) == 2


def test_alarm_sequence_with_clear_raises_two_alerts() -> None:
    engine, _snapshots, _notifier = _engine()

    alerts = [alert for payload in ("1", "0", "1") for alert in engine.feed(ALARM, payload)]

    assert len(alerts) == 2


def test_malformed_alarm_payload_counts_as_clear() -> None:
    engine, snapshots, _notifier = _engine()

    assert engine.feed(ALARM, "smoke!") == []
    assert engine.state().alarm == AlarmState.CLEAR
    assert snapshots[-1].alarm == 0


def test_malformed_signal_strength_keeps_distance_unknown() -> None:
    engine, snapshots, _notifier = _engine()

    assert engine.feed(RSSI, "n/a") == []

    state = engine.state()
    assert state.signal_strength is None
    assert state.proximity == ProximityState.UNKNOWN
    assert snapshots[-1].signal_strength == -1
    assert snapshots[-1].distance_m == 0.0


def test_unknown_topic_neither_mutates_nor_publishes() -> None:
    engine, snapshots, notifier = _engine()
    before = engine.state()

    assert engine.feed("tics/grupo1/esp32/tele/temperature", "1") == []

    assert engine.state() == before
    assert snapshots == []
    assert notifier.calls == []


def test_channel_mode_ignores_signal_strength_for_proximity() -> None:
    engine, snapshots, _notifier = _engine(TicsConfig(proximity_mode=ProximityMode.CHANNEL))

    assert engine.feed(BRACELET, "1") == []
    assert engine.feed(RSSI, "-90") == []
    lost = engine.feed(BRACELET, "0")

    assert [alert.kind for alert in lost] == [AlertKind.PROXIMITY_LOST]
    assert snapshots[1].proximity == 1
    assert snapshots[1].distance_m > 0.0


def test_permission_denied_still_updates_state() -> None:
    snapshots: list[StatusSnapshot] = []
    publisher = StatusPublisher()
    publisher.subscribe(snapshots.append)
    notifier = _RecordingNotifier()
    engine = ReconciliationEngine(
        publisher=publisher,
        notifications=NotificationGate(notifier, permission=lambda: False),
    )

    alerts = engine.feed(ALARM, "1")

    assert len(alerts) == 1
    assert notifier.calls == []
    assert snapshots[-1].alarm == 1


class _BrokenNotifier:
    def notify(self, title: str, body: str, identifier: int) -> None:
        raise RuntimeError("notification backend down")


def test_extreme_signal_strength_does_not_stop_processing() -> None:
    engine, snapshots, _notifier = _engine()

    lost = engine.feed(RSSI, "-20000")
    smoke = engine.feed(ALARM, "1")

    assert [alert.kind for alert in lost] == [AlertKind.PROXIMITY_LOST]
    assert [alert.kind for alert in smoke] == [AlertKind.SMOKE_DETECTED]
    assert math.isinf(snapshots[0].distance_m)
    assert snapshots[-1].alarm == 1


def test_out_of_range_signal_strength_counts_as_unknown() -> None:
    engine, snapshots, _notifier = _engine()

    assert engine.feed(RSSI, "9" * 5000) == []

    assert engine.state().signal_strength is None
    assert snapshots[-1].signal_strength == -1


def test_failing_notifier_still_publishes() -> None:
    snapshots: list[StatusSnapshot] = []
    publisher = StatusPublisher()
    publisher.subscribe(snapshots.append)
    engine = ReconciliationEngine(publisher=publisher, notifications=NotificationGate(_BrokenNotifier()))

    alerts = engine.feed(ALARM, "1")

    assert [alert.kind for alert in alerts] == [AlertKind.SMOKE_DETECTED]
    assert len(snapshots) == 1
    assert snapshots[0].alarm == 1
