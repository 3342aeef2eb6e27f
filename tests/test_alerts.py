from __future__ import annotations

from pytics.alerts import AlertEvaluator, classify_proximity
from pytics.models.alert import AlertKind
from pytics.models.state import AlarmState, ProximityState
from pytics.state.store import DeviceStateStore


def _evaluator() -> tuple[AlertEvaluator, DeviceStateStore]:
    store = DeviceStateStore()
    return AlertEvaluator(store), store


def test_threshold_boundary_uses_strict_comparison() -> None:
    assert classify_proximity(-60) == ProximityState.FAR
    assert classify_proximity(-59) == ProximityState.NEAR
    assert classify_proximity(-61, threshold=-70) == ProximityState.NEAR


def test_alarm_fires_once_per_rising_edge() -> None:
    evaluator, store = _evaluator()

    first = evaluator.evaluate_alarm(1)
    repeat = evaluator.evaluate_alarm(1)

    assert first is not None
    assert first.kind == AlertKind.SMOKE_DETECTED
    assert repeat is None
    assert store.alarm == AlarmState.ACTIVE


def test_alarm_refires_after_clearing() -> None:
    evaluator, _store = _evaluator()

    alerts = [evaluator.evaluate_alarm(value) for value in (1, 0, 1)]

    assert [alert is not None for alert in alerts] == [True, False, True]


def test_alarm_clear_emits_nothing_and_unexpected_values_clear() -> None:
    evaluator, store = _evaluator()

    assert evaluator.evaluate_alarm(0) is None
    assert store.alarm == AlarmState.CLEAR
    evaluator.evaluate_alarm(1)
    assert evaluator.evaluate_alarm(7) is None
    assert store.alarm == AlarmState.CLEAR


def test_near_to_far_fires_proximity_lost() -> None:
    evaluator, store = _evaluator()

    assert evaluator.evaluate_signal_strength(-45) is None
    alert = evaluator.evaluate_signal_strength(-75)

    assert alert is not None
    assert alert.kind == AlertKind.PROXIMITY_LOST
    assert "-75" in alert.message
    assert store.proximity == ProximityState.FAR


def test_far_to_near_and_repeated_far_emit_nothing() -> None:
    evaluator, _store = _evaluator()

    assert evaluator.evaluate_signal_strength(-80) is not None
    assert evaluator.evaluate_signal_strength(-85) is None
    assert evaluator.evaluate_signal_strength(-40) is None


def test_unknown_signal_strength_leaves_proximity_untouched() -> None:
    evaluator, store = _evaluator()
    evaluator.evaluate_signal_strength(-45)

    assert evaluator.evaluate_signal_strength(-1) is None
    assert store.proximity == ProximityState.NEAR


def test_direct_proximity_channel_edges() -> None:
    evaluator, store = _evaluator()

    assert evaluator.evaluate_proximity(1) is None
    lost = evaluator.evaluate_proximity(0)
    assert lost is not None
    assert lost.kind == AlertKind.PROXIMITY_LOST
    assert evaluator.evaluate_proximity(0) is None
    assert store.proximity == ProximityState.FAR
