from __future__ import annotations

from pytics.models.state import AlarmState, ProximityState
from pytics.state.store import DeviceStateStore


def test_initial_state_is_unknown() -> None:
    store = DeviceStateStore()

    snapshot = store.snapshot()

    assert store.alarm == AlarmState.UNKNOWN
    assert store.proximity == ProximityState.UNKNOWN
    assert store.signal_strength is None
    assert snapshot.alarm == -1
    assert snapshot.proximity == -1
    assert snapshot.signal_strength == -1
    assert snapshot.distance_m == 0.0


def test_record_returns_previous_value() -> None:
    store = DeviceStateStore()

    assert store.record_alarm(AlarmState.ACTIVE) == AlarmState.UNKNOWN
    assert store.record_alarm(AlarmState.CLEAR) == AlarmState.ACTIVE
    assert store.record_proximity(ProximityState.NEAR) == ProximityState.UNKNOWN


def test_known_values_never_revert_to_unknown() -> None:
    store = DeviceStateStore()
    store.record_alarm(AlarmState.ACTIVE)
    store.record_proximity(ProximityState.FAR)
    store.record_signal_strength(-70, 2.0)

    store.record_alarm(AlarmState.UNKNOWN)
    store.record_proximity(ProximityState.UNKNOWN)
    accepted = store.record_signal_strength(-1, 0.0)

    assert not accepted
    assert store.alarm == AlarmState.ACTIVE
    assert store.proximity == ProximityState.FAR
    assert store.signal_strength == -70
    assert store.distance_m == 2.0


def test_state_copy_is_detached() -> None:
    store = DeviceStateStore()
    copy = store.state()

    store.record_alarm(AlarmState.ACTIVE)

    assert copy.alarm == AlarmState.UNKNOWN
    assert store.state().alarm == AlarmState.ACTIVE
