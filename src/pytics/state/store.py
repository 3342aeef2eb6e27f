"""In-memory last-known device state.

Fields move from unknown to known and then only between known values;
recording the unknown sentinel never erases an observed value.
"""

from __future__ import annotations

from pytics._constants import UNKNOWN
from pytics.models.state import AlarmState, DeviceState, ProximityState
from pytics.models.status import StatusSnapshot


class DeviceStateStore:
    """Last-known state of the monitored device.

    Not thread-safe: a single delivery path is expected to be the only
    writer.
    """

    def __init__(self) -> None:
        self._state = DeviceState()

    @property
    def alarm(self) -> AlarmState:
        return self._state.alarm

    @property
    def proximity(self) -> ProximityState:
        return self._state.proximity

    @property
    def signal_strength(self) -> int | None:
        return self._state.signal_strength

    @property
    def distance_m(self) -> float | None:
        return self._state.distance_m

    def record_alarm(self, alarm: AlarmState) -> AlarmState:
        """Store *alarm* and return the previous value."""
        previous = self._state.alarm
        if alarm.is_known:
            self._state.alarm = alarm
        return previous

    def record_proximity(self, proximity: ProximityState) -> ProximityState:
        """Store *proximity* and return the previous value."""
        previous = self._state.proximity
        if proximity.is_known:
            self._state.proximity = proximity
        return previous

    def record_signal_strength(self, signal_strength: int, distance_m: float) -> bool:
        """Store a signal-strength reading with its distance estimate.

        Returns ``False`` (and stores nothing) for the unknown sentinel.
        """
        if signal_strength == UNKNOWN:
            return False
        self._state.signal_strength = signal_strength
        self._state.distance_m = distance_m
        return True

    def state(self) -> DeviceState:
        """Return a detached copy of the current state."""
        return self._state.model_copy()

    def snapshot(self) -> StatusSnapshot:
        state = self._state
        return StatusSnapshot(
            alarm=int(state.alarm),
            proximity=int(state.proximity),
            signal_strength=UNKNOWN if state.signal_strength is None else state.signal_strength,
            distance_m=0.0 if state.distance_m is None else state.distance_m,
        )
