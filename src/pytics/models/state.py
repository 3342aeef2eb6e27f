"""Device state: last known value of every monitored signal."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pytics.models._base import TicsEnum


class AlarmState(TicsEnum):
    UNKNOWN = -1
    CLEAR = 0
    ACTIVE = 1


class ProximityState(TicsEnum):
    UNKNOWN = -1
    FAR = 0
    NEAR = 1


class DeviceState(BaseModel):
    """Mutable per-device state owned by :class:`pytics.state.store.DeviceStateStore`.

    ``None`` means the signal has not been observed yet.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    alarm: AlarmState = AlarmState.UNKNOWN
    proximity: ProximityState = ProximityState.UNKNOWN
    signal_strength: int | None = None
    distance_m: float | None = None
