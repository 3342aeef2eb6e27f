"""Data models for device telemetry, state, alerts and status."""

from pytics.models._base import TicsEnum
from pytics.models.alert import AlertEvent, AlertKind
from pytics.models.state import AlarmState, DeviceState, ProximityState
from pytics.models.status import StatusSnapshot
from pytics.models.telemetry import TelemetrySample

__all__ = [
    "AlarmState",
    "AlertEvent",
    "AlertKind",
    "DeviceState",
    "ProximityState",
    "StatusSnapshot",
    "TelemetrySample",
    "TicsEnum",
]
