"""Alert events raised on qualifying state transitions."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pytics._constants import PROXIMITY_NOTIFICATION_ID, SMOKE_NOTIFICATION_ID


class AlertKind(StrEnum):
    SMOKE_DETECTED = "smoke-detected"
    PROXIMITY_LOST = "proximity-lost"


class AlertEvent(BaseModel):
    """A user-facing alert.

    ``identifier`` is stable per kind so a notification collaborator can
    replace an earlier notification of the same kind instead of stacking.
    """

    model_config = ConfigDict(frozen=True)

    kind: AlertKind
    title: str
    message: str
    identifier: int
    raised_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def smoke_detected(cls) -> AlertEvent:
        return cls(
            kind=AlertKind.SMOKE_DETECTED,
            title="Smoke alert!",
            message="Smoke or gas has been detected in the environment.",
            identifier=SMOKE_NOTIFICATION_ID,
        )

    @classmethod
    def proximity_lost(cls, signal_strength: int | None = None) -> AlertEvent:
        message = "Connection with the bracelet has been lost."
        if signal_strength is not None:
            message = f"{message} (signal strength {signal_strength} dBm)"
        return cls(
            kind=AlertKind.PROXIMITY_LOST,
            title="Bracelet alert!",
            message=message,
            identifier=PROXIMITY_NOTIFICATION_ID,
        )
