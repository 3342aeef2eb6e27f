"""Status snapshot handed to the presentation layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pytics._constants import UNKNOWN


class StatusSnapshot(BaseModel):
    """Consolidated device status.

    Integer fields use ``-1`` for "unknown / no new information";
    ``distance_m`` is ``0.0`` while no usable signal strength exists.
    """

    model_config = ConfigDict(frozen=True)

    alarm: int = UNKNOWN
    proximity: int = UNKNOWN
    signal_strength: int = UNKNOWN
    distance_m: float = 0.0

    @property
    def distance_available(self) -> bool:
        return self.distance_m > 0.01

    def merged_over(self, previous: StatusSnapshot | None) -> StatusSnapshot:
        """Fill ``-1`` fields of this snapshot from *previous*."""
        if previous is None:
            return self
        return StatusSnapshot(
            alarm=previous.alarm if self.alarm == UNKNOWN else self.alarm,
            proximity=previous.proximity if self.proximity == UNKNOWN else self.proximity,
            signal_strength=previous.signal_strength if self.signal_strength == UNKNOWN else self.signal_strength,
            distance_m=self.distance_m if self.signal_strength != UNKNOWN else previous.distance_m,
        )
