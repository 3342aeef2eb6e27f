"""Edge-triggered alert decisions.

Each monitored condition moves ``UNKNOWN -> normal <-> alerting``. An
:class:`AlertEvent` is raised only when a sample moves the condition into
its alerting state; repeated samples with the same value raise nothing.

* Alarm: alerting is ``AlarmState.ACTIVE`` (payload ``1``).
* Proximity: alerting is ``ProximityState.FAR``.
"""

from __future__ import annotations

import logging

from pytics._constants import NEAR_THRESHOLD_DBM, UNKNOWN
from pytics.models.alert import AlertEvent
from pytics.models.state import AlarmState, ProximityState
from pytics.state.store import DeviceStateStore

_LOGGER = logging.getLogger(__name__)


def classify_proximity(signal_strength: int, threshold: int = NEAR_THRESHOLD_DBM) -> ProximityState:
    """NEAR when *signal_strength* is strictly greater than *threshold*."""
    return ProximityState.NEAR if signal_strength > threshold else ProximityState.FAR


class AlertEvaluator:
    """Compare parsed values with the stored state and decide on alerts."""

    def __init__(
        self,
        store: DeviceStateStore,
        *,
        near_threshold: int = NEAR_THRESHOLD_DBM,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._near_threshold = near_threshold
        self._logger = logger or _LOGGER

    @property
    def near_threshold(self) -> int:
        return self._near_threshold

    def evaluate_alarm(self, value: int) -> AlertEvent | None:
        """Apply an alarm reading; ``1`` is active, anything else is clear."""
        alarm = AlarmState.ACTIVE if value == 1 else AlarmState.CLEAR
        previous = self._store.record_alarm(alarm)
        if alarm == AlarmState.ACTIVE and previous != AlarmState.ACTIVE:
            self._logger.warning("Smoke or gas detected")
            return AlertEvent.smoke_detected()
        return None

    def evaluate_proximity(self, value: int) -> AlertEvent | None:
        """Apply a direct proximity reading (``1`` near, anything else far)."""
        proximity = ProximityState.NEAR if value == 1 else ProximityState.FAR
        return self._apply_proximity(proximity, signal_strength=None)

    def evaluate_signal_strength(self, signal_strength: int) -> AlertEvent | None:
        """Derive proximity from a signal-strength reading.

        The unknown sentinel leaves the proximity state untouched.
        """
        if signal_strength == UNKNOWN:
            return None
        proximity = classify_proximity(signal_strength, self._near_threshold)
        return self._apply_proximity(proximity, signal_strength=signal_strength)

    def _apply_proximity(self, proximity: ProximityState, *, signal_strength: int | None) -> AlertEvent | None:
        previous = self._store.record_proximity(proximity)
        if proximity == ProximityState.FAR and previous != ProximityState.FAR:
            self._logger.warning("Bracelet out of range (signal strength: %s)", signal_strength)
            return AlertEvent.proximity_lost(signal_strength)
        return None
