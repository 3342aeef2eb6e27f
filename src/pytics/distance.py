"""Distance estimation from received signal strength.

Two interchangeable policies are provided; a monitor uses exactly one,
selected by :attr:`pytics.config.TicsConfig.distance_model`.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Protocol

from pytics._constants import (
    DEFAULT_DISTANCE_BANDS,
    FARTHEST_BAND_M,
    PATH_LOSS_EXPONENT,
    TX_POWER_DBM,
    UNKNOWN,
)
from pytics.config import DistanceModel, TicsConfig
from pytics.exceptions import TicsConfigError


def is_usable_signal_strength(signal_strength: int) -> bool:
    """Whether a reading can be turned into a distance.

    Real readings are negative dBm values; ``-1`` is the "no data"
    sentinel and zero or positive values are device errors.
    """
    return signal_strength < UNKNOWN


class DistanceEstimator(Protocol):
    def estimate(self, signal_strength: int) -> float: ...


class LogDistanceEstimator:
    """Log-distance path-loss model.

    ``distance = 10 ** ((tx_power - rssi) / (10 * n))``
    """

    def __init__(self, *, tx_power: int = TX_POWER_DBM, path_loss_exponent: float = PATH_LOSS_EXPONENT) -> None:
        if path_loss_exponent <= 0:
            raise TicsConfigError(f"path_loss_exponent must be positive, got {path_loss_exponent}")
        self._tx_power = tx_power
        self._n = path_loss_exponent

    def estimate(self, signal_strength: int) -> float:
        """Return the estimated distance in meters, ``0.0`` when unknown.

        Readings too weak for a float result map to ``math.inf``.
        """
        if not is_usable_signal_strength(signal_strength):
            return 0.0
        try:
            exponent = (self._tx_power - signal_strength) / (10 * self._n)
            return float(10**exponent)
        except OverflowError:
            return math.inf


class BandDistanceEstimator:
    """Fixed distance per signal-strength band.

    ``bands`` holds ``(lower_bound_dbm, distance_m)`` pairs; a reading
    strictly above ``lower_bound_dbm`` falls in that band. Readings below
    every band map to ``farthest``.
    """

    def __init__(
        self,
        bands: Sequence[tuple[int, float]] = DEFAULT_DISTANCE_BANDS,
        *,
        farthest: float = FARTHEST_BAND_M,
    ) -> None:
        self._bands = sorted(bands, key=lambda band: band[0], reverse=True)
        self._farthest = farthest

    def estimate(self, signal_strength: int) -> float:
        if not is_usable_signal_strength(signal_strength):
            return 0.0
        for lower_bound, distance in self._bands:
            if signal_strength > lower_bound:
                return distance
        return self._farthest


def build_estimator(config: TicsConfig) -> DistanceEstimator:
    """Create the estimator selected by *config*."""
    if config.distance_model == DistanceModel.BANDS:
        return BandDistanceEstimator()
    return LogDistanceEstimator(tx_power=config.tx_power, path_loss_exponent=config.path_loss_exponent)
