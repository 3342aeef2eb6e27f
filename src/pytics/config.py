"""Monitor configuration for pytics."""

from __future__ import annotations

import dataclasses
import os
from enum import StrEnum
from typing import Any

from pytics._constants import (
    ALARM_SMOKE_SUFFIX,
    BRACELET_NEAR_SUFFIX,
    DEFAULT_BROKER_URL,
    DEFAULT_CLIENT_ID_PREFIX,
    DEFAULT_TOPIC_PREFIX,
    NEAR_THRESHOLD_DBM,
    PATH_LOSS_EXPONENT,
    RSSI_SUFFIX,
    TX_POWER_DBM,
)
from pytics.exceptions import TicsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


class ProximityMode(StrEnum):
    """Where the proximity state comes from.

    The two layouts are mutually exclusive; a monitor uses exactly one.
    """

    SIGNAL_STRENGTH = "signal_strength"
    CHANNEL = "channel"


class DistanceModel(StrEnum):
    LOG_DISTANCE = "log_distance"
    BANDS = "bands"


@dataclasses.dataclass(frozen=True)
class TicsConfig:
    """Monitor configuration.

    Parameters
    ----------
    broker_url : str
        Broker endpoint, e.g. ``"tcp://broker.hivemq.com:1883"``.
    client_id_prefix : str
        Prefix of the time-derived MQTT client id.
    keepalive : int
        MQTT keepalive in seconds.
    connect_timeout : float
        Seconds to wait for the broker CONNACK before giving up.
    topic_prefix : str
        Common prefix of the device telemetry topics.
    proximity_mode : ProximityMode
        Derive proximity from the signal strength (canonical) or read it
        from the dedicated ``braceletNear`` topic.
    near_threshold : int
        Signal strength (dBm) strictly above which the tag counts as near.
    tx_power : int
        Assumed signal strength at 1 meter (dBm).
    path_loss_exponent : float
        Environment factor of the log-distance model.
    distance_model : DistanceModel
        Continuous log-distance formula or fixed distance bands.
    notifications_enabled : bool
        Whether alerts are forwarded to the notifier at all.
    """

    broker_url: str = DEFAULT_BROKER_URL
    client_id_prefix: str = DEFAULT_CLIENT_ID_PREFIX
    keepalive: int = 60
    connect_timeout: float = 10.0
    topic_prefix: str = DEFAULT_TOPIC_PREFIX
    proximity_mode: ProximityMode = ProximityMode.SIGNAL_STRENGTH
    near_threshold: int = NEAR_THRESHOLD_DBM
    tx_power: int = TX_POWER_DBM
    path_loss_exponent: float = PATH_LOSS_EXPONENT
    distance_model: DistanceModel = DistanceModel.LOG_DISTANCE
    notifications_enabled: bool = True

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "proximity_mode", ProximityMode(self.proximity_mode))
            object.__setattr__(self, "distance_model", DistanceModel(self.distance_model))
        except ValueError as exc:
            raise TicsConfigError(str(exc)) from exc
        if self.path_loss_exponent <= 0:
            raise TicsConfigError(f"path_loss_exponent must be positive, got {self.path_loss_exponent}")
        if self.connect_timeout <= 0:
            raise TicsConfigError(f"connect_timeout must be positive, got {self.connect_timeout}")

    def _topic(self, suffix: str) -> str:
        return f"{self.topic_prefix.rstrip('/')}/{suffix}"

    @property
    def alarm_topic(self) -> str:
        return self._topic(ALARM_SMOKE_SUFFIX)

    @property
    def signal_strength_topic(self) -> str:
        return self._topic(RSSI_SUFFIX)

    @property
    def proximity_topic(self) -> str:
        return self._topic(BRACELET_NEAR_SUFFIX)

    @classmethod
    def from_env(cls, **overrides: Any) -> TicsConfig:
        """Create configuration from environment variables.

        Reads optional ``TICS_*`` variables. Explicit keyword arguments
        override environment values.

        Returns
        -------
        TicsConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TICS_BROKER_URL": "broker_url",
            "TICS_CLIENT_ID_PREFIX": "client_id_prefix",
            "TICS_TOPIC_PREFIX": "topic_prefix",
            "TICS_PROXIMITY_MODE": "proximity_mode",
            "TICS_DISTANCE_MODEL": "distance_model",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val.strip()

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type]] = {
            "TICS_KEEPALIVE": ("keepalive", int),
            "TICS_CONNECT_TIMEOUT": ("connect_timeout", float),
            "TICS_NEAR_THRESHOLD": ("near_threshold", int),
            "TICS_TX_POWER": ("tx_power", int),
            "TICS_PATH_LOSS_EXPONENT": ("path_loss_exponent", float),
        }
        for env_key, (field_name, convert) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = convert(val)
            except ValueError as exc:
                raise TicsConfigError(f"{env_key} is not a valid {convert.__name__}: {val!r}") from exc

        if "notifications_enabled" not in overrides:
            config_kwargs["notifications_enabled"] = _env_bool(env.get("TICS_NOTIFICATIONS_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
