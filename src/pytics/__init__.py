"""pytics - Telemetry reconciliation and alerting for the TICS smoke/proximity device."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytics")
except PackageNotFoundError:
    __version__ = "0+local"
from pytics.alerts import AlertEvaluator, classify_proximity
from pytics.client import TicsMonitor
from pytics.codec import parse_integer, parse_integer_strict
from pytics.config import DistanceModel, ProximityMode, TicsConfig
from pytics.distance import BandDistanceEstimator, LogDistanceEstimator
from pytics.engine import ReconciliationEngine
from pytics.exceptions import (
    TicsConfigError,
    TicsConnectionError,
    TicsError,
    TicsParseError,
    TicsPermissionDeniedError,
)
from pytics.models import (
    AlarmState,
    AlertEvent,
    AlertKind,
    DeviceState,
    ProximityState,
    StatusSnapshot,
    TelemetrySample,
)
from pytics.notifications import LoggingNotifier, NotificationGate, Notifier
from pytics.publisher import StatusPublisher
from pytics.router import TopicRouter
from pytics.state import DeviceStateStore

__all__ = [
    "__version__",
    "AlarmState",
    "AlertEvaluator",
    "AlertEvent",
    "AlertKind",
    "BandDistanceEstimator",
    "DeviceState",
    "DeviceStateStore",
    "DistanceModel",
    "LogDistanceEstimator",
    "LoggingNotifier",
    "NotificationGate",
    "Notifier",
    "ProximityMode",
    "ProximityState",
    "ReconciliationEngine",
    "StatusPublisher",
    "StatusSnapshot",
    "TelemetrySample",
    "TicsConfig",
    "TicsConfigError",
    "TicsConnectionError",
    "TicsError",
    "TicsMonitor",
    "TicsParseError",
    "TicsPermissionDeniedError",
    "TopicRouter",
    "classify_proximity",
    "parse_integer",
    "parse_integer_strict",
]
