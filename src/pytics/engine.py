"""Telemetry reconciliation engine.

Owns the device state and wires decoding, alert decisions, distance
estimation, notification and status publishing around a topic router.
The engine does no I/O of its own; callers feed it samples one at a time.
"""

from __future__ import annotations

import logging

from pytics._constants import ALARM_FALLBACK, PROXIMITY_FALLBACK, SIGNAL_STRENGTH_FALLBACK
from pytics.alerts import AlertEvaluator
from pytics.codec import parse_integer
from pytics.config import ProximityMode, TicsConfig
from pytics.distance import DistanceEstimator, build_estimator
from pytics.models.alert import AlertEvent
from pytics.models.state import DeviceState
from pytics.models.status import StatusSnapshot
from pytics.models.telemetry import TelemetrySample
from pytics.notifications import NotificationGate
from pytics.publisher import StatusPublisher
from pytics.router import TopicRouter
from pytics.state.store import DeviceStateStore

_LOGGER = logging.getLogger(__name__)


class ReconciliationEngine:
    """Turn telemetry samples into state, alerts and status snapshots."""

    def __init__(
        self,
        config: TicsConfig | None = None,
        *,
        publisher: StatusPublisher | None = None,
        notifications: NotificationGate | None = None,
        estimator: DistanceEstimator | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config or TicsConfig()
        self._logger = logger or _LOGGER
        self._store = DeviceStateStore()
        self._evaluator = AlertEvaluator(
            self._store,
            near_threshold=self._config.near_threshold,
            logger=self._logger,
        )
        self._estimator = estimator or build_estimator(self._config)
        self._publisher = publisher or StatusPublisher(logger=self._logger)
        self._notifications = notifications or NotificationGate(
            enabled=self._config.notifications_enabled,
            logger=self._logger,
        )
        self._pending_alerts: list[AlertEvent] = []

        self._router = TopicRouter(logger=self._logger)
        self._router.register(self._config.alarm_topic, self._handle_alarm)
        self._router.register(self._config.signal_strength_topic, self._handle_signal_strength)
        if self._config.proximity_mode == ProximityMode.CHANNEL:
            self._router.register(self._config.proximity_topic, self._handle_proximity)

    @property
    def topics(self) -> tuple[str, ...]:
        """Topics the engine has handlers for (the subscription set)."""
        return self._router.topics

    @property
    def publisher(self) -> StatusPublisher:
        return self._publisher

    def state(self) -> DeviceState:
        return self._store.state()

    def snapshot(self) -> StatusSnapshot:
        return self._store.snapshot()

    def process(self, sample: TelemetrySample) -> list[AlertEvent]:
        """Apply one sample and return the alerts it raised.

        A snapshot is published after every routed sample, whether or not
        the state changed. Unrouted samples change nothing.
        """
        self._logger.debug("Message received topic=%s payload=%r", sample.topic, sample.payload)
        self._pending_alerts = []
        if not self._router.dispatch(sample.topic, sample.payload):
            return []

        alerts = self._pending_alerts
        self._pending_alerts = []
        for alert in alerts:
            self._notifications.deliver(alert)
        self._publisher.publish(self._store.snapshot())
        return alerts

    def feed(self, topic: str, payload: str) -> list[AlertEvent]:
        """Convenience wrapper around :meth:`process`."""
        return self.process(TelemetrySample(topic=topic, payload=payload))

    def _raise(self, alert: AlertEvent | None) -> None:
        if alert is not None:
            self._pending_alerts.append(alert)

    def _handle_alarm(self, payload: str) -> None:
        value = parse_integer(payload, ALARM_FALLBACK)
        self._raise(self._evaluator.evaluate_alarm(value))

    def _handle_proximity(self, payload: str) -> None:
        value = parse_integer(payload, PROXIMITY_FALLBACK)
        self._raise(self._evaluator.evaluate_proximity(value))

    def _handle_signal_strength(self, payload: str) -> None:
        signal_strength = parse_integer(payload, SIGNAL_STRENGTH_FALLBACK)
        self._store.record_signal_strength(signal_strength, self._estimator.estimate(signal_strength))
        if self._config.proximity_mode == ProximityMode.SIGNAL_STRENGTH:
            self._raise(self._evaluator.evaluate_signal_strength(signal_strength))
