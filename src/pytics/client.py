"""High-level async monitor for a single TICS device."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from pytics._mqtt import ConnectionManager, MqttSession, build_client_id
from pytics.config import TicsConfig
from pytics.engine import ReconciliationEngine
from pytics.exceptions import TicsConnectionError, TicsError
from pytics.models.alert import AlertEvent
from pytics.models.state import DeviceState
from pytics.models.status import StatusSnapshot
from pytics.models.telemetry import TelemetrySample
from pytics.notifications import NotificationGate, Notifier
from pytics.publisher import StatusObserver, StatusPublisher

_logger = logging.getLogger(__name__)

_STOP = object()


class TicsMonitor:
    """Async monitor for the TICS smoke sensor and proximity bracelet.

    Usage::

        async with TicsMonitor(config) as monitor:
            monitor.subscribe(print)
            await monitor.start()
            await monitor.run()

    The MQTT network thread only enqueues samples; :meth:`run` is the single
    consumer and therefore the only writer of the device state.
    """

    def __init__(
        self,
        config: TicsConfig | None = None,
        *,
        notifier: Notifier | None = None,
        notification_permission: Callable[[], bool] | None = None,
        on_alert: Callable[[AlertEvent], None] | None = None,
    ) -> None:
        self._config = config or TicsConfig()
        self._notifier = notifier
        self._notification_permission = notification_permission
        self._on_alert = on_alert
        self._loop: asyncio.AbstractEventLoop | None = None
        self._queue: asyncio.Queue[Any] | None = None
        self._engine: ReconciliationEngine | None = None
        self._connection: ConnectionManager | None = None
        self._pending_observers: list[StatusObserver] = []
        self._stopped = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TicsMonitor:
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._stopped = False

        gate_kwargs: dict[str, Any] = {"enabled": self._config.notifications_enabled, "logger": _logger}
        if self._notification_permission is not None:
            gate_kwargs["permission"] = self._notification_permission
        publisher = StatusPublisher(loop=self._loop, logger=_logger)
        for observer in self._pending_observers:
            publisher.subscribe(observer)
        self._pending_observers = []

        self._engine = ReconciliationEngine(
            self._config,
            publisher=publisher,
            notifications=NotificationGate(self._notifier, **gate_kwargs),
            logger=_logger,
        )
        self._connection = ConnectionManager(
            topics=self._engine.topics,
            on_sample=self._enqueue,
            loop=self._loop,
            keepalive=self._config.keepalive,
            connect_timeout=self._config.connect_timeout,
            logger=_logger,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()
        self._connection = None
        self._loop = None

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    async def start(self) -> bool:
        """Connect once and subscribe the device topics.

        On failure the error is logged and ``False`` is returned; the
        monitor keeps running with unknown state and does not retry.
        """
        connection = self._require_connection()
        loop = self._require_loop()
        client_id = build_client_id(self._config.client_id_prefix)
        try:
            session: MqttSession = await loop.run_in_executor(
                None, connection.connect, self._config.broker_url, client_id
            )
        except TicsConnectionError as exc:
            _logger.warning("MQTT connection failed, continuing with unknown state: %s", exc)
            return False
        _logger.debug("Listening on %s", ", ".join(session.topics))
        return True

    @property
    def is_connected(self) -> bool:
        return self._connection is not None and self._connection.is_connected

    async def stop(self) -> None:
        """Disconnect and let :meth:`run` finish the in-flight sample."""
        if self._stopped:
            return
        self._stopped = True
        connection = self._connection
        if connection is not None and self._loop is not None:
            await self._loop.run_in_executor(None, connection.disconnect)
        if self._queue is not None:
            self._queue.put_nowait(_STOP)
        _logger.debug("Monitor stopped")

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Process queued samples one at a time until :meth:`stop`."""
        queue = self._require_queue()
        engine = self._require_engine()
        while True:
            item = await queue.get()
            if item is _STOP:
                return
            self._handle(engine, item)

    def feed(self, topic: str, payload: str) -> None:
        """Queue a sample as if it had arrived from the broker."""
        self._enqueue(TelemetrySample(topic=topic, payload=payload))

    def _enqueue(self, sample: TelemetrySample) -> None:
        if self._stopped:
            return
        self._require_queue().put_nowait(sample)

    def _handle(self, engine: ReconciliationEngine, sample: TelemetrySample) -> None:
        try:
            alerts = engine.process(sample)
        except Exception:
            _logger.warning("Sample processing failed topic=%s", sample.topic, exc_info=True)
            return
        if self._on_alert is None:
            return
        for alert in alerts:
            try:
                self._on_alert(alert)
            except Exception:
                _logger.debug("Alert callback failed alert=%s", alert.kind, exc_info=True)

    # ------------------------------------------------------------------
    # Observers / state
    # ------------------------------------------------------------------

    def subscribe(self, observer: StatusObserver) -> Callable[[], None]:
        """Register a status observer; returns an unsubscribe callable."""
        if self._engine is None:
            self._pending_observers.append(observer)

            def _unsubscribe_pending() -> None:
                if observer in self._pending_observers:
                    self._pending_observers.remove(observer)

            return _unsubscribe_pending
        return self._engine.publisher.subscribe(observer)

    def snapshot(self) -> StatusSnapshot:
        return self._require_engine().snapshot()

    def state(self) -> DeviceState:
        return self._require_engine().state()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_engine(self) -> ReconciliationEngine:
        if self._engine is None:
            raise TicsError("Monitor not initialized. Use 'async with TicsMonitor(...) as monitor:'")
        return self._engine

    def _require_connection(self) -> ConnectionManager:
        if self._connection is None:
            raise TicsError("Monitor not initialized. Use 'async with TicsMonitor(...) as monitor:'")
        return self._connection

    def _require_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            raise TicsError("Monitor not initialized. Use 'async with TicsMonitor(...) as monitor:'")
        return self._loop

    def _require_queue(self) -> asyncio.Queue[Any]:
        if self._queue is None:
            raise TicsError("Monitor not initialized. Use 'async with TicsMonitor(...) as monitor:'")
        return self._queue
