"""Internal MQTT session lifecycle: connect, subscribe, disconnect."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import paho.mqtt.client as mqtt

from pytics._constants import DEFAULT_BROKER_PORT
from pytics.exceptions import TicsConfigError, TicsConnectionError
from pytics.models.telemetry import TelemetrySample

_SUPPORTED_SCHEMES = frozenset({"tcp", "mqtt"})


@dataclass(frozen=True)
class MqttSession:
    """An established broker session."""

    client_id: str
    broker_host: str
    broker_port: int
    topics: tuple[str, ...]
    clean_session: bool = True


def parse_broker_url(raw_broker: str) -> tuple[str, int]:
    """Split ``tcp://host:port`` (scheme and port optional) into host and port."""
    value = raw_broker.strip()
    if not value:
        raise TicsConfigError("Broker value is empty")

    if "://" in value:
        scheme, value = value.split("://", 1)
        if scheme.lower() not in _SUPPORTED_SCHEMES:
            raise TicsConfigError(f"Unsupported broker scheme {scheme!r} in {raw_broker!r}")
    if "/" in value:
        value = value.split("/", 1)[0]

    host, _, maybe_port = value.rpartition(":")
    if host and maybe_port.isdigit():
        return host, int(maybe_port)
    if host:
        raise TicsConfigError(f"Invalid broker port in {raw_broker!r}")
    return value, DEFAULT_BROKER_PORT


def build_client_id(prefix: str, *, now: float | None = None) -> str:
    """Time-derived client id so relaunched processes never collide."""
    timestamp = time.time() if now is None else now
    return f"{prefix}-{int(timestamp * 1000)}"


class ConnectionManager:
    """Threaded paho-mqtt session that forwards samples to a callback.

    Uses a clean (non-persistent) session, QoS 0 subscriptions and no
    automatic reconnect: a lost connection is logged and left closed.
    """

    def __init__(
        self,
        *,
        topics: Iterable[str],
        on_sample: Callable[[TelemetrySample], None],
        loop: asyncio.AbstractEventLoop | None = None,
        keepalive: int = 60,
        connect_timeout: float = 10.0,
        logger: logging.Logger | None = None,
    ) -> None:
        self._topics = tuple(topics)
        self._on_sample = on_sample
        self._loop = loop
        self._keepalive = keepalive
        self._connect_timeout = connect_timeout
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._session: MqttSession | None = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def session(self) -> MqttSession | None:
        return self._session

    def connect(self, address: str, client_id: str) -> MqttSession:
        """Open a session to *address* and subscribe the topic set.

        Blocks until the broker acknowledges the connection. Raises
        :class:`TicsConnectionError` if the broker is unreachable, refuses
        the handshake or does not answer within ``connect_timeout``.
        """
        self.disconnect()
        host, port = parse_broker_url(address)
        self._logger.debug("MQTT connect requested host=%s port=%s client_id=%s", host, port, client_id)

        client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id,
            clean_session=True,
            protocol=mqtt.MQTTv311,
            reconnect_on_failure=False,
        )
        client.enable_logger(self._logger)

        acknowledged = threading.Event()
        refusals: list[str] = []

        def on_connect(
            c: mqtt.Client,
            _userdata: Any,
            _flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if reason_code.is_failure:
                self._logger.warning("MQTT connect failed: %s", reason_code)
                refusals.append(str(reason_code))
                acknowledged.set()
                return
            self._connected = True
            for topic in self._topics:
                self._logger.debug("MQTT subscribing topic=%s", topic)
                c.subscribe(topic, qos=0)
            acknowledged.set()

        def on_message(_c: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
            try:
                sample = TelemetrySample.from_message(msg.topic, msg.payload)
                if self._loop is None:
                    self._on_sample(sample)
                else:
                    self._loop.call_soon_threadsafe(self._on_sample, sample)
            except Exception:
                self._logger.debug("MQTT message hand-off failed topic=%s", msg.topic, exc_info=True)

        def on_disconnect(
            _c: mqtt.Client,
            _userdata: Any,
            _disconnect_flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if self._connected:
                self._logger.warning("MQTT connection lost: %s", reason_code)
            self._connected = False

        client.on_connect = on_connect
        client.on_message = on_message
        client.on_disconnect = on_disconnect

        try:
            client.connect(host, port, keepalive=self._keepalive)
        except (OSError, ValueError) as exc:
            raise TicsConnectionError(
                f"Could not reach broker {host}:{port}: {exc}",
                host=host,
                port=port,
                reason=str(exc),
            ) from exc
        client.loop_start()

        if not acknowledged.wait(self._connect_timeout) or refusals:
            reason = refusals[0] if refusals else "timed out waiting for CONNACK"
            self._connected = False
            try:
                client.disconnect()
            finally:
                client.loop_stop()
            raise TicsConnectionError(
                f"Broker {host}:{port} did not accept the connection: {reason}",
                host=host,
                port=port,
                reason=reason,
            )

        self._client = client
        self._session = MqttSession(
            client_id=client_id,
            broker_host=host,
            broker_port=port,
            topics=self._topics,
        )
        self._logger.info("Connected to MQTT broker %s:%s as %s", host, port, client_id)
        return self._session

    def disconnect(self) -> None:
        """Close the session; a no-op when already disconnected."""
        client = self._client
        self._client = None
        self._session = None
        was_connected = self._connected
        self._connected = False

        if client is None:
            return
        try:
            if was_connected:
                self._logger.debug("MQTT disconnect requested")
            client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT network loop stopped")
