"""Inbound telemetry samples."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pytics.codec import decode_payload


class TelemetrySample(BaseModel):
    """One message received on a device topic.

    Created per inbound message and consumed immediately by the engine.
    """

    model_config = ConfigDict(frozen=True)

    topic: str
    payload: str
    received_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("received_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @classmethod
    def from_message(cls, topic: str, payload: bytes) -> TelemetrySample:
        """Build a sample from a raw MQTT message body."""
        return cls(topic=topic, payload=decode_payload(payload))
