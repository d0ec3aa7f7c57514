"""Store records and exposition rows."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from switchbot_exporter.models.readings import Reading


def normalize_device_id(value: str) -> str:
    """Canonical form of a BLE hardware address (stripped, upper-case)."""
    device_id = value.strip().upper()
    if not device_id:
        raise ValueError("device_id must be non-empty")
    return device_id


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class DeviceRecord(BaseModel):
    """Latest known state of one device.

    Records are immutable; the store replaces a device's record on every
    update, so a record handed out by a snapshot never changes afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    device_id: str = Field(..., description="BLE hardware address")
    reading: Reading
    last_seen_at: datetime

    @field_validator("device_id")
    @classmethod
    def _normalize_device_id(cls, value: str) -> str:
        return normalize_device_id(value)

    @field_validator("last_seen_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class MetricSample(NamedTuple):
    """One exposed value: a measured quantity for one device."""

    metric_name: str
    device_id: str
    value: float
