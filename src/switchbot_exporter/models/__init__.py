"""Data models for decoded readings and stored device state."""

from switchbot_exporter.models.readings import CurtainReading, MeterReading, Reading
from switchbot_exporter.models.records import DeviceRecord, MetricSample, ensure_utc, normalize_device_id

__all__ = [
    "CurtainReading",
    "DeviceRecord",
    "MeterReading",
    "MetricSample",
    "Reading",
    "ensure_utc",
    "normalize_device_id",
]
