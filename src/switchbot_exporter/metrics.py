"""Prometheus exposition of the device state store.

Every scrape takes one snapshot of the store and renders it as gauge
families, one sample per device and measured quantity.  Only the
quantities of a device's reading type are emitted.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime
from typing import assert_never

from prometheus_client import CollectorRegistry
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from switchbot_exporter._constants import DEVICE_LABEL, METRICS_NAMESPACE
from switchbot_exporter.models.readings import CurtainReading, MeterReading, Reading
from switchbot_exporter.models.records import DeviceRecord, MetricSample
from switchbot_exporter.state.store import DeviceStateStore

#: Metric name -> HELP text, in exposition order.
METRICS: dict[str, str] = {
    "temperature": "Temperature in degrees Celsius.",
    "humidity": "Relative humidity in percent.",
    "battery": "Battery level in percent.",
    "position": "Curtain position in percent.",
    "brightness": "Ambient light level (0-15).",
}

LAST_SEEN_METRIC = "last_seen_timestamp_seconds"


def reading_values(reading: Reading) -> dict[str, float]:
    """Metric name -> value for the quantities *reading* carries."""
    match reading:
        case MeterReading():
            return {
                "temperature": reading.temperature_celsius,
                "humidity": reading.humidity_percent,
                "battery": reading.battery_percent,
            }
        case CurtainReading():
            return {
                "position": reading.position_percent,
                "brightness": reading.brightness_level,
                "battery": reading.battery_percent,
            }
        case _:
            assert_never(reading)


def metric_samples(records: Iterable[DeviceRecord]) -> list[MetricSample]:
    """Flatten snapshot records into one row per device and quantity."""
    samples: list[MetricSample] = []
    for record in records:
        for name, value in reading_values(record.reading).items():
            samples.append(MetricSample(name, record.device_id, float(value)))
    return samples


def _family(name: str, documentation: str) -> GaugeMetricFamily:
    return GaugeMetricFamily(f"{METRICS_NAMESPACE}_{name}", documentation, labels=[DEVICE_LABEL])


class SwitchBotCollector(Collector):
    """Custom collector rendering the live devices of a store."""

    def __init__(self, store: DeviceStateStore) -> None:
        self._store = store

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for name, documentation in METRICS.items():
            yield _family(name, documentation)
        yield _family(LAST_SEEN_METRIC, "Unix time of the last decoded advertisement.")

    def collect(self, now: datetime | None = None) -> Iterator[GaugeMetricFamily]:
        records = self._store.snapshot(now)

        families = {name: _family(name, documentation) for name, documentation in METRICS.items()}
        for sample in metric_samples(records):
            families[sample.metric_name].add_metric([sample.device_id], sample.value)

        last_seen = _family(LAST_SEEN_METRIC, "Unix time of the last decoded advertisement.")
        for record in records:
            last_seen.add_metric([record.device_id], record.last_seen_at.timestamp())

        yield from families.values()
        yield last_seen


def build_registry(store: DeviceStateStore) -> CollectorRegistry:
    """A dedicated registry exposing only the SwitchBot collector."""
    registry = CollectorRegistry()
    registry.register(SwitchBotCollector(store))
    return registry
