from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from aiohttp import test_utils

from switchbot_exporter.metrics import build_registry, metric_samples
from switchbot_exporter.models.readings import CurtainReading, MeterReading
from switchbot_exporter.models.records import DeviceRecord, MetricSample
from switchbot_exporter.server import create_app
from switchbot_exporter.state.store import DeviceStateStore

METER = "AA:BB:CC:DD:EE:01"
CURTAIN = "AA:BB:CC:DD:EE:02"


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def _populated_store(now: list[datetime]) -> DeviceStateStore:
    store = DeviceStateStore(clock=lambda: now[0])
    store.upsert(METER, MeterReading(temperature_celsius=22.5, humidity_percent=50, battery_percent=100))
    store.upsert(CURTAIN, CurtainReading(position_percent=75, brightness_level=10, battery_percent=50))
    return store


def test_metric_samples_per_variant() -> None:
    records = [
        DeviceRecord(
            device_id=METER,
            reading=MeterReading(temperature_celsius=-3.4, humidity_percent=40, battery_percent=90),
            last_seen_at=_dt(),
        ),
        DeviceRecord(
            device_id=CURTAIN,
            reading=CurtainReading(position_percent=0, brightness_level=2, battery_percent=80),
            last_seen_at=_dt(),
        ),
    ]

    samples = metric_samples(records)

    assert sorted(samples) == sorted(
        [
            MetricSample("temperature", METER, -3.4),
            MetricSample("humidity", METER, 40.0),
            MetricSample("battery", METER, 90.0),
            MetricSample("position", CURTAIN, 0.0),
            MetricSample("brightness", CURTAIN, 2.0),
            MetricSample("battery", CURTAIN, 80.0),
        ]
    )


def test_collector_exposes_live_devices() -> None:
    now = [_dt()]
    registry = build_registry(_populated_store(now))

    assert registry.get_sample_value("switchbot_temperature", {"hw": METER}) == 22.5
    assert registry.get_sample_value("switchbot_humidity", {"hw": METER}) == 50
    assert registry.get_sample_value("switchbot_battery", {"hw": METER}) == 100
    assert registry.get_sample_value("switchbot_position", {"hw": CURTAIN}) == 75
    assert registry.get_sample_value("switchbot_brightness", {"hw": CURTAIN}) == 10
    assert registry.get_sample_value("switchbot_battery", {"hw": CURTAIN}) == 50
    assert registry.get_sample_value("switchbot_last_seen_timestamp_seconds", {"hw": METER}) == _dt().timestamp()


def test_collector_omits_quantities_of_other_variant() -> None:
    registry = build_registry(_populated_store([_dt()]))

    assert registry.get_sample_value("switchbot_position", {"hw": METER}) is None
    assert registry.get_sample_value("switchbot_temperature", {"hw": CURTAIN}) is None


def test_collector_hides_stale_devices() -> None:
    now = [_dt()]
    registry = build_registry(_populated_store(now))

    now[0] = _dt() + timedelta(seconds=61)

    assert registry.get_sample_value("switchbot_temperature", {"hw": METER}) is None
    assert registry.get_sample_value("switchbot_position", {"hw": CURTAIN}) is None


@pytest.mark.asyncio
async def test_metrics_endpoint_renders_text_format() -> None:
    registry = build_registry(_populated_store([_dt()]))

    async with test_utils.TestClient(test_utils.TestServer(create_app(registry))) as client:
        response = await client.get("/metrics")
        body = await response.text()

    assert response.status == 200
    assert response.headers["Content-Type"].startswith("text/plain")
    assert f'switchbot_temperature{{hw="{METER}"}} 22.5' in body
    assert f'switchbot_brightness{{hw="{CURTAIN}"}} 10.0' in body


@pytest.mark.asyncio
async def test_healthz() -> None:
    registry = build_registry(DeviceStateStore())

    async with test_utils.TestClient(test_utils.TestServer(create_app(registry))) as client:
        response = await client.get("/healthz")

        assert response.status == 200
        assert await response.text() == "ok"
