"""Tests for SwitchBot service-data decoding."""

from __future__ import annotations

from uuid import UUID

import pytest
from pydantic import ValidationError

from switchbot_exporter.decoder import (
    DecodeOutcome,
    decode,
    decode_service_data,
    is_switchbot,
    to_uuid,
)
from switchbot_exporter.models.readings import CurtainReading, MeterReading

SERVICE_UUID = "cba20d00-224d-11e6-9fb8-0002a5d5c51b"
DATA_UUID = "00000d00-0000-1000-8000-00805f9b34fb"

METER_BYTES = bytes([0x54, 0x00, 0x64, 0x05, 0x16, 0x32])
CURTAIN_BYTES = bytes([0x63, 0x00, 0x32, 0x4B, 0xA0])


# ------------------------------------------------------------------
# Single payloads
# ------------------------------------------------------------------


class TestDecodeServiceData:
    def test_meter(self) -> None:
        reading = decode_service_data(METER_BYTES)

        assert isinstance(reading, MeterReading)
        assert reading.battery_percent == 100
        assert reading.temperature_celsius == pytest.approx(22.5, abs=1e-9)
        assert reading.humidity_percent == 50

    def test_curtain(self) -> None:
        reading = decode_service_data(CURTAIN_BYTES)

        assert isinstance(reading, CurtainReading)
        assert reading.battery_percent == 50
        assert reading.position_percent == 75
        assert reading.brightness_level == 10

    def test_meter_one_byte_short_is_rejected(self) -> None:
        assert decode_service_data(METER_BYTES[:5]) is None

    def test_curtain_one_byte_short_is_rejected(self) -> None:
        assert decode_service_data(CURTAIN_BYTES[:4]) is None

    def test_empty_payload(self) -> None:
        assert decode_service_data(b"") is None

    def test_unknown_type_byte(self) -> None:
        assert decode_service_data(bytes([0x48, 0x00, 0x64, 0x05, 0x16, 0x32])) is None

    def test_extra_trailing_bytes_are_ignored(self) -> None:
        reading = decode_service_data(METER_BYTES + b"\xff\xff")

        assert reading == decode_service_data(METER_BYTES)

    def test_status_bit_on_temperature_integer_is_masked(self) -> None:
        flagged = bytes([0x54, 0x00, 0x64, 0x05, 0x96, 0x32])

        assert decode_service_data(flagged) == decode_service_data(METER_BYTES)

    def test_status_bits_on_battery_humidity_position_are_masked(self) -> None:
        meter = decode_service_data(bytes([0x54, 0x00, 0xE4, 0x05, 0x16, 0xB2]))
        curtain = decode_service_data(bytes([0x63, 0x00, 0xB2, 0xCB, 0xA0]))

        assert meter == decode_service_data(METER_BYTES)
        assert curtain == decode_service_data(CURTAIN_BYTES)

    def test_temperature_fraction_uses_full_byte(self) -> None:
        reading = decode_service_data(bytes([0x54, 0x00, 0x64, 0x09, 0x00, 0x32]))

        assert isinstance(reading, MeterReading)
        assert reading.temperature_celsius == pytest.approx(0.9, abs=1e-9)

    @pytest.mark.parametrize(("fraction", "integer"), [(0, 0), (1, 21), (9, 127), (3, 5)])
    def test_temperature_tenths_resolution(self, fraction: int, integer: int) -> None:
        reading = decode_service_data(bytes([0x54, 0x00, 0x64, fraction, integer, 0x32]))

        assert isinstance(reading, MeterReading)
        assert reading.temperature_celsius == pytest.approx(integer + fraction / 10, abs=1e-9)

    def test_brightness_is_top_nibble(self) -> None:
        reading = decode_service_data(bytes([0x63, 0x00, 0x32, 0x4B, 0xFF]))

        assert isinstance(reading, CurtainReading)
        assert reading.brightness_level == 15

    def test_readings_are_immutable(self) -> None:
        reading = decode_service_data(METER_BYTES)

        with pytest.raises(ValidationError):
            reading.battery_percent = 1  # type: ignore[union-attr,misc]


# ------------------------------------------------------------------
# Whole advertisements
# ------------------------------------------------------------------


class TestDecode:
    def test_recognized(self) -> None:
        result = decode([SERVICE_UUID], [(DATA_UUID, METER_BYTES)])

        assert result.outcome == DecodeOutcome.RECOGNIZED
        assert result.recognized
        assert len(result.readings) == 1
        assert isinstance(result.readings[0], MeterReading)

    def test_missing_family_uuid_is_ignored(self) -> None:
        result = decode(["0000180f-0000-1000-8000-00805f9b34fb"], [(DATA_UUID, METER_BYTES)])

        assert result.outcome == DecodeOutcome.IGNORED
        assert result.readings == ()

    def test_no_service_uuids_is_ignored(self) -> None:
        assert decode([], {DATA_UUID: METER_BYTES}).outcome == DecodeOutcome.IGNORED

    def test_family_without_decodable_entry_is_not_recognized(self) -> None:
        result = decode([SERVICE_UUID], [(DATA_UUID, METER_BYTES[:5]), (DATA_UUID, b"\x10\x00")])

        assert result.outcome == DecodeOutcome.NOT_RECOGNIZED
        assert not result.recognized

    def test_family_without_service_data_is_not_recognized(self) -> None:
        assert decode([SERVICE_UUID], []).outcome == DecodeOutcome.NOT_RECOGNIZED

    def test_bad_entries_are_skipped_and_scanning_continues(self) -> None:
        result = decode(
            [SERVICE_UUID],
            [
                (DATA_UUID, b""),
                (DATA_UUID, METER_BYTES[:3]),
                (DATA_UUID, b"\x99\x00\x00\x00\x00\x00"),
                (DATA_UUID, CURTAIN_BYTES),
            ],
        )

        assert result.outcome == DecodeOutcome.RECOGNIZED
        assert [type(reading) for reading in result.readings] == [CurtainReading]

    def test_every_recognized_entry_yields_a_reading(self) -> None:
        result = decode([SERVICE_UUID], [(DATA_UUID, METER_BYTES), (DATA_UUID, CURTAIN_BYTES)])

        assert [type(reading) for reading in result.readings] == [MeterReading, CurtainReading]

    def test_mapping_service_data(self) -> None:
        result = decode({SERVICE_UUID}, {DATA_UUID: CURTAIN_BYTES})

        assert isinstance(result.readings[0], CurtainReading)


class TestServiceUuid:
    @pytest.mark.parametrize(
        "value",
        [
            SERVICE_UUID,
            SERVICE_UUID.upper(),
            "cba20d00224d11e69fb80002a5d5c51b",
            UUID(SERVICE_UUID),
            f"  {SERVICE_UUID} ",
        ],
    )
    def test_accepted_forms(self, value: str | UUID) -> None:
        assert is_switchbot([value])

    def test_unparseable_uuid_is_skipped(self) -> None:
        assert to_uuid("not-a-uuid") is None
        assert is_switchbot(["not-a-uuid", SERVICE_UUID])
        assert not is_switchbot(["not-a-uuid"])
