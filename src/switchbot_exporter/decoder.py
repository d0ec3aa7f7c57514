"""SwitchBot advertisement decoder.

Pure functions mapping the service UUIDs and service data of one BLE
advertisement to typed readings.  Nothing here holds state or performs
I/O, so the decoder can run on any thread without locking.

Layouts follow the public SwitchBot BLE open API: the first byte of each
service-data payload selects the device type, the following bytes carry
the measurements.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from enum import StrEnum
from uuid import UUID

from switchbot_exporter._constants import (
    CURTAIN_MIN_LENGTH,
    CURTAIN_TYPE,
    METER_MIN_LENGTH,
    METER_TYPE,
    STATUS_BIT_MASK,
    SWITCHBOT_SERVICE_UUID,
)
from switchbot_exporter.models.readings import CurtainReading, MeterReading, Reading

UuidLike = UUID | str
ServiceData = Mapping[UuidLike, bytes] | Iterable[tuple[UuidLike, bytes]]


class DecodeOutcome(StrEnum):
    RECOGNIZED = "recognized"
    IGNORED = "ignored"
    """The advertisement does not belong to the SwitchBot family."""
    NOT_RECOGNIZED = "not_recognized"
    """SwitchBot family, but no entry carried a known, complete payload."""


@dataclasses.dataclass(frozen=True)
class DecodeResult:
    outcome: DecodeOutcome
    readings: tuple[Reading, ...] = ()

    @property
    def recognized(self) -> bool:
        return self.outcome == DecodeOutcome.RECOGNIZED


IGNORED = DecodeResult(DecodeOutcome.IGNORED)
NOT_RECOGNIZED = DecodeResult(DecodeOutcome.NOT_RECOGNIZED)


def to_uuid(value: UuidLike) -> UUID | None:
    """Parse a UUID given as :class:`uuid.UUID` or text; ``None`` if unparseable."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value.strip())
    except (AttributeError, ValueError):
        return None


def is_switchbot(service_uuids: Iterable[UuidLike]) -> bool:
    return any(to_uuid(value) == SWITCHBOT_SERVICE_UUID for value in service_uuids)


def _decode_meter(payload: bytes) -> MeterReading | None:
    if len(payload) < METER_MIN_LENGTH:
        return None
    # Only the integer byte has the status bit; the tenths byte is used as-is.
    temp_fraction = payload[3]
    temp_integer = payload[4] & STATUS_BIT_MASK
    return MeterReading(
        battery_percent=float(payload[2] & STATUS_BIT_MASK),
        temperature_celsius=temp_integer + temp_fraction / 10,
        humidity_percent=float(payload[5] & STATUS_BIT_MASK),
    )


def _decode_curtain(payload: bytes) -> CurtainReading | None:
    if len(payload) < CURTAIN_MIN_LENGTH:
        return None
    return CurtainReading(
        battery_percent=float(payload[2] & STATUS_BIT_MASK),
        position_percent=float(payload[3] & STATUS_BIT_MASK),
        brightness_level=float(payload[4] >> 4),
    )


_DECODERS = {
    METER_TYPE: _decode_meter,
    CURTAIN_TYPE: _decode_curtain,
}


def decode_service_data(payload: bytes) -> Reading | None:
    """Decode a single service-data payload.

    Returns ``None`` for empty or undersized payloads and for unknown
    type bytes.
    """
    if not payload:
        return None
    decoder = _DECODERS.get(payload[0])
    if decoder is None:
        return None
    return decoder(bytes(payload))


def _iter_service_data(service_data: ServiceData) -> Iterable[tuple[UuidLike, bytes]]:
    if isinstance(service_data, Mapping):
        return service_data.items()
    return service_data


def decode(service_uuids: Iterable[UuidLike], service_data: ServiceData) -> DecodeResult:
    """Decode one advertisement.

    Parameters
    ----------
    service_uuids
        Service UUIDs listed in the advertisement.
    service_data
        Service data entries, as a mapping or an ordered sequence of
        ``(uuid, payload)`` pairs.  Every entry is inspected; each one
        that decodes contributes one reading, in order.

    Returns
    -------
    DecodeResult
        ``IGNORED`` when the SwitchBot service UUID is absent,
        ``NOT_RECOGNIZED`` when no entry decodes, ``RECOGNIZED`` otherwise.
    """
    if not is_switchbot(service_uuids):
        return IGNORED

    readings: list[Reading] = []
    for _uuid, payload in _iter_service_data(service_data):
        reading = decode_service_data(payload)
        if reading is not None:
            readings.append(reading)

    if not readings:
        return NOT_RECOGNIZED
    return DecodeResult(DecodeOutcome.RECOGNIZED, tuple(readings))
