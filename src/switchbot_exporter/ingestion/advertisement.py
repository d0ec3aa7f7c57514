"""Advertisement ingestion.

Translates one observed advertisement into state-store updates:
gate on the SwitchBot service UUID, decode outside the store lock, then
upsert every reading with a single arrival timestamp.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from switchbot_exporter.decoder import DecodeOutcome, DecodeResult, ServiceData, UuidLike, decode
from switchbot_exporter.models.records import ensure_utc
from switchbot_exporter.state.store import DeviceStateStore

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice
    from bleak.backends.scanner import AdvertisementData

_logger = logging.getLogger(__name__)


class AdvertisementIngestor:
    """Feeds decoded advertisements into a :class:`DeviceStateStore`."""

    def __init__(
        self,
        store: DeviceStateStore,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or store.now

    @property
    def store(self) -> DeviceStateStore:
        return self._store

    def handle(
        self,
        device_id: str,
        service_uuids: Iterable[UuidLike],
        service_data: ServiceData,
    ) -> DecodeResult:
        """Decode one advertisement and record its readings.

        Never raises for payload contents; an advertisement that does not
        decode leaves the store untouched.
        """
        result = decode(service_uuids, service_data)
        if not result.recognized:
            if result.outcome == DecodeOutcome.NOT_RECOGNIZED:
                _logger.debug("No decodable SwitchBot payload from %s", device_id)
            return result

        now = ensure_utc(self._clock())
        for reading in result.readings:
            self._store.upsert(device_id, reading, now)
            _logger.debug("Updated %s: %s", device_id, reading)
        return result

    def handle_bleak(self, device: BLEDevice, advertisement: AdvertisementData) -> None:
        """Detection callback for :class:`bleak.BleakScanner`."""
        self.handle(device.address, advertisement.service_uuids, advertisement.service_data)
