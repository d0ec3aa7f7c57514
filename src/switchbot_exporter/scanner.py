"""Periodic BLE scanning.

The radio is only switched on for a short window in each cycle: with the
defaults it scans for 11 seconds and stays silent for the remaining 49,
which is enough to catch at least one advertisement from every device
while leaving the adapter idle most of the time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Literal, Protocol

from bleak import BleakScanner
from bleak.exc import BleakError

from switchbot_exporter._constants import DEFAULT_SCAN_INTERVAL, DEFAULT_SCAN_WINDOW
from switchbot_exporter.exceptions import SwitchBotScanError
from switchbot_exporter.ingestion.advertisement import AdvertisementIngestor

_logger = logging.getLogger(__name__)

ScanningMode = Literal["active", "passive"]


class Scanner(Protocol):
    """The part of :class:`bleak.BleakScanner` the scheduler relies on."""

    async def start(self) -> None: ...

    async def stop(self) -> None: ...


ScannerFactory = Callable[[Callable[..., Any]], Scanner]


class ScanScheduler:
    """Runs scan windows forever, routing advertisements to an ingestor."""

    def __init__(
        self,
        ingestor: AdvertisementIngestor,
        *,
        scan_window: float = DEFAULT_SCAN_WINDOW,
        scan_interval: float = DEFAULT_SCAN_INTERVAL,
        scanning_mode: ScanningMode = "active",
        adapter: str | None = None,
        scanner_factory: ScannerFactory | None = None,
    ) -> None:
        if scan_window <= 0 or scan_window > scan_interval:
            raise ValueError(f"invalid scan window {scan_window}s for interval {scan_interval}s")
        self._ingestor = ingestor
        self._scan_window = scan_window
        self._scan_interval = scan_interval
        self._scanning_mode = scanning_mode
        self._adapter = adapter
        self._scanner_factory = scanner_factory or self._bleak_scanner

    def _bleak_scanner(self, callback: Callable[..., Any]) -> Scanner:
        kwargs: dict[str, Any] = {}
        if self._adapter:
            kwargs["adapter"] = self._adapter
        return BleakScanner(detection_callback=callback, scanning_mode=self._scanning_mode, **kwargs)

    @property
    def idle_time(self) -> float:
        return self._scan_interval - self._scan_window

    async def scan_once(self) -> None:
        """Scan for one window, then switch the radio off again."""
        scanner = self._scanner_factory(self._ingestor.handle_bleak)
        try:
            await scanner.start()
        except BleakError as exc:
            raise SwitchBotScanError(f"Unable to start BLE scan: {exc}", adapter=self._adapter) from exc

        _logger.debug("Scan window opened for %.1fs", self._scan_window)
        try:
            await asyncio.sleep(self._scan_window)
        finally:
            try:
                await scanner.stop()
            except BleakError as exc:
                raise SwitchBotScanError(f"Unable to stop BLE scan: {exc}", adapter=self._adapter) from exc
        _logger.debug("Scan window closed, %d device(s) stored", len(self._ingestor.store))

    async def run(self) -> None:
        """Alternate scan windows and silence until cancelled."""
        _logger.info(
            "Scanning %.1fs every %.1fs (%s mode)",
            self._scan_window,
            self._scan_interval,
            self._scanning_mode,
        )
        while True:
            await self.scan_once()
            await asyncio.sleep(self.idle_time)
