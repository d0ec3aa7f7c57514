"""Custom exception hierarchy for switchbot_exporter."""

from __future__ import annotations


class SwitchBotError(Exception):
    """Base exception for all switchbot_exporter errors."""


class SwitchBotConfigError(SwitchBotError):
    """Invalid or missing configuration."""


class SwitchBotScanError(SwitchBotError):
    """The BLE radio could not be started or stopped.

    Raised by the scanner when the underlying adapter fails.  The process
    treats this as fatal; the scanner never retries on its own.
    """

    def __init__(self, message: str, *, adapter: str | None = None) -> None:
        self.adapter = adapter
        super().__init__(message)
