"""Exporter configuration for switchbot_exporter."""

from __future__ import annotations

import dataclasses
import logging
import math
import os
from typing import Any

from switchbot_exporter._constants import (
    DEFAULT_LISTEN,
    DEFAULT_SCAN_INTERVAL,
    DEFAULT_SCAN_WINDOW,
    DEFAULT_STALE_AFTER,
)
from switchbot_exporter.exceptions import SwitchBotConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise SwitchBotConfigError(f"{name} must be a number, got {value!r}") from exc


def parse_listen(value: str) -> tuple[str, int]:
    """Split a listen address into ``(host, port)``.

    Accepts ``":9012"`` (all interfaces), ``"127.0.0.1:9012"`` and
    ``"[::1]:9012"``.  An empty host means all interfaces and is
    returned as ``"0.0.0.0"``.

    Raises :class:`SwitchBotConfigError` for malformed values.
    """
    text = value.strip()
    host, sep, port_text = text.rpartition(":")
    if not sep or not port_text.isdigit():
        raise SwitchBotConfigError(f"listen address must be [host]:port, got {value!r}")
    port = int(port_text)
    if not 0 < port < 65536:
        raise SwitchBotConfigError(f"listen port out of range: {port}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host or "0.0.0.0", port


@dataclasses.dataclass(frozen=True)
class ExporterConfig:
    """Exporter configuration.

    Parameters
    ----------
    listen : str
        Metrics listen address (``[host]:port``).
    stale_after : float
        Seconds after the last successful decode before a device is
        hidden from scrapes.
    scan_window : float
        Seconds the radio actively scans in each cycle.
    scan_interval : float
        Length of one full cycle in seconds (scan window plus silence).
    active_scan : bool
        Request scan responses from devices (active scanning).
    adapter : str or None
        BLE adapter name (e.g. ``"hci0"``).  ``None`` uses the default.
    log_level : str
        Root logging level name.
    """

    listen: str = DEFAULT_LISTEN
    stale_after: float = DEFAULT_STALE_AFTER
    scan_window: float = DEFAULT_SCAN_WINDOW
    scan_interval: float = DEFAULT_SCAN_INTERVAL
    active_scan: bool = True
    adapter: str | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        parse_listen(self.listen)
        for field_name in ("stale_after", "scan_window", "scan_interval"):
            value = getattr(self, field_name)
            if not math.isfinite(value):
                raise SwitchBotConfigError(f"{field_name} must be a finite number, got {value}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise SwitchBotConfigError(f"unknown log level: {self.log_level!r}")
        if self.stale_after < 0:
            raise SwitchBotConfigError(f"stale_after must be >= 0, got {self.stale_after}")
        if self.scan_window <= 0:
            raise SwitchBotConfigError(f"scan_window must be > 0, got {self.scan_window}")
        if self.scan_window > self.scan_interval:
            raise SwitchBotConfigError(
                f"scan_window ({self.scan_window}) must not exceed scan_interval ({self.scan_interval})"
            )

    @property
    def listen_address(self) -> tuple[str, int]:
        return parse_listen(self.listen)

    @classmethod
    def from_env(cls, **overrides: Any) -> ExporterConfig:
        """Create configuration from environment variables.

        Reads optional ``SWITCHBOT_*`` variables.  Explicit keyword
        arguments override environment values; ``None`` overrides are
        ignored so unset CLI flags fall through to the environment.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ExporterConfig
            Populated configuration.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        _ENV_STR_MAP = {
            "SWITCHBOT_LISTEN": "listen",
            "SWITCHBOT_ADAPTER": "adapter",
            "SWITCHBOT_LOG_LEVEL": "log_level",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val and val.strip():
                config_kwargs[field_name] = val.strip()

        _ENV_FLOAT_MAP = {
            "SWITCHBOT_STALE_AFTER": "stale_after",
            "SWITCHBOT_SCAN_WINDOW": "scan_window",
            "SWITCHBOT_SCAN_INTERVAL": "scan_interval",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val and val.strip():
                config_kwargs[field_name] = _env_float(env_key, val)

        config_kwargs["active_scan"] = _env_bool(env.get("SWITCHBOT_ACTIVE_SCAN"), True)

        config_kwargs.update({key: value for key, value in overrides.items() if value is not None})

        return cls(**config_kwargs)
