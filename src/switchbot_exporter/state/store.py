"""Thread-safe in-memory store of the latest reading per device.

Advertisements arrive from the scanner callback while scrapes read the
store from the HTTP handler, so every access to the mapping goes through
a single lock.  The lock only guards the dict itself: decoding happens
before :meth:`DeviceStateStore.upsert` and rendering after
:meth:`DeviceStateStore.snapshot`.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from switchbot_exporter._constants import DEFAULT_STALE_AFTER
from switchbot_exporter.models.readings import Reading
from switchbot_exporter.models.records import DeviceRecord, ensure_utc, normalize_device_id
from switchbot_exporter.state.policy import is_live


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_timedelta(value: timedelta | float) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


class DeviceStateStore:
    """Latest known state for every device seen since process start.

    Records are never deleted.  A device whose last update is older than
    the staleness threshold is left out of snapshots until it reports
    again; liveness is evaluated on every read, never stored.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        stale_after: timedelta | float = DEFAULT_STALE_AFTER,
    ) -> None:
        self._clock = clock
        self._stale_after = self._check_threshold(_as_timedelta(stale_after))
        self._lock = threading.Lock()
        self._devices: dict[str, DeviceRecord] = {}

    @staticmethod
    def _check_threshold(stale_after: timedelta) -> timedelta:
        if stale_after < timedelta(0):
            raise ValueError(f"stale_after must be >= 0, got {stale_after}")
        return stale_after

    @property
    def stale_after(self) -> timedelta:
        return self._stale_after

    def now(self) -> datetime:
        return ensure_utc(self._clock())

    def upsert(self, device_id: str, reading: Reading, now: datetime | None = None) -> DeviceRecord:
        """Replace the record for *device_id* with *reading* seen at *now*."""
        record = DeviceRecord(
            device_id=device_id,
            reading=reading,
            last_seen_at=now if now is not None else self.now(),
        )
        with self._lock:
            self._devices[record.device_id] = record
        return record

    def snapshot(
        self,
        now: datetime | None = None,
        stale_after: timedelta | float | None = None,
    ) -> list[DeviceRecord]:
        """Records updated within *stale_after* of *now*, sorted by device id."""
        threshold = self._stale_after if stale_after is None else self._check_threshold(_as_timedelta(stale_after))
        at = ensure_utc(now) if now is not None else self.now()

        with self._lock:
            records = list(self._devices.values())

        live = [record for record in records if is_live(record.last_seen_at, at, threshold)]
        live.sort(key=lambda record: record.device_id)
        return live

    def get(self, device_id: str) -> DeviceRecord | None:
        """Stored record for *device_id*, stale or not."""
        key = normalize_device_id(device_id)
        with self._lock:
            return self._devices.get(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)
