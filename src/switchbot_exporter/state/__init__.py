"""State/store layer.

This package is the single source of truth for the latest reading of
every device.  Ingestion writes to it; metrics exposition reads
point-in-time snapshots from it.
"""

from switchbot_exporter.state.store import DeviceStateStore

__all__ = ["DeviceStateStore"]
