"""Liveness policy for stored device records."""

from __future__ import annotations

from datetime import datetime, timedelta


def is_live(last_seen_at: datetime, now: datetime, stale_after: timedelta) -> bool:
    """A record is live while ``now - last_seen_at <= stale_after``.

    Records timestamped after *now* (clock skew between callers) count as live.
    """
    return now - last_seen_at <= stale_after
