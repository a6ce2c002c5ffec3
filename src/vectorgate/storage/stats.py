"""
Operation counters for the storage layer.
"""

import asyncio
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict

from vectorgate.core.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass
class StatsSnapshot:
    """Point-in-time copy of the counters."""

    upserts: int
    searches: int
    deletes: int
    uptime_seconds: int

    def format_uptime(self) -> str:
        """Render uptime as ``"1d 1h 1m"``, ``"1h 1m"`` or ``"1m"``."""
        days = self.uptime_seconds // 86400
        hours = (self.uptime_seconds % 86400) // 3600
        minutes = (self.uptime_seconds % 3600) // 60

        if days > 0:
            return f"{days}d {hours}h {minutes}m"
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "upserts": self.upserts,
            "searches": self.searches,
            "deletes": self.deletes,
            "uptime_seconds": self.uptime_seconds,
            "uptime": self.format_uptime(),
        }


class StatsTracker:
    """
    Thread-safe counters of upserts, searches and deletes.

    One tracker is created per process and handed to the stores; uptime is
    measured from construction and survives :meth:`reset`.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._upserts = 0
        self._searches = 0
        self._deletes = 0
        self._started = time.monotonic()

    def increment_upserts(self, count: int = 1) -> None:
        with self._lock:
            self._upserts += count

    def increment_searches(self) -> None:
        with self._lock:
            self._searches += 1

    def increment_deletes(self) -> None:
        with self._lock:
            self._deletes += 1

    def _snapshot_locked(self) -> StatsSnapshot:
        return StatsSnapshot(
            upserts=self._upserts,
            searches=self._searches,
            deletes=self._deletes,
            uptime_seconds=int(time.monotonic() - self._started),
        )

    def snapshot(self) -> StatsSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def reset(self) -> None:
        with self._lock:
            self._upserts = 0
            self._searches = 0
            self._deletes = 0

    def snapshot_and_reset(self) -> StatsSnapshot:
        """Take a snapshot and zero the counters atomically."""
        with self._lock:
            snapshot = self._snapshot_locked()
            self._upserts = 0
            self._searches = 0
            self._deletes = 0
        return snapshot


async def report_periodically(tracker: StatsTracker, interval_seconds: float) -> None:
    """
    Log and reset a stats snapshot every ``interval_seconds``.

    Runs until cancelled; intended to be started as a background task.
    """
    while True:
        await asyncio.sleep(interval_seconds)
        snapshot = tracker.snapshot_and_reset()
        logger.info(
            "Vector operation stats",
            upserts=snapshot.upserts,
            searches=snapshot.searches,
            deletes=snapshot.deletes,
            uptime=snapshot.format_uptime(),
        )
