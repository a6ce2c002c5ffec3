"""
Tests for operation counters.
"""

import asyncio
import threading
from unittest.mock import patch

import pytest

from vectorgate.storage.stats import StatsSnapshot, StatsTracker, report_periodically


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0m"), (59, "0m"), (61, "1m"), (3660, "1h 1m"), (90060, "1d 1h 1m")],
)
def test_format_uptime(seconds, expected):
    snapshot = StatsSnapshot(upserts=0, searches=0, deletes=0, uptime_seconds=seconds)
    assert snapshot.format_uptime() == expected


def test_counters():
    tracker = StatsTracker()
    tracker.increment_upserts()
    tracker.increment_upserts(3)
    tracker.increment_searches()
    tracker.increment_deletes()

    snapshot = tracker.snapshot()
    assert (snapshot.upserts, snapshot.searches, snapshot.deletes) == (4, 1, 1)
    assert snapshot.to_dict()["uptime"] == "0m"


def test_snapshot_and_reset():
    tracker = StatsTracker()
    tracker.increment_searches()

    snapshot = tracker.snapshot_and_reset()

    assert snapshot.searches == 1
    assert tracker.snapshot().searches == 0


def test_concurrent_increments():
    tracker = StatsTracker()

    def work():
        for _ in range(1000):
            tracker.increment_upserts()

    threads = [threading.Thread(target=work) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert tracker.snapshot().upserts == 8000


@pytest.mark.asyncio
async def test_report_periodically_resets_counters():
    tracker = StatsTracker()
    tracker.increment_deletes()

    with patch("vectorgate.storage.stats.logger") as mock_logger:
        task = asyncio.create_task(report_periodically(tracker, 0.01))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    mock_logger.info.assert_called()
    assert mock_logger.info.call_args_list[0].kwargs["deletes"] == 1
    assert tracker.snapshot().deletes == 0
