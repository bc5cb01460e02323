"""Tests for the in-memory activity log."""

import logging
from datetime import datetime

from motd.scheduler.activity_log import ActivityLog, ActivityType

WHEN = datetime(2024, 1, 1, 0, 0, 5)


def test_newest_first():
    log = ActivityLog()
    log.log(ActivityType.REFRESH_START, "first", WHEN)
    log.log(ActivityType.REFRESH_COMPLETE, "second", WHEN, status="success")
    entries = log.get_entries()
    assert [e["message"] for e in entries] == ["second", "first"]
    assert entries[0]["time_str"] == "00:00:05"
    assert entries[0]["timestamp"] == "2024-01-01T00:00:05"


def test_bounded_size():
    log = ActivityLog(max_entries=3)
    for i in range(5):
        log.log(ActivityType.SCHEDULER, f"entry {i}", WHEN)
    assert [e["message"] for e in log.get_entries()] == ["entry 4", "entry 3", "entry 2"]


def test_limit_and_clear():
    log = ActivityLog()
    for i in range(5):
        log.log(ActivityType.SCHEDULER, f"entry {i}", WHEN)
    assert len(log.get_entries(limit=2)) == 2
    log.clear()
    assert log.get_entries() == []


def test_mirrors_to_logging(caplog):
    log = ActivityLog()
    with caplog.at_level(logging.INFO, logger="motd.scheduler.activity_log"):
        log.log(ActivityType.REFRESH_ERROR, "Refresh failed", WHEN, details="boom", status="error")
    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.getMessage() == "[Activity] Refresh failed: boom"
