#!/usr/bin/env python3
"""Tests for the daily scheduler."""

import logging
from datetime import datetime, timedelta, timezone

from scheduler import DailyScheduler, seconds_until_next_utc_refresh


def test_delay_targets_five_past_midnight_utc():
    now = datetime(2024, 3, 10, 23, 0, tzinfo=timezone.utc)
    assert seconds_until_next_utc_refresh(now) == 65 * 60


def test_delay_just_after_refresh_waits_a_full_day():
    now = datetime(2024, 3, 10, 0, 6, tzinfo=timezone.utc)
    assert seconds_until_next_utc_refresh(now) == timedelta(hours=23, minutes=59).total_seconds()


def test_delay_converts_local_time_to_utc():
    # 21:00 at UTC-3 is already 00:00 UTC the next day
    now = datetime(2024, 3, 10, 21, 0, tzinfo=timezone(timedelta(hours=-3)))
    assert seconds_until_next_utc_refresh(now) == timedelta(days=1, minutes=5).total_seconds()


def test_naive_datetime_is_treated_as_utc():
    assert seconds_until_next_utc_refresh(datetime(2024, 3, 10, 23, 55)) == 10 * 60


def test_scheduler_runs_job_after_sleeping():
    sleeps = []
    calls = []
    scheduler = DailyScheduler(
        lambda: calls.append("run"),
        sleep=sleeps.append,
        clock=lambda: datetime(2024, 3, 10, 23, 0, tzinfo=timezone.utc),
    )

    scheduler.run(max_runs=2)

    assert calls == ["run", "run"]
    assert sleeps == [3900.0, 3900.0]
    assert scheduler.runs == 2
    assert scheduler.failures == 0


def test_failed_run_is_logged_and_rescheduled(caplog):
    outcomes = iter([RuntimeError("disk full"), None])
    calls = []

    def job():
        calls.append(1)
        result = next(outcomes)
        if isinstance(result, Exception):
            raise result

    scheduler = DailyScheduler(job, sleep=lambda _: None)
    with caplog.at_level(logging.ERROR):
        assert scheduler.run_next() is False
    assert scheduler.run_next() is True

    assert len(calls) == 2
    assert scheduler.failures == 1
    assert "Daily run failed" in caplog.text
