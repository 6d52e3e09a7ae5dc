#!/usr/bin/env python3
"""Runs a job shortly after every UTC midnight, one run at a time."""

import time
from datetime import datetime, timedelta, timezone
from threading import Thread
from typing import Callable, Optional

from config import setup_logging

logger = setup_logging("scheduler")

DEFAULT_MINUTE_OFFSET = 5
# Delay used when the computed target is not in the future
FALLBACK_DELAY_SECONDS = 60.0


def seconds_until_next_utc_refresh(
    now: Optional[datetime] = None,
    minute_offset: int = DEFAULT_MINUTE_OFFSET,
) -> float:
    """Seconds from ``now`` until tomorrow 00:MM UTC."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)

    tomorrow = (now + timedelta(days=1)).date()
    target = datetime(tomorrow.year, tomorrow.month, tomorrow.day, 0, minute_offset, tzinfo=timezone.utc)
    delay = (target - now).total_seconds()
    return delay if delay > 0 else FALLBACK_DELAY_SECONDS


class DailyScheduler:
    """Sleeps until the next refresh, runs the job, and schedules the next one."""

    def __init__(
        self,
        job: Callable[[], object],
        minute_offset: int = DEFAULT_MINUTE_OFFSET,
        sleep: Callable[[float], None] = time.sleep,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.job = job
        self.minute_offset = minute_offset
        self.sleep = sleep
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.runs = 0
        self.failures = 0

    def run_next(self) -> bool:
        """Wait for the next slot and run the job once. Returns False on failure."""
        delay = seconds_until_next_utc_refresh(self.clock(), self.minute_offset)
        logger.info("Next daily check in ~%d minute(s)", round(delay / 60))
        self.sleep(delay)

        self.runs += 1
        try:
            self.job()
        except Exception:
            self.failures += 1
            logger.exception("Daily run failed; will retry at the next slot")
            return False
        return True

    def run(self, max_runs: Optional[int] = None) -> None:
        """Run forever, or ``max_runs`` times."""
        while max_runs is None or self.runs < max_runs:
            self.run_next()

    def start_in_thread(self) -> Thread:
        thread = Thread(target=self.run, name="daily-preview-scheduler", daemon=True)
        thread.start()
        return thread
