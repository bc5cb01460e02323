"""Background loop that refreshes the image at each local midnight."""

import asyncio
import logging
from datetime import datetime, time, timedelta, timezone
from typing import Optional

from motd.scheduler.activity_log import ActivityType
from motd.scheduler.refresh import DailyRefresher

logger = logging.getLogger(__name__)


def next_midnight(now: datetime) -> datetime:
    """The first midnight after ``now``, in ``now``'s timezone."""
    tomorrow = now.date() + timedelta(days=1)
    return datetime.combine(tomorrow, time.min, tzinfo=now.tzinfo)


def seconds_until_next_midnight(now: datetime) -> float:
    """Seconds from ``now`` until the next local midnight.

    Measured in UTC, so days with a DST change last 23 or 25 hours.
    """
    target = next_midnight(now).astimezone(timezone.utc)
    return (target - now.astimezone(timezone.utc)).total_seconds()


class RefreshScheduler:
    """Runs ``DailyRefresher.refresh_now`` once per local day."""

    def __init__(self, refresher: DailyRefresher):
        self.refresher = refresher
        self.running = False
        self.task: Optional[asyncio.Task] = None
        self.next_run: Optional[datetime] = None
        self._stop = asyncio.Event()

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self._stop.clear()
        self.task = asyncio.create_task(self.run_schedule_loop())
        logger.info("Refresh scheduler started")

    async def stop(self) -> None:
        """Stop the loop. A refresh that is already running completes first."""
        if not self.running:
            return
        self.running = False
        self._stop.set()
        if self.task:
            await self.task
            self.task = None
        self.next_run = None
        logger.info("Refresh scheduler stopped")

    async def run_schedule_loop(self) -> None:
        while not self._stop.is_set():
            # Recomputed every cycle, never a fixed 24h offset
            now = self.refresher.now()
            delay = seconds_until_next_midnight(now)
            self.next_run = next_midnight(now)
            logger.info(f"Next image update in {timedelta(seconds=round(delay))}")

            try:
                await asyncio.wait_for(self._stop.wait(), timeout=max(delay, 0))
                break
            except asyncio.TimeoutError:
                pass

            try:
                await self.refresher.refresh_now()
            except Exception as e:
                logger.error(f"Unexpected error during scheduled refresh: {e}", exc_info=True)
                self.refresher.activity.log(
                    ActivityType.SCHEDULER,
                    "Scheduled refresh crashed",
                    self.refresher.now(),
                    details=str(e),
                    status="error",
                )

    def status(self) -> dict:
        return {
            "running": self.running,
            "next_run": self.next_run.isoformat() if self.next_run else None,
        }
