"""
Simple asyncio scheduler running the refinement once a day.
Each run is retried with exponential backoff before giving up until the next day.
"""

import asyncio
from datetime import datetime
from typing import Optional

from tibber_refiner.config import Settings
from tibber_refiner.logging_config import get_logger
from tibber_refiner.services.refiner_service import RefinerService
from tibber_refiner.utils.time_utils import get_timezone, next_run_time, seconds_until

logger = get_logger(__name__)

# Pause after an unexpected loop error
ERROR_PAUSE_SECONDS = 300


class SimpleScheduler:
    """Simple background task scheduler for daily refinement."""

    def __init__(self, settings: Settings, refiner_service: RefinerService):
        self.refiner_service = refiner_service
        self.update_time = settings.update_time
        self.retries = settings.retries
        self.tz = get_timezone(settings.timezone)
        self._running = False
        self._task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        """Start the scheduler background task."""
        if self._running:
            logger.warning("Scheduler already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._scheduler_loop())
        logger.info("Scheduler started", update_time=f"{self.update_time:02d}:00", retries=self.retries)

    async def stop(self) -> None:
        """Stop the scheduler."""
        if not self._running:
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        logger.info("Scheduler stopped")

    async def _scheduler_loop(self) -> None:
        """Main scheduler loop."""
        while self._running:
            try:
                next_run = self.calculate_next_run()
                sleep_seconds = seconds_until(next_run)
                logger.info("Next update time", next_run=next_run.isoformat(), sleep_seconds=sleep_seconds)
                await asyncio.sleep(sleep_seconds)

                if not self._running:
                    break

                await self.run_with_retries()

            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error("Scheduler loop error", error=str(e))
                await asyncio.sleep(ERROR_PAUSE_SECONDS)

    def calculate_next_run(self, now: Optional[datetime] = None) -> datetime:
        """Calculate the next scheduled run time."""
        return next_run_time(self.update_time, self.tz, now)

    async def run_with_retries(self) -> bool:
        """
        Run one refinement tick, retrying with exponential backoff.

        Returns:
            True if a tick succeeded, False after all attempts failed
        """
        for attempt in range(self.retries):
            try:
                count = await self.refiner_service.tick()
                logger.info("Refinement completed", attempt=attempt, records_written=count)
                return True
            except Exception as e:
                backoff = 2 ** attempt
                logger.warning("Failed attempt to tick", attempt=attempt, error=str(e))
                if attempt + 1 < self.retries:
                    logger.debug("Exponential backoff", seconds=backoff)
                    await asyncio.sleep(backoff)

        logger.error("Unable to refine values, giving up", retries=self.retries)
        return False

    @property
    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self._running
