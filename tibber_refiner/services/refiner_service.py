"""
Refiner service - runs one refinement tick.
Reads a day's prices, refines every hour and writes the result back.
"""

from datetime import date
from typing import Optional

from tibber_refiner.config import Settings
from tibber_refiner.database.service import InfluxService
from tibber_refiner.exceptions import RefineError
from tibber_refiner.logging_config import get_logger
from tibber_refiner.models.refined import Day
from tibber_refiner.services.refiner import HOURS_PER_DAY, refine_hour
from tibber_refiner.utils.time_utils import get_timezone

logger = get_logger(__name__)


class RefinerService:
    """Service computing and storing refined values for a day."""

    def __init__(self, settings: Settings, db_service: InfluxService):
        self.db_service = db_service
        self.tz = get_timezone(settings.timezone)

    async def tick(self, target_date: Optional[date] = None) -> int:
        """
        Refine all hours of a day and store them.

        Hours that cannot be refined are logged and skipped; the rest of the
        day is still written.

        Returns:
            Number of refined points written

        Raises:
            NoPriceDataError: If the day has no prices
            DatabaseError: If reading prices or writing results fails
        """
        if target_date is None:
            target_date = Day.TODAY.resolve(self.tz)

        logger.info("Writing refined price info", date=target_date.isoformat())
        prices = await self.db_service.get_prices(target_date)

        if len(prices) != HOURS_PER_DAY:
            logger.warning("Unexpected number of prices", date=target_date.isoformat(), count=len(prices))

        records = []
        for hour in range(max(HOURS_PER_DAY, len(prices))):
            try:
                records.append(refine_hour(hour, prices, target_date, self.tz))
            except RefineError as e:
                logger.error("Error in refining hour", hour=hour, error=str(e))

        return await self.db_service.write_refined(records)
