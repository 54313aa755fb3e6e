"""
Database service using InfluxDB 1.x with the influxdb client.
Reads the day's hourly prices and writes refined points in one place.
"""

import asyncio
from datetime import date
from typing import List, Optional

from influxdb import InfluxDBClient

from tibber_refiner.config import Settings
from tibber_refiner.exceptions import DatabaseError, NoPriceDataError
from tibber_refiner.logging_config import get_logger
from tibber_refiner.models.refined import RefinedHour

logger = get_logger(__name__)


class InfluxService:
    """Unified database service for price and refined data."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.price_measurement = settings.price_measurement
        self.refined_measurement = settings.refined_measurement
        self._client: Optional[InfluxDBClient] = None

    def _get_client(self) -> InfluxDBClient:
        """Get or create the InfluxDB client."""
        if self._client is None:
            self._client = InfluxDBClient(
                host=self.settings.influxdb_host,
                port=self.settings.influxdb_port,
                database=self.settings.influxdb_db_name,
                ssl=self.settings.influxdb_ssl,
                verify_ssl=self.settings.influxdb_ssl,
                timeout=self.settings.influxdb_timeout,
                path=self.settings.influxdb_path,
            )
            logger.debug("Created InfluxDB client",
                         addr=self.settings.influxdb_addr,
                         database=self.settings.influxdb_db_name)
        return self._client

    async def close(self) -> None:
        """Close the InfluxDB client session."""
        if self._client is not None:
            self._client.close()
            self._client = None

    async def get_prices(self, day: date) -> List[float]:
        """
        Get the hourly prices of a local day, ordered by time.

        The position in the returned list is the hour of day.

        Raises:
            NoPriceDataError: If the database has no prices for the day
            DatabaseError: If the query fails
        """
        date_str = day.isoformat()
        query = f'SELECT "price" FROM "{self.price_measurement}" WHERE "date" = $date'

        try:
            client = self._get_client()
            result = await asyncio.to_thread(
                client.query, query, bind_params={"date": date_str}
            )
            points = list(result.get_points(measurement=self.price_measurement))
        except Exception as e:
            logger.error("Failed to read prices", date=date_str, error=str(e))
            raise DatabaseError(f"Price query failed: {e}")

        if not points:
            raise NoPriceDataError(f"No prices found for {date_str}")

        # A gap would shift every later price onto the wrong hour
        if any(point.get("price") is None for point in points):
            raise DatabaseError(f"Price series for {date_str} has points without a price")

        prices = [float(point["price"]) for point in points]
        logger.debug("Read prices", date=date_str, count=len(prices))
        return prices

    async def write_refined(self, records: List[RefinedHour]) -> int:
        """
        Write refined records as one batch.

        Returns:
            Number of points written

        Raises:
            DatabaseError: If the write fails
        """
        if not records:
            logger.warning("No refined records to write")
            return 0

        points = [record.to_point(self.refined_measurement) for record in records]

        try:
            client = self._get_client()
            await asyncio.to_thread(client.write_points, points)
        except Exception as e:
            logger.error("Failed to write refined values", count=len(points), error=str(e))
            raise DatabaseError(f"Failed to write refined values: {e}")

        logger.info("Saved refined values", count=len(points), date=records[0].date)
        return len(points)

    async def get_refined(self, day: date) -> List[dict]:
        """Get the refined points stored for a local day, ordered by hour."""
        date_str = day.isoformat()
        query = f'SELECT * FROM "{self.refined_measurement}" WHERE "date" = $date'

        try:
            client = self._get_client()
            result = await asyncio.to_thread(
                client.query, query, bind_params={"date": date_str}
            )
        except Exception as e:
            logger.error("Failed to read refined values", date=date_str, error=str(e))
            raise DatabaseError(f"Query failed: {e}")

        return sorted(
            result.get_points(measurement=self.refined_measurement),
            key=lambda point: int(point.get("hour", 0)),
        )

    async def health_check(self) -> bool:
        """Check that InfluxDB answers and the database exists."""
        try:
            client = self._get_client()
            version = await asyncio.to_thread(client.ping)
            databases = await asyncio.to_thread(client.get_list_database)
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return False

        names = {database["name"] for database in databases}
        if self.settings.influxdb_db_name not in names:
            logger.error("Database not found", database=self.settings.influxdb_db_name)
            return False

        logger.debug("InfluxDB is healthy", version=version)
        return True
