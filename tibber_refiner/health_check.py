"""
Health check module for Docker health checks and monitoring.
Verifies that InfluxDB answers and the configured database exists.
"""

import asyncio
import sys

from tibber_refiner.config import get_settings
from tibber_refiner.database.service import InfluxService
from tibber_refiner.exceptions import ConfigurationError
from tibber_refiner.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


async def health_check(db_service: InfluxService) -> bool:
    """
    Perform health check of the service.
    """
    try:
        return await db_service.health_check()
    finally:
        await db_service.close()


async def main():
    """
    Main health check entry point for command line usage.
    """
    setup_logging()
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error("Health check failed", error=str(e))
        sys.exit(1)

    is_healthy = await health_check(InfluxService(settings))

    if is_healthy:
        logger.info("Health check passed")
        sys.exit(0)
    else:
        logger.error("Health check failed")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
