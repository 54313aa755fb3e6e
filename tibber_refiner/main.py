"""
Main application entry point for the Tibber Refiner service.
Loads settings, sets up logging, runs a first refinement and starts the scheduler.
"""

import argparse
import asyncio
import signal
import sys
from typing import List, Optional

from tibber_refiner.config import Settings, get_settings
from tibber_refiner.database.service import InfluxService
from tibber_refiner.exceptions import ConfigurationError
from tibber_refiner.logging_config import get_logger, setup_logging
from tibber_refiner.scheduler.simple_scheduler import SimpleScheduler
from tibber_refiner.services.refiner_service import RefinerService

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tibber-refiner",
        description="Refine hourly electricity prices stored in InfluxDB",
    )
    parser.add_argument("--once", action="store_true",
                        help="Refine today's prices once and exit")
    return parser.parse_args(argv)


async def run(settings: Settings, once: bool = False, stop_event: Optional[asyncio.Event] = None) -> int:
    """
    Run the service until interrupted.

    SIGINT and SIGTERM set stop_event; the service stops once it is set.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    db_service = InfluxService(settings)
    refiner_service = RefinerService(settings, db_service)

    logger.info("Database configured", influxdb_addr=settings.influxdb_addr,
                influxdb_db_name=settings.influxdb_db_name)
    logger.info("Retries configured", retries=settings.retries)

    if stop_event is None:
        stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    signals = () if once else (signal.SIGINT, signal.SIGTERM)
    for sig in signals:
        loop.add_signal_handler(sig, stop_event.set)

    try:
        # First refinement at startup
        try:
            count = await refiner_service.tick()
            logger.info("Startup refinement completed", records_written=count)
        except Exception as e:
            logger.error("Startup refinement failed", error=str(e))
            if once:
                return 1

        if once or stop_event.is_set():
            return 0

        scheduler = SimpleScheduler(settings, refiner_service)
        await scheduler.start()
        try:
            await stop_event.wait()
        finally:
            await scheduler.stop()
        return 0
    finally:
        for sig in signals:
            loop.remove_signal_handler(sig)
        await db_service.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""
    args = parse_args(argv)

    try:
        settings = get_settings()
    except ConfigurationError as e:
        setup_logging()
        logger.error("Configuration failed, exiting", error=str(e))
        return 1

    setup_logging(settings.log_level, settings.log_format, settings.log_dir)
    logger.debug("Log setup complete")
    for warning in settings.config_warnings:
        logger.warning(warning)

    return asyncio.run(run(settings, once=args.once))


if __name__ == "__main__":
    sys.exit(main())
