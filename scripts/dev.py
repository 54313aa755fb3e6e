#!/usr/bin/env python3
"""
Development helper scripts for the Tibber Refiner.
Provides utilities for manual refinement runs and inspecting stored values.
"""

import asyncio
import sys
from datetime import date
from pathlib import Path

# Add the project root to the Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tibber_refiner.config import get_settings
from tibber_refiner.database.service import InfluxService
from tibber_refiner.logging_config import setup_logging
from tibber_refiner.models.refined import Day
from tibber_refiner.services.refiner_service import RefinerService
from tibber_refiner.utils.time_utils import get_timezone


def _target_date(settings, arg: str = None) -> date:
    if arg:
        return date.fromisoformat(arg)
    return Day.TODAY.resolve(get_timezone(settings.timezone))


async def refine_manual(day_arg: str = None):
    """Manually refine and store a day's prices."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_service = InfluxService(settings)
    target = _target_date(settings, day_arg)

    print(f"Refining prices for {target}...")
    try:
        count = await RefinerService(settings, db_service).tick(target)
        print(f"Wrote {count} refined points")
    finally:
        await db_service.close()


async def show_prices(day_arg: str = None):
    """Display a day's prices from the database."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_service = InfluxService(settings)
    target = _target_date(settings, day_arg)

    try:
        prices = await db_service.get_prices(target)
    finally:
        await db_service.close()

    print(f"\nPrices for {target}:")
    print("-" * 24)
    for hour, price in enumerate(prices):
        print(f"{hour:02d}:00  {price:>10.4f}")


async def show_refined(day_arg: str = None):
    """Display the refined values stored for a day."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_service = InfluxService(settings)
    target = _target_date(settings, day_arg)

    try:
        points = await db_service.get_refined(target)
    finally:
        await db_service.close()

    if not points:
        print(f"No refined values found for {target}")
        return

    print(f"\nRefined values for {target}:")
    print("-" * 80)
    print(f"{'Hour':<6} {'Price':>10} {'Ratio':>8} {'Bands':<12} {'High':<6} {'Low 8':<6}")
    print("-" * 80)
    for point in points:
        bands = [name for name in ("t0_60", "t60_90", "t90_115", "t115_140", "t140_999") if point.get(name)]
        high = any(point.get(name) for name in ("in_0_6_high", "in_6_12_high", "in_12_18_high", "in_18_24_high"))
        print(f"{point.get('hour', '?'):<6} {point.get('pris_time', 0.0):>10.4f} "
              f"{point.get('pris_forhold_24', 0.0):>8.2f} {','.join(bands):<12} "
              f"{str(high):<6} {str(point.get('i8h_low')):<6}")


def show_config():
    """Display current configuration settings."""
    settings = get_settings()
    print("Current Configuration:")
    print("-" * 40)
    print(f"InfluxDB Address: {settings.influxdb_addr}")
    print(f"InfluxDB Database: {settings.influxdb_db_name}")
    print(f"Measurements: {settings.price_measurement} -> {settings.refined_measurement}")
    print(f"Update Time: {settings.update_time:02d}:00 {settings.timezone}")
    print(f"Retries: {settings.retries}")
    print(f"Log Level: {settings.log_level}")
    print(f"Log Directory: {settings.log_dir}")


def main():
    """Main script entry point with command selection."""
    if len(sys.argv) < 2:
        print("Tibber Refiner Development Scripts")
        print("Usage: python scripts/dev.py <command> [YYYY-MM-DD]")
        print("\nAvailable commands:")
        print("  refine        - Refine a day's prices and store them")
        print("  show-prices   - Display a day's prices")
        print("  show-refined  - Display a day's refined values")
        print("  show-config   - Display current configuration")
        return

    command = sys.argv[1]
    day_arg = sys.argv[2] if len(sys.argv) > 2 else None

    if command == "refine":
        asyncio.run(refine_manual(day_arg))
    elif command == "show-prices":
        asyncio.run(show_prices(day_arg))
    elif command == "show-refined":
        asyncio.run(show_refined(day_arg))
    elif command == "show-config":
        show_config()
    else:
        print(f"Unknown command: {command}")
        print("Run without arguments to see available commands")


if __name__ == "__main__":
    main()
