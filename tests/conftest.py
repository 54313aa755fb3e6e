"""
Test configuration and fixtures for the Tibber Refiner tests.
Contains shared fixtures and test utilities.
"""

import logging
from datetime import date
from typing import List
from unittest.mock import AsyncMock

import pytest
import pytz

from tibber_refiner.config import Settings

# Average is exactly 100.0; hour 3 is the cheapest, hour 18 the most expensive
SAMPLE_PRICES = [
    80.0, 70.0, 60.0, 50.0, 55.0, 65.0, 90.0, 120.0,
    130.0, 110.0, 100.0, 95.0, 90.0, 85.0, 88.0, 92.0,
    105.0, 140.0, 230.0, 150.0, 125.0, 100.0, 90.0, 80.0,
]


@pytest.fixture
def settings(tmp_path) -> Settings:
    """
    Settings for tests, independent of the environment.
    """
    return Settings(
        influxdb_addr="http://localhost:8086",
        influxdb_db_name="test_db",
        update_time=0,
        retries=3,
        timezone="Europe/Oslo",
        log_dir=str(tmp_path / "log"),
    )


@pytest.fixture
def oslo() -> pytz.BaseTzInfo:
    return pytz.timezone("Europe/Oslo")


@pytest.fixture
def sample_prices() -> List[float]:
    """
    A day of hourly prices with known averages and rankings.
    """
    return list(SAMPLE_PRICES)


@pytest.fixture
def sample_day() -> date:
    return date(2025, 1, 15)


@pytest.fixture
def mock_db_service():
    """
    Create a mock InfluxDB service for testing.
    """
    mock_db = AsyncMock()
    mock_db.write_refined.side_effect = lambda records: len(records)
    return mock_db


@pytest.fixture
def reset_logging():
    """
    Restore the root logger handlers after a test reconfigures logging.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
