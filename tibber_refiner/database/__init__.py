"""
Database package for the Tibber Refiner.
Contains the InfluxDB service.
"""

from .service import InfluxService

__all__ = [
    "InfluxService",
]
