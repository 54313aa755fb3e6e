"""
Data models package for the Tibber Refiner.
Contains Pydantic models for hourly prices and refined values.
"""

from .refined import Day, HourPrice, RefinedHour

__all__ = [
    "Day",
    "HourPrice",
    "RefinedHour",
]
