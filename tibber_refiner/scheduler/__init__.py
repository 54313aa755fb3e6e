"""
Scheduler package for the Tibber Refiner.
Contains the daily refinement scheduler.
"""

from .simple_scheduler import SimpleScheduler

__all__ = [
    "SimpleScheduler",
]
