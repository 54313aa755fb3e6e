"""
Services package for the Tibber Refiner.
Contains the refinement functions and the service running a refinement tick.
"""

from .refiner_service import RefinerService

__all__ = [
    "RefinerService",
]
