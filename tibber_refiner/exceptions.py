"""
Domain exceptions for the Tibber Refiner.
Provides clear, typed exceptions for refinement errors.
"""


class RefinerException(Exception):
    """Base exception for all Tibber Refiner errors."""
    pass


class ConfigurationError(RefinerException):
    """Raised when required settings are missing or invalid."""
    pass


class NoPriceDataError(RefinerException):
    """Raised when no price data is available for the requested day."""
    pass


class DatabaseError(RefinerException):
    """Raised when InfluxDB operations fail."""
    pass


class RefineError(RefinerException):
    """Raised when a refined value cannot be computed for an hour."""
    pass
