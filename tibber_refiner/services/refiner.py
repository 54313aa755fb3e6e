"""
Refinement functions over a day's hourly price curve.

All functions take the day's prices as a list where the position is the hour
of day. They are pure and raise RefineError when a value cannot be computed.
"""

from datetime import date
from typing import Dict, List, Tuple

import pytz

from tibber_refiner.exceptions import RefineError
from tibber_refiner.models.refined import HourPrice, RefinedHour
from tibber_refiner.utils.time_utils import hour_start

HOURS_PER_DAY = 24

# Field name -> (low, high) in percent of the day average
THRESHOLD_BANDS: Dict[str, Tuple[float, float]] = {
    "t0_60": (0.0, 60.0),
    "t60_90": (60.0, 90.0),
    "t90_115": (90.0, 115.0),
    "t115_140": (115.0, 140.0),
    "t140_999": (140.0, 999.0),
}

# Field name -> (start, stop) hour window, stop exclusive
HIGH_BLOCKS: Dict[str, Tuple[int, int]] = {
    "in_0_6_high": (0, 6),
    "in_6_12_high": (6, 12),
    "in_12_18_high": (12, 18),
    "in_18_24_high": (18, 24),
}


def average(prices: List[float]) -> float:
    """Average price of the day."""
    if not prices:
        raise RefineError("Cannot average an empty price list")
    return sum(prices) / len(prices)


def price_now(hour: int, prices: List[float]) -> float:
    """Price of the given hour."""
    if not 0 <= hour < len(prices):
        raise RefineError(f"No price for hour {hour} ({len(prices)} prices available)")
    return prices[hour]


def price_ratio(hour: int, prices: List[float]) -> float:
    """Price of the hour relative to the day average."""
    avg = average(prices)
    if avg == 0:
        raise RefineError("Average price is zero, ratio is undefined")
    return price_now(hour, prices) / avg


def hour_prices(prices: List[float]) -> List[HourPrice]:
    """Pair every price with its hour of day."""
    return [HourPrice(hour=hour, price=price) for hour, price in enumerate(prices)]


def highest(prices: List[float], count: int, start: int = 0, stop: int = HOURS_PER_DAY) -> List[HourPrice]:
    """
    Get the most expensive hours within [start, stop).

    Args:
        prices: The day's prices
        count: Maximum number of hours to return
        start: First hour of the window
        stop: Hour after the last hour of the window

    Returns:
        Up to count hours, most expensive first. Equal prices are ordered by hour.
    """
    window = hour_prices(prices)[start:stop]
    return sorted(window, key=lambda hp: (-hp.price, hp.hour))[:count]


def lowest(prices: List[float], count: int, start: int = 0, stop: int = HOURS_PER_DAY) -> List[HourPrice]:
    """Get the cheapest hours within [start, stop), cheapest first."""
    window = hour_prices(prices)[start:stop]
    return sorted(window, key=lambda hp: (hp.price, hp.hour))[:count]


def max_hour(prices: List[float]) -> int:
    """Hour with the highest price of the day."""
    top = highest(prices, 1)
    if not top:
        raise RefineError("Cannot find the highest price of an empty price list")
    return top[0].hour


def min_hour(prices: List[float]) -> int:
    """Hour with the lowest price of the day."""
    bottom = lowest(prices, 1)
    if not bottom:
        raise RefineError("Cannot find the lowest price of an empty price list")
    return bottom[0].hour


def _as_fraction(threshold: float) -> float:
    # Thresholds above 1 are percentages
    if threshold > 1.0:
        return threshold / 100.0
    return threshold


def rel_thresh(prices: List[float], low_thresh: float, high_thresh: float) -> List[HourPrice]:
    """
    Get the hours whose price lies strictly between two fractions of the average.

    Thresholds up to 1.0 are fractions (0.9); anything above 1 is a
    percentage (90, and also 1.15 meaning 1.15%).
    """
    avg = average(prices)
    low_val = _as_fraction(low_thresh) * avg
    high_val = _as_fraction(high_thresh) * avg
    return [hp for hp in hour_prices(prices) if low_val < hp.price < high_val]


def within_thresh(hour: int, prices: List[float], low_thresh: float, high_thresh: float) -> bool:
    """Check whether the hour's price lies within the threshold band."""
    current = HourPrice(hour=hour, price=price_now(hour, prices))
    return current in rel_thresh(prices, low_thresh, high_thresh)


def in_6_l_8(hour: int, prices: List[float]) -> bool:
    """Check whether the hour is among the 6 cheapest of the first 8 hours."""
    current = HourPrice(hour=hour, price=price_now(hour, prices))
    return current not in highest(prices, 2, 0, 8) and current in highest(prices, 8, 0, 8)


def in_top(hour: int, prices: List[float], start: int, stop: int) -> bool:
    """Check whether the hour is among the 3 most expensive hours of [start, stop)."""
    current = HourPrice(hour=hour, price=price_now(hour, prices))
    return current in highest(prices, 3, start, stop)


def in_8_low(hour: int, prices: List[float]) -> bool:
    """Check whether the hour's price is among the 8 lowest prices of the day."""
    current = price_now(hour, prices)
    return any(hp.price == current for hp in lowest(prices, 8))


def refine_hour(hour: int, prices: List[float], day: date, tz: pytz.BaseTzInfo) -> RefinedHour:
    """
    Compute every refined value for one hour of the day.

    Raises:
        RefineError: If the hour has no price or the day average is zero
    """
    values = {name: within_thresh(hour, prices, low, high) for name, (low, high) in THRESHOLD_BANDS.items()}
    values.update({name: in_top(hour, prices, start, stop) for name, (start, stop) in HIGH_BLOCKS.items()})

    return RefinedHour(
        time=hour_start(day, hour, tz),
        hour=hour,
        date=day.isoformat(),
        pris_snitt_24=average(prices),
        pris_time=price_now(hour, prices),
        pris_forhold_24=price_ratio(hour, prices),
        pris_max=max_hour(prices),
        pris_min=min_hour(prices),
        in_6_l_8=in_6_l_8(hour, prices),
        i8h_low=in_8_low(hour, prices),
        **values,
    )
