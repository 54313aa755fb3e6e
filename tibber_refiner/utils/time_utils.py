"""
Time utility functions for local dates, hour boundaries and run times.
All calculations are done in the configured local timezone.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

import pytz


def get_timezone(name: str) -> pytz.BaseTzInfo:
    """
    Look up a timezone by name.

    Raises:
        ValueError: If the timezone name is unknown
    """
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone '{name}'") from e


def localize(moment: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """Return moment in tz, treating naive datetimes as already local."""
    if moment.tzinfo is None:
        return tz.localize(moment)
    return moment.astimezone(tz)


def hour_start(day: date, hour: int, tz: pytz.BaseTzInfo) -> datetime:
    """
    Get the timezone-aware start of an hour of a local day.

    The hour is counted as elapsed hours since local midnight, so on days with
    a DST change the wall clock hour can differ from the index.

    Examples (Europe/Oslo):
        - 2025-01-15, hour 0  -> 2025-01-15 00:00+01:00
        - 2025-03-30, hour 3  -> 2025-03-30 04:00+02:00 (clocks skip 02:00)
    """
    midnight = tz.localize(datetime.combine(day, time.min))
    return tz.normalize(midnight + timedelta(hours=hour))


def next_run_time(run_hour: int, tz: pytz.BaseTzInfo, now: Optional[datetime] = None) -> datetime:
    """
    Get the next occurrence of run_hour:00 strictly after now.

    Args:
        run_hour: Hour of day (0-23) to run at
        tz: Local timezone
        now: Reference time. If None, uses the current time in tz.

    Returns:
        Timezone-aware datetime in tz
    """
    if now is None:
        now = datetime.now(tz)
    else:
        now = localize(now, tz)

    today_run = tz.localize(datetime.combine(now.date(), time(hour=run_hour)))
    if now >= today_run:
        # Today's run has passed, schedule for tomorrow
        return tz.localize(datetime.combine(now.date() + timedelta(days=1), time(hour=run_hour)))
    return today_run


def seconds_until(target: datetime, now: Optional[datetime] = None) -> float:
    """Seconds from now until target, never negative."""
    if now is None:
        now = datetime.now(pytz.UTC)
    return max((target - now).total_seconds(), 0.0)
