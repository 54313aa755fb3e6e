"""
Pydantic data models for hourly prices and refined values.
Defines the structure of the points written to the refined measurement.
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional

import pytz
from pydantic import BaseModel, Field


class Day(str, Enum):
    """
    Day a price curve belongs to, relative to the local date.
    """
    TODAY = "today"
    TOMORROW = "tomorrow"

    def resolve(self, tz: pytz.BaseTzInfo, now: Optional[datetime] = None) -> date:
        """Return the calendar date this day refers to in the given timezone."""
        if now is None:
            now = datetime.now(tz)
        elif now.tzinfo is None:
            now = tz.localize(now)
        else:
            now = now.astimezone(tz)

        today = now.date()
        if self is Day.TOMORROW:
            return today + timedelta(days=1)
        return today


class HourPrice(BaseModel):
    """
    Price of a single hour. The hour counts from local midnight (0-23, or 0-24
    on the day clocks are set back), never a position in a sorted list.
    """
    hour: int = Field(ge=0, description="Hours since local midnight")
    price: float = Field(description="Price for the hour")

    class Config:
        frozen = True


class RefinedHour(BaseModel):
    """
    Refined indicators for one hour of one day.

    Written as one point per hour, tagged with hour and date. Field names are
    the ones dashboards and automations already query.
    """
    time: datetime = Field(description="Start of the hour (timezone aware)")
    hour: int = Field(ge=0, description="Hours since local midnight, written as a tag")
    date: str = Field(description="Local date YYYY-MM-DD, written as a tag")

    pris_snitt_24: float = Field(description="Average price of the day")
    pris_time: float = Field(description="Price of this hour")
    pris_forhold_24: float = Field(description="Price of this hour relative to the day average")
    pris_max: int = Field(description="Hour with the highest price of the day")
    pris_min: int = Field(description="Hour with the lowest price of the day")

    in_6_l_8: bool = Field(description="Among the 6 cheapest of hours 0-7")
    in_0_6_high: bool = Field(description="Among the 3 most expensive of hours 0-5")
    in_6_12_high: bool = Field(description="Among the 3 most expensive of hours 6-11")
    in_12_18_high: bool = Field(description="Among the 3 most expensive of hours 12-17")
    in_18_24_high: bool = Field(description="Among the 3 most expensive of hours 18-23")

    t0_60: bool = Field(description="Price within 0-60% of the average")
    t60_90: bool = Field(description="Price within 60-90% of the average")
    t90_115: bool = Field(description="Price within 90-115% of the average")
    t115_140: bool = Field(description="Price within 115-140% of the average")
    t140_999: bool = Field(description="Price above 140% of the average")

    i8h_low: bool = Field(description="Price among the 8 lowest of the day")

    def to_point(self, measurement: str) -> dict:
        """
        Convert to a point dict accepted by InfluxDBClient.write_points().
        """
        fields = self.model_dump(exclude={"time", "hour", "date"})
        return {
            "measurement": measurement,
            "tags": {
                "hour": str(self.hour),
                "date": self.date,
            },
            "time": self.time.astimezone(pytz.UTC).isoformat(),
            "fields": fields,
        }
