"""
Tibber Refiner - derived hourly price indicators for home automation

Reads the day's hourly electricity prices from InfluxDB, refines them into
per-hour indicators (averages, ratios, threshold bands, top/bottom hours)
and writes the result back as the ``refined`` measurement.

Main components:
- InfluxDB service for reading prices and writing refined points
- Pure refinement functions over a day's price curve
- Refiner service that runs one refinement tick
- Daily scheduler with retries and exponential backoff
"""

__version__ = "1.0.0"
