"""
reading.py

Defines the Reading value produced by one sense transaction.

Units are fixed across the code base:
  - temperature: degrees Celsius
  - pressure:    pascals
  - humidity:    percent relative humidity
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Reading:
    temperature: float
    pressure: float
    humidity: float
