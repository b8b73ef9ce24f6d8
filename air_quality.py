import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, List, Optional

from snapshot import WeatherSnapshot

NOT_AVAILABLE = "N/A"
NO_DATA = "No data"

# US EPA index is preferred; UK DEFRA is the fallback.
INDEX_KEYS = ("us-epa-index", "gb-defra-index")
PM25_KEY = "pm2_5"
PM10_KEY = "pm10"


@dataclass(frozen=True)
class DisplayAirQuality:
    index: Any = NOT_AVAILABLE
    pm2_5: str = NOT_AVAILABLE
    pm10: str = NOT_AVAILABLE
    present: bool = False
    keys: List[str] = field(default_factory=list)
    raw: Any = NO_DATA

    def as_dict(self) -> dict:
        return {
            "index": self.index,
            "pm2_5": self.pm2_5,
            "pm10": self.pm10,
            "present": self.present,
            "keys": list(self.keys),
            "raw": self.raw,
        }


def to_number(value) -> Optional[float]:
    """Coerce an API value to a finite float, or None."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def format_measure(value) -> str:
    number = to_number(value)
    if number is None:
        return NOT_AVAILABLE
    return f"{number:.2f}"


def regional_index(air_quality: Mapping):
    for key in INDEX_KEYS:
        value = air_quality.get(key)
        if value is not None:
            return value
    return NOT_AVAILABLE


def extract_air_quality(source) -> DisplayAirQuality:
    """Summarise the optional ``current.air_quality`` object for display.

    ``source`` may be a :class:`WeatherSnapshot` or the air-quality mapping
    itself.  Missing data degrades to ``N/A``; this never raises.
    """
    air_quality = source.air_quality if isinstance(source, WeatherSnapshot) else source
    if not isinstance(air_quality, Mapping):
        return DisplayAirQuality()

    return DisplayAirQuality(
        index=regional_index(air_quality),
        pm2_5=format_measure(air_quality.get(PM25_KEY)),
        pm10=format_measure(air_quality.get(PM10_KEY)),
        present=True,
        keys=[str(k) for k in air_quality.keys()],
        raw=dict(air_quality),
    )
