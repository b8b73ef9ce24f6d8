from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional


def _section(data, key) -> dict:
    """Return ``data[key]`` when it is a JSON object, else an empty dict."""
    if not isinstance(data, Mapping):
        return {}
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _text(data, key) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class Location:
    name: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True)
class Condition:
    text: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class WeatherSnapshot:
    location: Location
    condition: Condition
    temp_c: Optional[Any] = None
    humidity: Optional[Any] = None
    air_quality: Optional[Mapping] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_payload(cls, payload):
        location = _section(payload, "location")
        current = _section(payload, "current")
        condition = _section(current, "condition")
        air_quality = current.get("air_quality")
        return cls(
            location=Location(name=_text(location, "name"), country=_text(location, "country")),
            condition=Condition(text=_text(condition, "text"), icon=_text(condition, "icon")),
            temp_c=current.get("temp_c"),
            humidity=current.get("humidity"),
            air_quality=air_quality if isinstance(air_quality, Mapping) else None,
            raw=payload if isinstance(payload, dict) else {},
        )

    @property
    def location_label(self) -> str:
        parts = [p for p in (self.location.name, self.location.country) if p]
        return ", ".join(parts)
