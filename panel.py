"""UI state for the weather page and the mapping from a snapshot to display fields.

The page has four states: idle, loading, success and error.  A
:class:`WeatherPanel` owns the single state record.  Submitting is refused
while a lookup is in flight or while the location is blank, so at most one
request is ever outstanding.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from air_quality import extract_air_quality
from backgrounds import background_url, select_background_key
from charts import build_pollutant_chart
from snapshot import WeatherSnapshot
from weather_client import WeatherError, fetch_weather

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    name = "idle"


@dataclass(frozen=True)
class Loading:
    name = "loading"


@dataclass(frozen=True)
class Success:
    snapshot: WeatherSnapshot
    name = "success"


@dataclass(frozen=True)
class Error:
    message: str
    cause: Optional[WeatherError] = None
    name = "error"


UIState = Union[Idle, Loading, Success, Error]


class WeatherPanel:
    def __init__(self, fetcher=fetch_weather, api_key=None):
        self._fetch = fetcher
        self.api_key = api_key
        self.state: UIState = Idle()

    @property
    def loading(self) -> bool:
        return isinstance(self.state, Loading)

    def can_submit(self, location) -> bool:
        return not self.loading and isinstance(location, str) and bool(location.strip())

    def submit(self, location) -> UIState:
        """Run one lookup and return the resulting state.

        Blank input or an outstanding lookup leaves the state untouched and
        makes no call.
        """
        if not self.can_submit(location):
            logger.debug("Submit ignored (loading=%s, location=%r)", self.loading, location)
            return self.state

        self.state = Loading()
        try:
            snapshot = self._fetch(location.strip(), self.api_key)
        except WeatherError as exc:
            logger.warning("Weather lookup for %r failed: %s", location, exc.message)
            self.state = Error(exc.message or "Location not found", cause=exc)
        else:
            self.state = Success(snapshot)
        return self.state


def weather_view(snapshot: WeatherSnapshot) -> dict:
    key = select_background_key(snapshot.condition.text)
    air_quality = extract_air_quality(snapshot)
    return {
        "location_name": snapshot.location.name,
        "country": snapshot.location.country,
        "location_label": snapshot.location_label,
        "condition": snapshot.condition.text,
        "condition_icon": snapshot.condition.icon,
        "temperature_c": snapshot.temp_c,
        "humidity": snapshot.humidity,
        "background_key": key,
        "background_url": background_url(key),
        "air_quality": air_quality.as_dict(),
        "air_quality_chart": build_pollutant_chart(snapshot.air_quality),
    }


def state_view(state: UIState) -> dict:
    view = {"state": state.name, "error": None, "weather": None}
    if isinstance(state, Success):
        view["weather"] = weather_view(state.snapshot)
    elif isinstance(state, Error):
        view["error"] = state.message
    return view
