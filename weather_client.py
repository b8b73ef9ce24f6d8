"""WeatherAPI current-conditions client.

One call of :func:`fetch_weather` issues exactly one ``GET`` against
``/v1/current.json`` with air quality enabled.  Every failure is raised as a
:class:`WeatherError` subclass carrying a human-readable ``message``; callers
that only need a display string can use ``str(exc)``.
"""

import json
import logging
from urllib.parse import quote

import requests

from config import DEFAULT_API_URL
from snapshot import WeatherSnapshot

logger = logging.getLogger(__name__)

API_URL = DEFAULT_API_URL

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_QUERY_SAFE = "!*'()"


class WeatherError(Exception):
    """Base class for every lookup failure."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class EmptyInputError(WeatherError):
    pass


class MissingCredentialError(WeatherError):
    pass


class UpstreamHTTPError(WeatherError):
    def __init__(self, status_code, message):
        super().__init__(message)
        self.status_code = status_code


class TransportError(WeatherError):
    pass


def build_url(location: str, api_key: str, url: str = API_URL) -> str:
    query = quote(location.strip(), safe=_QUERY_SAFE)
    key = quote(api_key, safe=_QUERY_SAFE)
    return f"{url}?key={key}&q={query}&aqi=yes"


def _error_message(resp) -> str:
    """Pick the message to show for a non-success response.

    WeatherAPI answers errors with ``{"error": {"code": ..., "message": ...}}``;
    anything else falls back to the body text, then to the status code.
    """
    body = resp.text or ""
    message = body
    try:
        parsed = json.loads(body)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        error = parsed.get("error")
        if isinstance(error, dict) and error.get("message"):
            message = str(error["message"])
    return message or f"Request failed with status {resp.status_code}"


def fetch_weather(location: str, api_key: str, session=None, url: str = API_URL) -> WeatherSnapshot:
    location = (location or "").strip()
    if not location:
        raise EmptyInputError("Location query is missing.")
    if not api_key:
        raise MissingCredentialError(
            "Weather API key is not configured. Set WEATHER_API_KEY in the environment or .env file."
        )

    http = session or requests
    try:
        resp = http.get(build_url(location, api_key, url))
    except (requests.RequestException, UnicodeError) as exc:
        logger.error("Weather API request failed: %s", exc)
        raise TransportError(str(exc) or exc.__class__.__name__) from exc

    if not 200 <= resp.status_code < 300:
        message = _error_message(resp)
        logger.error("Weather API returned error %s: %s", resp.status_code, message)
        raise UpstreamHTTPError(resp.status_code, message)

    try:
        payload = resp.json()
    except ValueError as exc:
        raise TransportError(f"Malformed response from weather API: {exc}") from exc
    if not isinstance(payload, dict):
        raise TransportError("Malformed response from weather API: expected a JSON object")

    snapshot = WeatherSnapshot.from_payload(payload)
    logger.debug("Weather API response: %s", json.dumps(payload, indent=2, default=str))
    logger.debug("air_quality: %s", json.dumps(snapshot.air_quality, indent=2, default=str))
    return snapshot
