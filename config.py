import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Only load .env file if present
if os.path.exists(".env"):
    load_dotenv()

DEFAULT_API_URL = "https://api.weatherapi.com/v1/current.json"


@dataclass(frozen=True)
class Settings:
    weather_api_key: str
    weather_api_url: str = DEFAULT_API_URL
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False


def load_settings() -> Settings:
    """Read settings from the environment.

    A missing WEATHER_API_KEY is not an error here; the lookup reports it
    through the same channel as any other API failure.
    """
    try:
        port = int(os.getenv("PORT", "5000"))
    except ValueError:
        port = 5000
    return Settings(
        weather_api_key=os.getenv("WEATHER_API_KEY", "").strip(),
        weather_api_url=os.getenv("WEATHER_API_URL", DEFAULT_API_URL),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=port,
        debug=os.getenv("FLASK_DEBUG", "").lower() in ("1", "true", "yes"),
    )


def configure_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
