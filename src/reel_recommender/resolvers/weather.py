import asyncio
import logging
from typing import Any, Dict

from requests.exceptions import RequestException

from reel_recommender.adapters.weather import WeatherAPI
from reel_recommender.cache import MISS, ResponseCache
from reel_recommender.schemas import Resolution

logger = logging.getLogger(__name__)

DEFAULT_WEATHER_TTL_SECONDS = 0


def format_weather(payload: Dict[str, Any]) -> str:
    """'<first condition description>, <temperature>°F'"""
    description = payload["weather"][0]["description"]
    temperature = payload["main"]["temp"]
    return f"{description}, {temperature}°F"


class WeatherResolver:
    """
    Current conditions for a coordinate pair as a display string.

    With the default ttl of 0 every call refetches; a positive ``ttl_seconds``
    keeps results that long.
    """

    def __init__(self, api: WeatherAPI, cache: ResponseCache, ttl_seconds: float = DEFAULT_WEATHER_TTL_SECONDS):
        self._api = api
        self._cache = cache
        self._ttl = ttl_seconds

    async def resolve(self, latitude: float, longitude: float) -> Resolution[str]:
        cache_key = f"weather_{latitude}{longitude}"
        cached = self._cache.get(cache_key)
        if cached is not MISS:
            logger.debug(f"Using cached weather for {cache_key}")
            return Resolution.found(cached)

        try:
            payload = await asyncio.to_thread(self._api.current, latitude, longitude)
            weather = format_weather(payload)
        except (RequestException, ValueError, LookupError, TypeError) as e:
            logger.error(f"Error fetching weather data for ({latitude}, {longitude}): {e}")
            return Resolution.failed(e)

        self._cache.set(cache_key, weather, ttl=self._ttl)
        return Resolution.found(weather)
