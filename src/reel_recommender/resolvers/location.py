import asyncio
import logging

from requests.exceptions import RequestException

from reel_recommender.adapters.geocoding import GeocodingAPI
from reel_recommender.cache import MISS, ResponseCache
from reel_recommender.schemas import LocationInfo, Resolution

logger = logging.getLogger(__name__)


def location_cache_key(latitude: float, longitude: float) -> str:
    # No rounding: coordinates that differ as floats (40.7128 vs 40.71280001) are different entries.
    return f"citystate_{latitude}{longitude}"


class LocationResolver:
    """Reverse-geocodes coordinates to city and state."""

    def __init__(self, api: GeocodingAPI, cache: ResponseCache):
        self._api = api
        self._cache = cache

    async def resolve(self, latitude: float, longitude: float) -> Resolution[LocationInfo]:
        cache_key = location_cache_key(latitude, longitude)
        cached = self._cache.get(cache_key)
        if cached is not MISS:
            logger.debug(f"Using cached city and state details for {cache_key}")
            return Resolution.found(cached)
        logger.debug(f"No cached city and state details found for {cache_key}")

        try:
            data = await asyncio.to_thread(self._api.reverse, latitude, longitude)
            address = data["address"]
            location = LocationInfo(
                city=address.get("city") or address.get("town") or address.get("village"),
                state=address.get("state"),
            )
        except (RequestException, ValueError, LookupError, TypeError, AttributeError) as e:
            logger.error(f"Error fetching city and state for ({latitude}, {longitude}): {e}")
            return Resolution.failed(e)

        self._cache.set(cache_key, location)
        return Resolution.found(location)
