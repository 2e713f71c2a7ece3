from typing import Any, Dict, Optional

from reel_recommender.adapters.client import APIClient
from reel_recommender.settings import GeocodingSettings, get_settings


class GeocodingAPI:
    """Reverse geocoding through geocode.maps.co (Nominatim-compatible payloads)."""

    def __init__(self, settings: Optional[GeocodingSettings] = None, client: Optional[APIClient] = None):
        self.settings: GeocodingSettings = settings or get_settings().geocoding
        self._client: APIClient = client or APIClient(
            base_url=str(self.settings.api_base_url),
            default_params={"api_key": self.settings.api_key.get_secret_value()},
        )

    def reverse(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return self._client.get("reverse", params={"lat": latitude, "lon": longitude})

    def close(self) -> None:
        self._client.close()
