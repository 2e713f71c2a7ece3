from typing import Any, Dict, Optional

from reel_recommender.adapters.client import APIClient
from reel_recommender.settings import WeatherSettings, get_settings


class WeatherAPI:
    """OpenWeatherMap current-conditions endpoint."""

    def __init__(self, settings: Optional[WeatherSettings] = None, client: Optional[APIClient] = None):
        self.settings: WeatherSettings = settings or get_settings().weather
        self._client: APIClient = client or APIClient(
            base_url=str(self.settings.api_base_url),
            default_params={"appid": self.settings.api_key.get_secret_value()},
        )

    def current(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return self._client.get(
            "weather",
            params={"lat": f"{latitude}", "lon": f"{longitude}", "units": self.settings.units},
        )

    def close(self) -> None:
        self._client.close()
