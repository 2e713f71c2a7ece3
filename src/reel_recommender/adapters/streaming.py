"""Streaming Availability (RapidAPI) adapter: where a title can be streamed, rented or bought."""

from typing import Any, Dict, Optional
from urllib.parse import quote

from reel_recommender.adapters.client import APIClient
from reel_recommender.settings import StreamingSettings, get_settings


class StreamingAvailabilityAPI:
    def __init__(self, settings: Optional[StreamingSettings] = None, client: Optional[APIClient] = None):
        self.settings: StreamingSettings = settings or get_settings().streaming
        self._client: APIClient = client or APIClient(
            base_url=str(self.settings.api_base_url),
            headers={
                "X-RapidAPI-Key": self.settings.key.get_secret_value(),
                "X-RapidAPI-Host": self.settings.host,
            },
        )

    def get_movie_show(self, movie_id: int) -> Dict[str, Any]:
        """
        Fetch the show record for a TMDB movie id.

        The show id is ``movie/<tmdb id>`` and is sent percent-encoded as a
        single path segment.
        """
        show_id = quote(f"movie/{movie_id}", safe="")
        return self._client.get(
            f"shows/{show_id}",
            params={
                "country": self.settings.country,
                "tmdb_id": movie_id,
                "output_language": self.settings.output_language,
            },
        )

    def close(self) -> None:
        self._client.close()
