# TMDB catalog interactions: text search and movie details
from typing import Any, Dict, Optional
import logging

from requests.exceptions import HTTPError

from reel_recommender.adapters.client import APIClient
from reel_recommender.settings import TMDBSettings, get_settings

logger = logging.getLogger(__name__)


class TMDB_API():
    """Wrapper class for TMDB API interactions"""
    def __init__(self, settings: Optional[TMDBSettings] = None, client: Optional[APIClient] = None):
        self.settings: TMDBSettings = settings or get_settings().tmdb
        if not self.settings.api_key.get_secret_value():
            logger.warning("TMDB_API_KEY is not set; catalog requests will be rejected upstream")
        self._client: APIClient = client or APIClient(
            base_url=str(self.settings.api_base_url),
            default_params={"api_key": self.settings.api_key.get_secret_value()},
        )

    def search_movie(self, query: str, include_adult: Optional[bool] = None) -> Dict[str, Any]:
        """Searches the catalog by free text and returns the raw result page"""
        params: Dict[str, Any] = {"query": query}
        if include_adult is not None:
            params["include_adult"] = str(include_adult).lower()
        return self._client.get("search/movie", params=params)

    def get_movie_details(self, movie_id: int) -> Dict[str, Any] | None:
        """Fetches full movie details (with release dates appended) for a given movie_id"""
        try:
            return self._client.get(
                f"movie/{movie_id}",
                params={"append_to_response": "release_dates", "include_adult": "false"},
            )
        except HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                logger.warning(f"Movie ID {movie_id} not found (404)")
                return None
            raise

    def close(self) -> None:
        self._client.close()
