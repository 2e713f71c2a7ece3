"""
Movie resolvers - catalog identity lookup, detail enrichment and text search

All three consult the shared ResponseCache first and report upstream problems
as a Resolution instead of raising.
"""

import asyncio
import logging
from typing import Any, Dict, List

from requests.exceptions import RequestException

from reel_recommender.adapters.streaming import StreamingAvailabilityAPI
from reel_recommender.adapters.tmdb import TMDB_API
from reel_recommender.cache import MISS, ResponseCache
from reel_recommender.schemas import MovieRecord, Resolution
from reel_recommender.utils.text_cleaning import title_cache_key

logger = logging.getLogger(__name__)

_UPSTREAM_ERRORS = (RequestException, ValueError, LookupError, TypeError, AttributeError)


class MovieIdentityResolver:
    """Free-text title -> catalog id, taking the catalog's first search hit."""

    def __init__(self, tmdb: TMDB_API, cache: ResponseCache):
        self._tmdb = tmdb
        self._cache = cache

    async def resolve(self, title: str) -> Resolution[int]:
        cache_key = f"tmdb_id_{title_cache_key(title)}"
        cached = self._cache.get(cache_key)
        if cached is not MISS:
            logger.debug(f"Using cached TMDB id for '{title}'")
            return Resolution.found(cached)

        try:
            response = await asyncio.to_thread(self._tmdb.search_movie, title)
            results = response.get("results") or []
            if not results:
                logger.info(f"No TMDB match for '{title}'")
                return Resolution.absent()
            tmdb_id = results[0]["id"]
        except _UPSTREAM_ERRORS as e:
            logger.error(f"Error fetching TMDB id for '{title}': {e}")
            return Resolution.failed(e)

        self._cache.set(cache_key, tmdb_id)
        return Resolution.found(tmdb_id)


class MovieEnrichmentResolver:
    """
    Catalog id -> MovieRecord.

    Fetches the catalog details (release dates appended and trimmed to one
    jurisdiction), then tries to attach streaming options, cast and directors.
    A failed streaming lookup still yields, and caches, the catalog record.
    """

    def __init__(self, tmdb: TMDB_API, streaming: StreamingAvailabilityAPI, cache: ResponseCache,
                 certification_country: str = "US"):
        self._tmdb = tmdb
        self._streaming = streaming
        self._cache = cache
        self.certification_country = certification_country

    async def resolve(self, movie_id: int) -> Resolution[MovieRecord]:
        cache_key = f"movie_detail_{movie_id}"
        cached = self._cache.get(cache_key)
        if cached is not MISS:
            logger.debug(f"Using cached movie details for {movie_id}")
            return Resolution.found(cached)
        logger.debug(f"No cached movie details found for {movie_id}")

        try:
            details = await asyncio.to_thread(self._tmdb.get_movie_details, movie_id)
            if not details:
                return Resolution.absent()
            movie = self._trim_release_dates(details)
        except _UPSTREAM_ERRORS as e:
            logger.error(f"Error fetching movie details for {movie_id}: {e}")
            return Resolution.failed(e)

        try:
            record = MovieRecord.model_validate(movie)
        except ValueError as e:
            logger.error(f"Unexpected movie payload for {movie_id}: {e}")
            return Resolution.failed(e)

        try:
            show = await asyncio.to_thread(self._streaming.get_movie_show, movie_id)
            record = MovieRecord.model_validate({
                **movie,
                "streamingProviders": show.get("streamingOptions"),
                "cast": show.get("cast"),
                "directors": show.get("directors"),
            })
        except (RequestException, ValueError, AttributeError) as e:
            logger.warning(f"Error fetching streaming providers for {movie_id}, keeping catalog details only: {e}")

        self._cache.set(cache_key, record)
        return Resolution.found(record)

    def _trim_release_dates(self, details: Dict[str, Any]) -> Dict[str, Any]:
        movie = dict(details)
        release_dates = movie.get("release_dates")
        if isinstance(release_dates, dict):
            results = release_dates.get("results") or []
            movie["release_dates"] = {
                **release_dates,
                "results": [r for r in results if r.get("iso_3166_1") == self.certification_country],
            }
        return movie


class MovieSearch:
    """Catalog text search without adult titles or entries lacking a poster."""

    def __init__(self, tmdb: TMDB_API, cache: ResponseCache):
        self._tmdb = tmdb
        self._cache = cache

    async def search(self, query: str) -> Resolution[List[Dict[str, Any]]]:
        """
        ABSENT when the catalog returns no results at all; an empty list is
        still FOUND when every result was filtered out.
        """
        cache_key = f"searchquery_{query}"
        cached = self._cache.get(cache_key)
        if cached is not MISS:
            logger.debug(f"Using cached data for search query '{query}'")
            return Resolution.found(cached)
        logger.debug(f"No cached data found for search query '{query}'")

        try:
            response = await asyncio.to_thread(self._tmdb.search_movie, query, False)
            results = response.get("results") or []
        except _UPSTREAM_ERRORS as e:
            logger.error(f"Error fetching movie data for '{query}': {e}")
            return Resolution.failed(e)

        if not results:
            return Resolution.absent()

        movies = [m for m in results if not m.get("adult") and m.get("poster_path")]
        self._cache.set(cache_key, movies)
        return Resolution.found(movies)
