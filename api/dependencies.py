"""
API Dependencies - Singleton state management and FastAPI dependency injection

Builds the process-wide response cache, one adapter per upstream and the
resolvers/services on top of them, exactly once per process.
"""

import logging
import threading
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from reel_recommender.adapters.geocoding import GeocodingAPI
from reel_recommender.adapters.openai import OpenAI_API
from reel_recommender.adapters.streaming import StreamingAvailabilityAPI
from reel_recommender.adapters.tmdb import TMDB_API
from reel_recommender.adapters.weather import WeatherAPI
from reel_recommender.cache import ResponseCache
from reel_recommender.recommendations.generator import RecommendationGenerator
from reel_recommender.recommendations.orchestrator import RecommendationOrchestrator
from reel_recommender.resolvers.location import LocationResolver
from reel_recommender.resolvers.movies import MovieEnrichmentResolver, MovieIdentityResolver, MovieSearch
from reel_recommender.resolvers.weather import WeatherResolver
from reel_recommender.settings import Settings, get_settings
from api.services.ask_service import AskService

logger = logging.getLogger(__name__)


class AppState:
    """
    Global application state - holds the cache, upstream adapters and services.

    Singleton pattern: one instance shared across all requests.
    """

    def __init__(self):
        self.settings: Optional[Settings] = None
        self.cache: Optional[ResponseCache] = None
        self.adapters: Dict[str, Any] = {}

        self.movie_search: Optional[MovieSearch] = None
        self.enrichment_resolver: Optional[MovieEnrichmentResolver] = None
        self.orchestrator: Optional[RecommendationOrchestrator] = None
        self.ask_service: Optional[AskService] = None

        self._initialized = False
        self._initialization_lock = threading.Lock()

    def initialize(self, settings: Optional[Settings] = None) -> None:
        """
        Wire everything together.

        Order:
        1. Response cache (shared by every resolver)
        2. Upstream adapters (one HTTP session each)
        3. Resolvers, generator and orchestrator
        """
        with self._initialization_lock:
            if self._initialized:
                logger.debug("AppState already initialized")
                return

            logger.info("Initializing AppState...")
            cfg = settings or get_settings()
            self.settings = cfg

            self.cache = ResponseCache(ttl_seconds=cfg.cache_ttl_seconds)
            logger.info(f"Response cache ready (ttl={cfg.cache_ttl_seconds}s)")

            tmdb = TMDB_API(cfg.tmdb)
            streaming = StreamingAvailabilityAPI(cfg.streaming)
            geocoding = GeocodingAPI(cfg.geocoding)
            weather = WeatherAPI(cfg.weather)
            llm = OpenAI_API(cfg.openai)
            self.adapters = {
                "tmdb": tmdb,
                "streaming": streaming,
                "geocoding": geocoding,
                "weather": weather,
                "openai": llm,
            }

            identity_resolver = MovieIdentityResolver(tmdb, self.cache)
            self.enrichment_resolver = MovieEnrichmentResolver(
                tmdb, streaming, self.cache,
                certification_country=cfg.tmdb.certification_country,
            )
            self.movie_search = MovieSearch(tmdb, self.cache)
            self.orchestrator = RecommendationOrchestrator(
                location_resolver=LocationResolver(geocoding, self.cache),
                weather_resolver=WeatherResolver(weather, self.cache, ttl_seconds=cfg.weather_cache_ttl_seconds),
                generator=RecommendationGenerator(
                    llm,
                    max_tokens=cfg.openai.recommendation_max_tokens,
                    temperature=cfg.openai.temperature,
                ),
                identity_resolver=identity_resolver,
                enrichment_resolver=self.enrichment_resolver,
            )
            self.ask_service = AskService(llm, max_tokens=cfg.openai.ask_max_tokens)

            self._initialized = True
            logger.info("AppState initialization complete!")

    def shutdown(self) -> None:
        for name, adapter in self.adapters.items():
            logger.debug(f"Closing {name} session")
            adapter.close()

    def is_ready(self) -> bool:
        """Check if app is ready to serve requests"""
        return self._initialized and self.orchestrator is not None

    def get_status(self) -> dict:
        """Get current initialization status"""
        return {
            "initialized": self._initialized,
            "ready": self.is_ready(),
            "cache_entries": len(self.cache) if self.cache is not None else 0,
            "upstreams": sorted(self.adapters),
        }


# Global singleton instance
app_state = AppState()


def get_app_state() -> AppState:
    """
    FastAPI dependency to access app state.

    Usage in routers:
        @router.get("/example")
        async def example(state: AppState = Depends(get_app_state)):
            results = await state.movie_search.search("alien")
            ...
    """
    if not app_state._initialized:
        logger.warning("AppState not initialized, initializing synchronously...")
        app_state.initialize()
    return app_state


@asynccontextmanager
async def lifespan_handler(app):
    """
    FastAPI lifespan context manager for startup/shutdown.

    Usage in main.py:
        app = FastAPI(lifespan=lifespan_handler)
    """
    logger.info("FastAPI starting up...")
    app_state.initialize()

    yield  # App is now running

    logger.info("FastAPI shutting down...")
    app_state.shutdown()
    logger.info("Shutdown complete")
