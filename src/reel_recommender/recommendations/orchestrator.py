"""
Recommendation Orchestrator - the /recommendations pipeline end to end

    location -> weather -> prompt -> LLM titles -> (per title, concurrently)
    catalog id -> enriched movie

Context failures (location, weather, LLM) abort the request. Per-title
failures only degrade that title's entry; they never cancel the others and
the response always has one entry per suggested title, in suggestion order.
"""

import asyncio
import logging
from typing import List

from reel_recommender.recommendations.errors import (
    LocationUnavailableError,
    WeatherUnavailableError,
)
from reel_recommender.recommendations.generator import RecommendationGenerator
from reel_recommender.recommendations.prompt import RecommendationContext, build_prompt
from reel_recommender.resolvers.location import LocationResolver
from reel_recommender.resolvers.movies import MovieEnrichmentResolver, MovieIdentityResolver
from reel_recommender.resolvers.weather import WeatherResolver
from reel_recommender.schemas import RecommendationItem
from reel_recommender.utils.text_cleaning import strip_release_year

logger = logging.getLogger(__name__)


class RecommendationOrchestrator:

    def __init__(self,
                 location_resolver: LocationResolver,
                 weather_resolver: WeatherResolver,
                 generator: RecommendationGenerator,
                 identity_resolver: MovieIdentityResolver,
                 enrichment_resolver: MovieEnrichmentResolver):
        self.location_resolver = location_resolver
        self.weather_resolver = weather_resolver
        self.generator = generator
        self.identity_resolver = identity_resolver
        self.enrichment_resolver = enrichment_resolver

    async def recommend(self, context: RecommendationContext) -> List[RecommendationItem]:
        """
        Run the full pipeline for one request.

        Raises:
            LocationUnavailableError: reverse geocoding gave nothing usable
            WeatherUnavailableError: current weather could not be fetched
            RecommendationGenerationError: the LLM call failed
        """
        location = await self.location_resolver.resolve(context.latitude, context.longitude)
        if not location.ok:
            raise LocationUnavailableError(location.failed_with or "no location for coordinates")

        weather = await self.weather_resolver.resolve(context.latitude, context.longitude)
        if not weather.ok:
            raise WeatherUnavailableError(weather.failed_with or "no weather for coordinates")

        logger.info(
            f"Recommendations request: {context.day_of_week} {context.month} {context.current_time}, "
            f"{location.value.city}, {location.value.state}, {weather.value}, genres={context.genres}, "
            f"mood={context.mood}, gender={context.gender}, age={context.age}, language={context.language}, "
            f"seen={len(context.seen_movies)}, liked={len(context.liked_movies)}, "
            f"disliked={len(context.disliked_movies)}"
        )

        prompt = build_prompt(context, location.value, weather.value)
        logger.debug(f"Prompt:\n{prompt}")

        titles = await self.generator.generate(prompt)

        results = await asyncio.gather(
            *(self.resolve_candidate(title) for title in titles),
            return_exceptions=True,
        )

        items: List[RecommendationItem] = []
        for title, result in zip(titles, results):
            if isinstance(result, BaseException):
                logger.warning(f"Resolving '{title}' failed unexpectedly: {result}")
                items.append(RecommendationItem.unmatched(title))
            else:
                items.append(result)
        return items

    async def resolve_candidate(self, title: str) -> RecommendationItem:
        """Catalog id and details for one suggested title; degrades instead of raising."""
        identity = await self.identity_resolver.resolve(strip_release_year(title))
        if not identity.ok:
            return RecommendationItem.unmatched(title)

        movie = await self.enrichment_resolver.resolve(identity.value)
        if not movie.ok:
            logger.warning(f"No details for '{title}' (TMDB id {identity.value})")
            return RecommendationItem(title=title, tmdb_id=identity.value)

        return RecommendationItem.from_movie(title, movie.value)
