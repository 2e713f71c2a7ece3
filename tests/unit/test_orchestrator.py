"""Tests for the end-to-end recommendation pipeline."""
import asyncio
import threading
import time

import pytest
import requests

from reel_recommender.recommendations.errors import (
    LocationUnavailableError,
    RecommendationGenerationError,
    WeatherUnavailableError,
)
from reel_recommender.recommendations.generator import RecommendationGenerator
from reel_recommender.recommendations.orchestrator import RecommendationOrchestrator
from reel_recommender.recommendations.prompt import RecommendationContext
from reel_recommender.resolvers.location import LocationResolver
from reel_recommender.resolvers.movies import MovieEnrichmentResolver, MovieIdentityResolver
from reel_recommender.resolvers.weather import WeatherResolver

from fakes import FakeGeocoding, FakeLLM, FakeStreaming, FakeTMDB, FakeWeather, movie_details, streaming_show

LLM_ANSWER = (
    "1. The Matrix (1999)\n"
    "2. Nonexistent Film\n"
    "3. Heat\n"
    "4. Another Missing One\n"
    "5. Up (2009)\n"
)


@pytest.fixture
def context():
    return RecommendationContext(
        current_time="9:00 PM",
        month="July",
        day_of_week="Saturday",
        latitude=30.2672,
        longitude=-97.7431,
        age=16,
        seen_movies=["Jaws"],
    )


@pytest.fixture
def tmdb():
    return FakeTMDB(
        search={
            "The Matrix": [{"id": 603}],
            "Heat": [{"id": 949}],
            "Up": [{"id": 14160}],
        },
        details={
            603: movie_details(603, "The Matrix"),
            949: movie_details(949, "Heat"),
            14160: movie_details(14160, "Up"),
        },
    )


@pytest.fixture
def streaming():
    return FakeStreaming(shows={i: streaming_show(i) for i in (603, 949, 14160)})


def build(cache, tmdb, streaming, geocoding=None, weather=None, llm=None):
    geocoding = geocoding or FakeGeocoding()
    weather = weather or FakeWeather()
    llm = llm or FakeLLM(content=LLM_ANSWER)
    orchestrator = RecommendationOrchestrator(
        location_resolver=LocationResolver(geocoding, cache),
        weather_resolver=WeatherResolver(weather, cache),
        generator=RecommendationGenerator(llm),
        identity_resolver=MovieIdentityResolver(tmdb, cache),
        enrichment_resolver=MovieEnrichmentResolver(tmdb, streaming, cache),
    )
    return orchestrator, geocoding, weather, llm


class TestRecommendationPipeline:

    def test_items_follow_generator_order(self, cache, context, tmdb, streaming):
        orchestrator, *_ = build(cache, tmdb, streaming)
        items = asyncio.run(orchestrator.recommend(context))
        assert [item.title for item in items] == [
            "The Matrix (1999)", "Nonexistent Film", "Heat", "Another Missing One", "Up (2009)",
        ]
        assert [item.tmdb_id for item in items] == [603, None, 949, None, 14160]

    def test_two_unmatched_of_five(self, cache, context, tmdb, streaming):
        orchestrator, *_ = build(cache, tmdb, streaming)
        items = asyncio.run(orchestrator.recommend(context))
        assert len(items) == 5
        assert sum(1 for item in items if item.tmdb_id is None) == 2

    def test_year_stripped_before_lookup_but_kept_in_title(self, cache, context, tmdb, streaming):
        orchestrator, *_ = build(cache, tmdb, streaming)
        items = asyncio.run(orchestrator.recommend(context))
        queried = {query for query, _ in tmdb.search_calls}
        assert "The Matrix" in queried and "Up" in queried
        assert "The Matrix (1999)" not in queried
        assert items[0].title == "The Matrix (1999)"

    def test_matched_item_payload(self, cache, context, tmdb, streaming):
        orchestrator, *_ = build(cache, tmdb, streaming)
        items = asyncio.run(orchestrator.recommend(context))
        assert items[0].to_payload() == {
            "title": "The Matrix (1999)",
            "tmdbId": 603,
            "backdrop_path": "/backdrop603.jpg",
            "posterPath": "/poster603.jpg",
            "streamingProviders": {"us": [{"service": {"id": "netflix"}, "type": "subscription"}]},
        }

    def test_unmatched_item_payload(self, cache, context, tmdb, streaming):
        orchestrator, *_ = build(cache, tmdb, streaming)
        items = asyncio.run(orchestrator.recommend(context))
        assert items[1].to_payload() == {"title": "Nonexistent Film", "tmdbId": None}

    def test_streaming_outage_omits_providers(self, cache, context, tmdb):
        streaming = FakeStreaming(error=requests.ConnectionError("rapidapi down"))
        orchestrator, *_ = build(cache, tmdb, streaming)
        items = asyncio.run(orchestrator.recommend(context))
        payload = items[0].to_payload()
        assert payload["posterPath"] == "/poster603.jpg"
        assert "streamingProviders" not in payload

    def test_details_unavailable_keeps_id(self, cache, context, streaming):
        tmdb = FakeTMDB(search={"Heat": [{"id": 949}]}, failing_ids=(949,))
        llm = FakeLLM(content="1. Heat")
        orchestrator, *_ = build(cache, tmdb, streaming, llm=llm)
        items = asyncio.run(orchestrator.recommend(context))
        assert items[0].to_payload() == {"title": "Heat", "tmdbId": 949}

    def test_identity_errors_degrade_not_abort(self, cache, context, tmdb, streaming):
        tmdb.failing_titles = ("Heat",)
        orchestrator, *_ = build(cache, tmdb, streaming)
        items = asyncio.run(orchestrator.recommend(context))
        assert len(items) == 5
        assert items[2].tmdb_id is None

    def test_unexpected_candidate_error_does_not_cancel_siblings(self, cache, context, tmdb, streaming):
        orchestrator, *_ = build(cache, tmdb, streaming)
        real_resolve = orchestrator.identity_resolver.resolve

        async def flaky(title):
            if title == "Heat":
                raise RuntimeError("boom")
            return await real_resolve(title)

        orchestrator.identity_resolver.resolve = flaky
        items = asyncio.run(orchestrator.recommend(context))
        assert [item.tmdb_id for item in items] == [603, None, None, None, 14160]

    def test_prompt_carries_context(self, cache, context, tmdb, streaming):
        orchestrator, _, _, llm = build(cache, tmdb, streaming)
        asyncio.run(orchestrator.recommend(context))
        prompt = llm.chat_calls[0][0][1]["content"]
        assert "Location: Austin, Texas\n" in prompt
        assert "Weather: light rain, 61.5°F\n" in prompt
        assert "Do not suggest the following movies:\n Jaws\n" in prompt
        assert "Do not suggest movies that are rated R.\n" in prompt

    def test_repeat_request_hits_cache(self, cache, context, tmdb, streaming):
        orchestrator, geocoding, weather, llm = build(cache, tmdb, streaming)
        asyncio.run(orchestrator.recommend(context))
        searches = len(tmdb.search_calls)
        details = len(tmdb.detail_calls)
        asyncio.run(orchestrator.recommend(context))
        assert len(geocoding.calls) == 1
        # weather is recomputed on every request
        assert len(weather.calls) == 2
        assert len(llm.chat_calls) == 2
        # unmatched titles are looked up again, matched ones are cached
        assert len(tmdb.search_calls) == searches + 2
        assert len(tmdb.detail_calls) == details


class TestPipelineAborts:

    def test_location_failure_aborts_before_generation(self, cache, context, tmdb, streaming):
        geocoding = FakeGeocoding(error=requests.ConnectionError("geocoder down"))
        orchestrator, _, weather, llm = build(cache, tmdb, streaming, geocoding=geocoding)
        with pytest.raises(LocationUnavailableError) as exc_info:
            asyncio.run(orchestrator.recommend(context))
        assert "geocoder down" in exc_info.value.details
        assert exc_info.value.message == "Error fetching location data"
        assert len(llm.chat_calls) == 0
        assert len(weather.calls) == 0
        assert tmdb.search_calls == []

    def test_weather_failure_aborts_before_generation(self, cache, context, tmdb, streaming):
        weather = FakeWeather(error=requests.Timeout("weather timed out"))
        orchestrator, _, _, llm = build(cache, tmdb, streaming, weather=weather)
        with pytest.raises(WeatherUnavailableError) as exc_info:
            asyncio.run(orchestrator.recommend(context))
        assert exc_info.value.message == "Error fetching weather data"
        assert len(llm.chat_calls) == 0

    def test_generator_failure_propagates(self, cache, context, tmdb, streaming):
        llm = FakeLLM(error=requests.HTTPError("429 Too Many Requests"))
        orchestrator, *_ = build(cache, tmdb, streaming, llm=llm)
        with pytest.raises(RecommendationGenerationError):
            asyncio.run(orchestrator.recommend(context))
        assert tmdb.search_calls == []


class SlowTMDB(FakeTMDB):
    """Blocks every search until all expected searches are in flight."""

    def __init__(self, expected: int, **kwargs):
        super().__init__(**kwargs)
        self.barrier = threading.Barrier(expected, timeout=5)

    def search_movie(self, query, include_adult=None):
        self.barrier.wait()
        return super().search_movie(query, include_adult)


class TestConcurrentFanOut:

    def test_candidates_resolved_concurrently(self, cache, context, streaming):
        # Each search waits for the other four; sequential dispatch would break the barrier.
        tmdb = SlowTMDB(
            expected=5,
            search={"The Matrix": [{"id": 603}], "Heat": [{"id": 949}], "Up": [{"id": 14160}]},
            details={i: movie_details(i, str(i)) for i in (603, 949, 14160)},
        )
        orchestrator, *_ = build(cache, tmdb, streaming)
        started = time.monotonic()
        items = asyncio.run(orchestrator.recommend(context))
        assert time.monotonic() - started < 5
        assert [item.tmdb_id for item in items] == [603, None, 949, None, 14160]
