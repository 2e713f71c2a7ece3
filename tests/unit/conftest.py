import pytest

from reel_recommender.cache import ResponseCache

from fakes import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Empty 12h cache driven by the fake clock."""
    return ResponseCache(timer=clock)
