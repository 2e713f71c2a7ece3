"""
Movies Router - catalog search and enriched movie details
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from api.dependencies import AppState, get_app_state
from api.errors import APIError
from reel_recommender.schemas import ResolutionStatus

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/search")
async def search_movies(
    q: str = Query(..., min_length=1, description="Free-text title query"),
    state: AppState = Depends(get_app_state)
) -> List[Dict[str, Any]]:
    """
    Search the catalog by title.

    Adult titles and entries without a poster are filtered out.
    """
    result = await state.movie_search.search(q)

    if result.status is ResolutionStatus.FAILED:
        raise APIError(500, "Error fetching movie data", result.failed_with)
    if result.status is ResolutionStatus.ABSENT:
        raise APIError(404, "No movies found for the given query")

    return result.value


@router.get("/movie/{movie_id}")
async def get_movie(
    movie_id: int,
    state: AppState = Depends(get_app_state)
) -> Dict[str, Any]:
    """
    Full catalog details for one movie, US certifications only, plus
    streaming options, cast and directors when the streaming service answers.
    """
    result = await state.enrichment_resolver.resolve(movie_id)

    if result.status is ResolutionStatus.FAILED:
        raise APIError(500, "Error fetching movie details", result.failed_with)
    if result.status is ResolutionStatus.ABSENT:
        raise APIError(404, "Movie not found")

    return result.value.to_payload()
