"""
Recommendations Router - LLM-driven movie recommendations for the viewer's context
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import AppState, get_app_state
from api.errors import APIError
from api.schemas.recommendations import RecommendationItem, RecommendationRequest
from reel_recommender.recommendations.errors import RecommendationPipelineError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/recommendations",
    response_model=List[RecommendationItem],
    response_model_exclude_unset=True,
)
async def get_recommendations(
    request: RecommendationRequest,
    state: AppState = Depends(get_app_state)
) -> List[RecommendationItem]:
    """
    Recommend five movies for the viewer's time, place, weather and tastes.

    Location and weather are resolved from the coordinates, a prompt is built
    and sent to the chat model, and each suggested title is looked up in the
    catalog and enriched with streaming availability.

    Returns:
        One entry per suggested title, best first. Titles the catalog does
        not know come back with ``tmdbId: null`` and nothing else.

    Raises:
        APIError(500): location, weather or the model were unavailable
    """
    logger.info("Recommendations request received")

    try:
        items = await state.orchestrator.recommend(request.to_context())

    except RecommendationPipelineError as e:
        logger.error(f"{e.message}: {e.details}")
        raise APIError(500, e.message, e.details)

    except Exception as e:
        logger.error(f"Recommendation pipeline failed: {e}", exc_info=True)
        raise APIError(500, "Error fetching recommendations", str(e))

    matched = sum(1 for item in items if item.tmdb_id is not None)
    logger.info(f"Returning {len(items)} recommendations ({matched} matched in TMDB)")
    return items
