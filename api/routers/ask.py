"""
Ask Router - relay a free-form question to the completion model
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import AppState, get_app_state
from api.errors import APIError
from api.schemas.ask import AskRequest, AskResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/ask", response_model=AskResponse)
async def ask(
    request: AskRequest,
    state: AppState = Depends(get_app_state)
) -> AskResponse:
    try:
        answer = await state.ask_service.answer(request.question)
    except Exception as e:
        logger.error(f"Ask request failed: {e}", exc_info=True)
        raise APIError(500, "Error interacting with ChatGPT")

    return AskResponse(answer=answer)
