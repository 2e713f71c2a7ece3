"""
API Errors - JSON error bodies for every user-facing fault

Clients expect ``{"error": ...}`` (plus ``"details"`` for request-fatal
upstream failures) rather than FastAPI's default ``{"detail": ...}``.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Raised by routers; rendered as ``{error, details?}`` with the given status."""

    def __init__(self, status_code: int, error: str, details: Optional[Any] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_body()))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    body = APIError(422, "Invalid request", exc.errors()).to_body()
    return JSONResponse(status_code=422, content=jsonable_encoder(body))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
