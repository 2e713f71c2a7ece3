"""
Reel Recommender - FastAPI Application

Main entry point for the API server.
Environment-agnostic: configuration reads from settings (.env file).
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reel_recommender import __version__
from reel_recommender.logging_setup import setup_logging
from reel_recommender.settings import get_settings
from api.dependencies import lifespan_handler
from api.errors import register_exception_handlers
from api.routers import ask, health, movies, recommendations

# Get settings
cfg = get_settings()

# Configure logging
setup_logging(cfg.log_level)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Configuration is loaded from settings (reads from .env file).

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Reel Recommender API",
        description="Movie search, details and context-aware recommendations composed from TMDB, "
                    "streaming availability, geocoding, weather and OpenAI",
        version=__version__,
        lifespan=lifespan_handler  # Handles startup/shutdown
    )

    logger.info(f"Configuring CORS with origins: {cfg.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routes are unprefixed: the front end calls /search, /movie/{id}, ...
    app.include_router(recommendations.router, tags=["recommendations"])
    app.include_router(movies.router, tags=["movies"])
    app.include_router(ask.router, tags=["ask"])
    app.include_router(health.router, prefix="/health", tags=["health"])

    @app.get("/")
    async def root():
        """Root endpoint - API info"""
        return {
            "name": "Reel Recommender API",
            "version": __version__,
            "environment": cfg.env,
            "status": "running",
            "docs": "/docs",
            "health": "/health/ready"
        }

    logger.info(f"FastAPI application created (env={cfg.env})")

    return app


# Create app instance
app = create_app()


def run() -> None:
    import uvicorn

    logger.info(f"Starting API server on {cfg.api_host}:{cfg.api_port}")
    logger.info(f"Environment: {cfg.env}")
    logger.info(f"Reload: {cfg.api_reload}")
    logger.info(f"Workers: {cfg.api_workers}")

    uvicorn.run(
        "api.main:app",
        host=cfg.api_host,
        port=cfg.api_port,
        reload=cfg.api_reload,
        workers=cfg.api_workers if not cfg.api_reload else 1,  # Workers only work without reload
        log_level=cfg.log_level.lower()
    )


if __name__ == "__main__":
    run()
