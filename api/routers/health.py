"""
Health Router - Health checks and system status endpoints
"""

from fastapi import APIRouter, Depends
from typing import Dict, Any

from api.dependencies import get_app_state, AppState

router = APIRouter()


@router.get("/ready")
async def health_check_ready(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """
    Kubernetes readiness probe.

    Returns ready=True once the cache, adapters and pipeline are wired.
    """
    status = state.get_status()

    return {
        "ready": state.is_ready(),
        "details": status
    }


@router.get("/info")
async def get_upstream_info(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """
    Configured upstreams and whether their keys are present (never the keys themselves).
    """
    cfg = state.settings
    if cfg is None:
        return {"upstreams": {}, "cache": None}

    upstreams = {
        "tmdb": (cfg.tmdb.api_base_url, cfg.tmdb.api_key),
        "streaming": (cfg.streaming.api_base_url, cfg.streaming.key),
        "geocoding": (cfg.geocoding.api_base_url, cfg.geocoding.api_key),
        "weather": (cfg.weather.api_base_url, cfg.weather.api_key),
        "openai": (cfg.openai.api_base_url, cfg.openai.api_key),
    }

    return {
        "upstreams": {
            name: {"base_url": str(url), "key_configured": bool(key.get_secret_value())}
            for name, (url, key) in upstreams.items()
        },
        "cache": {
            "entries": len(state.cache) if state.cache is not None else 0,
            "ttl_seconds": cfg.cache_ttl_seconds,
            "weather_ttl_seconds": cfg.weather_cache_ttl_seconds,
        },
        "models": {
            "chat": cfg.openai.chat_model,
            "completion": cfg.openai.completion_model,
        },
    }
