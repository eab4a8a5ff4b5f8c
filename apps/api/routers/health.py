"""
Health check endpoints.
"""

import redis
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import store_identity
from routers.deps import get_query_cache
from services.query_cache import QueryCache

router = APIRouter()


def _missing_store_settings():
    identity = store_identity()
    missing = []
    if not identity.project_id:
        missing.append("SANITY_PROJECT_ID")
    if not identity.dataset:
        missing.append("SANITY_DATASET")
    if not identity.api_version:
        missing.append("SANITY_API_VERSION")
    return missing


def _ping(cache: QueryCache) -> str:
    try:
        return "up" if cache.backend.ping() else "down"
    except redis.RedisError as e:
        return f"down: {str(e)}"


@router.get("/health")
def health_check(cache: QueryCache = Depends(get_query_cache)):
    """
    Health check endpoint.
    Returns overall system health status.
    """
    health_status = {
        "status": "healthy",
        "api": "up",
        "cache": _ping(cache),
        "cache_backend": cache.backend.name,
        "content_store": "configured" if not _missing_store_settings() else "missing",
    }
    if health_status["cache"] != "up" or health_status["content_store"] != "configured":
        health_status["status"] = "degraded"
    return health_status


@router.get("/health/ready")
def readiness_check(cache: QueryCache = Depends(get_query_cache)):
    """Kubernetes-style readiness probe."""
    missing = _missing_store_settings()
    cache_state = _ping(cache)
    if missing or cache_state != "up":
        return JSONResponse(
            status_code=503,
            content={"ready": False, "missing": missing, "cache": cache_state},
        )
    return {"ready": True}


@router.get("/health/live")
def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}
