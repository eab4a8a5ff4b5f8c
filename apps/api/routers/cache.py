"""
Cache administration: invalidate all cached queries and inspect cache settings.
"""

import logging

import redis
from fastapi import APIRouter, Depends, HTTPException

from routers.auth_scope import require_admin
from routers.deps import get_query_cache
from services.query_cache import QueryCache

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/clear")
def clear_cache(cache: QueryCache = Depends(get_query_cache)):
    """Bump the cache generation so every previously cached query becomes unreachable."""
    try:
        generation = cache.bump_generation()
    except redis.RedisError as exc:
        logger.warning("Cache generation bump failed: %s", exc)
        raise HTTPException(status_code=503, detail="Cache backend unavailable.") from exc
    return {"ok": True, "message": "Cache cleared", "generation": generation}


@router.get("/stats")
def cache_stats(cache: QueryCache = Depends(get_query_cache)):
    """Current cache generation and settings."""
    return {
        "backend": cache.backend.name,
        "generation": cache.generation(),
        "ttl_seconds": cache.ttl_seconds,
    }
