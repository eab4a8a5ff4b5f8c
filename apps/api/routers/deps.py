"""Shared request dependencies."""

from fastapi import Depends, Request

from services.query_cache import QueryCache, build_query_cache
from services.resolver import ContentBridge, ViewPayload


def get_query_cache(request: Request) -> QueryCache:
    """Process-wide query cache, created on first use when lifespan did not set one."""
    cache = getattr(request.app.state, "query_cache", None)
    if cache is None:
        cache = build_query_cache()
        request.app.state.query_cache = cache
    return cache


def get_bridge(cache: QueryCache = Depends(get_query_cache)) -> ContentBridge:
    return ContentBridge(cache)


def payload_status(payload: ViewPayload) -> int:
    """HTTP status for a resolved view; notices still render with the page chrome."""
    if payload.notice is None or payload.notice.kind == "lang_unavailable":
        return 200
    if payload.notice.kind == "not_found":
        return 404
    return 503
