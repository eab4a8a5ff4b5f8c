"""
Time-boxed query cache keyed by a global cache generation.

Bumping the generation changes every key computed afterwards, so all
previous entries become unreachable at once and simply age out by TTL.
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol

import redis

from config import StoreIdentity, settings
from services.content_store import ContentStoreClient
from services.queries import CatalogQuery

logger = logging.getLogger(__name__)

DEFAULT_GENERATION = "1"
DEFAULT_MEMORY_MAX_ENTRIES = 5000
SWEEP_INTERVAL_SECONDS = 60


class CacheBackend(Protocol):
    name: str

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    def exists(self, key: str) -> bool: ...

    def get_generation(self) -> str: ...

    def bump_generation(self) -> str: ...

    def ping(self) -> bool: ...


@dataclass
class CacheEntry:
    key: str
    value: str
    expiry: float


class MemoryCacheBackend:
    """In-process backend for local runs and tests.

    Expired entries are swept at most once per ``sweep_interval`` seconds on
    write, and the oldest entries are evicted once ``max_entries`` is reached.
    Entries orphaned by a generation bump therefore leave within one TTL.
    """

    name = "memory"

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = DEFAULT_MEMORY_MAX_ENTRIES,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ):
        self._clock = clock
        self._max_entries = max(1, max_entries)
        self._sweep_interval = sweep_interval
        self._entries: Dict[str, CacheEntry] = {}
        self._generation = int(DEFAULT_GENERATION)
        self._lock = threading.Lock()
        self._next_sweep = clock() + sweep_interval

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expiry <= self._clock():
                self._entries.pop(key, None)
                return None
            return entry.value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            now = self._clock()
            self._entries.pop(key, None)
            if now >= self._next_sweep or len(self._entries) >= self._max_entries:
                self._evict(now)
            self._entries[key] = CacheEntry(key=key, value=value, expiry=now + ttl_seconds)

    def _evict(self, now: float) -> None:
        # Caller holds the lock. Dict order is insertion order, so the head is the oldest write.
        self._entries = {k: e for k, e in self._entries.items() if e.expiry > now}
        while len(self._entries) >= self._max_entries:
            self._entries.pop(next(iter(self._entries)))
        self._next_sweep = now + self._sweep_interval

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def get_generation(self) -> str:
        return str(self._generation)

    def bump_generation(self) -> str:
        with self._lock:
            self._generation += 1
            return str(self._generation)

    def ping(self) -> bool:
        return True


class RedisCacheBackend:
    name = "redis"

    def __init__(self, client: redis.Redis, key_prefix: Optional[str] = None):
        self._client = client
        self._generation_key = f"{key_prefix or settings.CACHE_KEY_PREFIX}:cache_generation"

    @classmethod
    def from_url(cls, url: str, key_prefix: Optional[str] = None) -> "RedisCacheBackend":
        return cls(redis.Redis.from_url(url, decode_responses=True), key_prefix=key_prefix)

    def get(self, key: str) -> Optional[str]:
        return self._client.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._client.setex(key, ttl_seconds, value)

    def exists(self, key: str) -> bool:
        return bool(self._client.exists(key))

    def get_generation(self) -> str:
        value = self._client.get(self._generation_key)
        return str(value) if value else DEFAULT_GENERATION

    def bump_generation(self) -> str:
        # INCR on a missing key starts from 0; seed it so the first bump moves past the default.
        self._client.setnx(self._generation_key, DEFAULT_GENERATION)
        return str(self._client.incr(self._generation_key))

    def ping(self) -> bool:
        return bool(self._client.ping())


def create_cache_backend(redis_url: Optional[str] = None) -> CacheBackend:
    url = settings.REDIS_URL if redis_url is None else redis_url
    if not (url or "").strip():
        return MemoryCacheBackend(max_entries=settings.MEMORY_CACHE_MAX_ENTRIES)
    return RedisCacheBackend.from_url(url)


def compute_cache_key(
    generation: str,
    groq: str,
    params: Optional[Dict[str, Any]],
    identity: StoreIdentity,
    prefix: Optional[str] = None,
) -> str:
    raw = "|".join(
        [
            str(generation),
            groq,
            json.dumps(params or {}, sort_keys=True, separators=(",", ":"), ensure_ascii=False),
            identity.project_id,
            identity.dataset,
            identity.api_version,
        ]
    )
    digest = hashlib.md5(raw.encode("utf-8")).hexdigest()
    return f"{prefix or settings.CACHE_KEY_PREFIX}_{digest}"


class QueryCache:
    """Wraps a ContentStoreClient; successful results are cached, errors never are."""

    def __init__(
        self,
        client: ContentStoreClient,
        backend: CacheBackend,
        ttl_seconds: Optional[int] = None,
    ):
        self.client = client
        self.backend = backend
        self.ttl_seconds = int(ttl_seconds if ttl_seconds is not None else settings.CACHE_TTL_SECONDS)

    def generation(self) -> str:
        try:
            return self.backend.get_generation()
        except redis.RedisError as exc:
            logger.warning("Cache generation read failed: %s", exc)
            return DEFAULT_GENERATION

    def bump_generation(self) -> str:
        generation = self.backend.bump_generation()
        logger.info("Cache generation bumped to %s", generation)
        return generation

    def key_for(self, groq: str, params: Optional[Dict[str, Any]] = None) -> str:
        return compute_cache_key(self.generation(), groq, params, self.client.identity)

    def fetch(self, query: CatalogQuery) -> Any:
        """Run a named catalog query through the cache."""
        logger.debug("Running query %s", query.name)
        return self.cached(query.groq, query.params)

    def cached(self, groq: str, params: Optional[Dict[str, Any]] = None) -> Any:
        # Resolving the identity first surfaces ConfigError before any cache I/O.
        identity = self.client.identity
        cache_key = compute_cache_key(self.generation(), groq, params, identity)

        raw = None
        try:
            raw = self.backend.get(cache_key)
        except redis.RedisError as exc:
            logger.warning("Query cache read failed: %s", exc)
        if raw is not None:
            try:
                value = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Discarding unreadable cache entry %s", cache_key[:40])
            else:
                logger.debug("Query cache HIT: %s", cache_key[:40])
                return value

        result = self.client.query(groq, params)

        try:
            self.backend.set(
                cache_key,
                json.dumps(result, separators=(",", ":"), ensure_ascii=False),
                self.ttl_seconds,
            )
        except redis.RedisError as exc:
            logger.warning("Query cache write failed: %s", exc)
        else:
            logger.debug("Query cache MISS (stored): %s", cache_key[:40])
        return result


def build_query_cache() -> QueryCache:
    """QueryCache wired from settings: configured store identity and cache backend."""
    return QueryCache(ContentStoreClient(), create_cache_backend())
