"""Redis cache backend implementing ICacheBackend."""

from __future__ import annotations

import logging
from typing import Any, Callable

import redis

from contentmod.core.exceptions import CacheError

logger = logging.getLogger(__name__)


class RedisCacheBackend:
    """Production ICacheBackend backed by Redis.

    Every key is stored under ``key_prefix`` so several deployments can share
    one Redis database.
    """

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 key_prefix: str = "contentmod:") -> None:
        self._key_prefix = key_prefix
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def _call(self, op: str, key: str, fn: Callable[[str], Any]) -> Any:
        full_key = f"{self._key_prefix}{key}"
        try:
            return fn(full_key)
        except Exception as exc:
            raise CacheError(f"Redis {op} failed for key={full_key!r}: {exc}") from exc

    def get(self, key: str) -> str | None:
        value = self._call("GET", key, lambda k: self._client.get(k))
        logger.debug("Cache %s for %s", "hit" if value is not None else "miss", key)
        return value

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._call("SETEX", key, lambda k: self._client.setex(k, ttl, value))

    def delete(self, key: str) -> None:
        self._call("DELETE", key, lambda k: self._client.delete(k))
        logger.debug("Evicted cache key %s", key)
