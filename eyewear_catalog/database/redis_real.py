"""
Redis-backed key-value store for the products backup, used when REDIS_URL
is set. Implements the same get/set interface as the stores in
eyewear_catalog.database.backup_store.
"""

from __future__ import annotations

from typing import Optional

import redis

from eyewear_catalog.error_handler import PersistenceFailure


class RedisKeyValueStore:
    def __init__(self, url: str, namespace: str = "catalog") -> None:
        self._client = redis.from_url(url, decode_responses=True)
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            return self._client.get(self._key(key))
        except redis.RedisError as exc:
            raise PersistenceFailure(f"Redis read failed for {key}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        # No TTL: the backup is kept until the next successful write-through.
        try:
            self._client.set(self._key(key), value)
        except redis.RedisError as exc:
            raise PersistenceFailure(f"Redis write failed for {key}: {exc}") from exc

    def ping(self) -> bool:
        try:
            return self._client.ping()
        except redis.RedisError:
            return False
