"""Credential access: read-only view over the auth collaborator's key-value store.

The auth flow writes and clears the token elsewhere; this module only reads it.
An absent token is a normal state (``None``), never an exception.
"""

import logging

import redis.asyncio as redis

from waypoint.config import settings

logger = logging.getLogger(__name__)


class MemoryCredentialStore:
    """In-process key-value store (tests, scripts, single-process clients)."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class RedisCredentialStore:
    """Redis-backed store shared with the auth service. Unavailable Redis reads as absent."""

    def __init__(self, url: str | None = None):
        self._url = url or settings.redis_url
        self._redis: redis.Redis | None = None

    async def _get_redis(self) -> redis.Redis | None:
        if self._redis is None:
            try:
                self._redis = redis.from_url(
                    self._url,
                    encoding="utf-8",
                    decode_responses=True,
                )
                await self._redis.ping()
            except Exception as e:
                logger.warning(f"Redis unavailable, credentials read as absent: {e}")
                self._redis = None
                return None
        return self._redis

    async def get(self, key: str) -> str | None:
        try:
            r = await self._get_redis()
            if r is None:
                return None
            return await r.get(key)
        except Exception as e:
            logger.warning(f"Credential read failed for {key}: {e}")
            return None

    async def set(self, key: str, value: str) -> None:
        r = await self._get_redis()
        if r is None:
            raise ConnectionError("Redis unavailable")
        await r.set(key, value)

    async def delete(self, key: str) -> None:
        r = await self._get_redis()
        if r is not None:
            await r.delete(key)

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None


class CredentialAccessor:
    """Single read-only accessor injected into the fetcher and the check-in session."""

    def __init__(self, store, key: str | None = None):
        self._store = store
        self._key = key or settings.credential_token_key

    async def get_token(self) -> str | None:
        token = await self._store.get(self._key)
        return token or None

    async def is_authenticated(self) -> bool:
        return await self.get_token() is not None


def build_credential_store():
    """Store selected by ``settings.credential_backend``."""
    if settings.credential_backend == "redis":
        return RedisCredentialStore()
    return MemoryCredentialStore()
