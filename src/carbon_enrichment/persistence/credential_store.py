"""
Credential stores supplying the Gemini API key.

The extension kept the key in a string key-value store under "geminiApiKey".
Two backends are provided:

- SettingsCredentialStore: read-only, backed by GEMINI_API_KEY
- RedisCredentialStore: get/set over redis.asyncio

A missing key is a configuration error for the caller (resolve_api_key
raises MissingApiKeyError); it is never retried.
"""

from typing import Optional, Protocol

import structlog
from redis.asyncio import ConnectionPool as AsyncConnectionPool
from redis.asyncio import Redis as AsyncRedis

from carbon_enrichment.config import Settings
from carbon_enrichment.exceptions import MissingApiKeyError

logger = structlog.get_logger(__name__)

API_KEY_NAME = "geminiApiKey"


class CredentialStore(Protocol):
    """String key-value store for credentials."""
    
    async def get(self, key: str) -> Optional[str]:
        ...


class SettingsCredentialStore:
    """
    Read-only store exposing GEMINI_API_KEY under the "geminiApiKey" key.
    """
    
    def __init__(self, settings: Settings):
        self._values = {API_KEY_NAME: settings.GEMINI_API_KEY} if settings.GEMINI_API_KEY else {}
    
    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)


class RedisCredentialStore:
    """
    Redis-backed credential store.
    
    Keys are namespaced with a prefix (default "carbon_enrichment:").
    The client must be created with decode_responses=True.
    """
    
    def __init__(self, redis_client: AsyncRedis, key_prefix: str = "carbon_enrichment:"):
        self.redis = redis_client
        self.key_prefix = key_prefix
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisCredentialStore":
        pool = AsyncConnectionPool.from_url(
            settings.REDIS_URL,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            decode_responses=True,  # Auto-decode bytes to str
            socket_timeout=5,
            socket_connect_timeout=5,
        )
        logger.info("Initialized Redis credential store", key_prefix=settings.CREDENTIAL_KEY_PREFIX)
        return cls(AsyncRedis(connection_pool=pool), settings.CREDENTIAL_KEY_PREFIX)
    
    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"
    
    async def get(self, key: str) -> Optional[str]:
        value = await self.redis.get(self._key(key))
        if value is None:
            logger.debug("Credential not found", key=key)
        return value
    
    async def set(self, key: str, value: str) -> None:
        await self.redis.set(self._key(key), value)
        logger.info("Credential stored", key=key)
    
    async def close(self) -> None:
        await self.redis.aclose()


def build_credential_store(settings: Settings) -> CredentialStore:
    """Create the store selected by CREDENTIAL_BACKEND."""
    backend = settings.CREDENTIAL_BACKEND.lower()
    if backend == "redis":
        return RedisCredentialStore.from_settings(settings)
    if backend == "settings":
        return SettingsCredentialStore(settings)
    raise ValueError(f"Unknown credential backend: {settings.CREDENTIAL_BACKEND}")


async def resolve_api_key(store: CredentialStore, key: str = API_KEY_NAME) -> str:
    """
    Fetch the API key or fail.
    
    Raises:
        MissingApiKeyError: The store has no (non-blank) value for key
    """
    value = await store.get(key)
    if not value or not value.strip():
        raise MissingApiKeyError(key=key)
    return value.strip()
