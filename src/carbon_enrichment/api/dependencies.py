"""
FastAPI dependency injection for the enrichment service.

Provides singleton instances of long-lived resources (orchestrator registry,
credential store) and the per-request API key resolution.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from carbon_enrichment.config import Settings, settings
from carbon_enrichment.enrichment.registry import OrchestratorRegistry
from carbon_enrichment.persistence.credential_store import (
    CredentialStore,
    build_credential_store,
    resolve_api_key,
)


def get_settings() -> Settings:
    """
    Get settings singleton.
    
    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_registry() -> OrchestratorRegistry:
    """
    Get singleton orchestrator registry.
    
    The registry keeps one orchestrator (and therefore one cache and one
    rate limiter) per API key for the lifetime of the process.
    
    Returns:
        OrchestratorRegistry instance
    """
    return OrchestratorRegistry.from_settings(get_settings())


@lru_cache()
def get_credential_store() -> CredentialStore:
    """
    Get singleton credential store (backend chosen by CREDENTIAL_BACKEND).
    
    Returns:
        CredentialStore instance
    """
    return build_credential_store(get_settings())


async def get_api_key(
    x_api_key: Optional[str] = Header(default=None, alias="X-Api-Key"),
    store: CredentialStore = Depends(get_credential_store),
) -> str:
    """
    Resolve the Gemini API key for this request.
    
    The X-Api-Key header wins; otherwise the credential store is asked.
    
    Raises:
        MissingApiKeyError: Neither source provides a key
    """
    if x_api_key and x_api_key.strip():
        return x_api_key.strip()
    return await resolve_api_key(store)
