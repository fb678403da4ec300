"""
Credential persistence.

- credential_store.py: API key lookup (settings or Redis backed)
"""

from carbon_enrichment.persistence.credential_store import (
    API_KEY_NAME,
    CredentialStore,
    RedisCredentialStore,
    SettingsCredentialStore,
    build_credential_store,
    resolve_api_key,
)

__all__ = [
    "API_KEY_NAME",
    "CredentialStore",
    "SettingsCredentialStore",
    "RedisCredentialStore",
    "build_credential_store",
    "resolve_api_key",
]
