"""
Configuration settings for the Carbon Enrichment Service.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Carbon Enrichment Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Gemini Configuration ===
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    GEMINI_API_KEY: Optional[str] = None  # Optional, clients usually send X-Api-Key
    GEMINI_TIMEOUT: int = 60  # seconds
    # Fallback precedence: most capable / most recent first
    GEMINI_MODELS: list[str] = [
        "gemini-2.0-flash-exp",
        "gemini-2.0-flash-thinking-exp-01-21",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
        "gemini-1.5-flash-8b",
        "gemini-exp-1206",
    ]
    
    # === LLM Generation Parameters ===
    LLM_TEMPERATURE: float = 1.0
    LLM_TOP_P: float = 0.95
    LLM_TOP_K: int = 40
    LLM_MAX_OUTPUT_TOKENS: int = 8192
    
    # === Retry & Rate Limiting ===
    MAX_RETRIES: int = 3
    RETRY_INITIAL_DELAY: float = 1.0  # seconds, doubled per retry
    RETRY_MAX_DELAY: float = 5.0  # seconds
    MIN_REQUEST_INTERVAL: float = 1.0  # seconds between outbound calls
    
    # === Response Cache ===
    CACHE_MAX_SIZE: int = 100
    CACHE_TTL_SECONDS: int = 86400  # 24 hours
    MAX_ORCHESTRATORS: int = 100  # API keys held at once, least recently used evicted
    
    # === Credentials ===
    CREDENTIAL_BACKEND: str = "settings"  # "settings" or "redis"
    CREDENTIAL_KEY_PREFIX: str = "carbon_enrichment:"
    REDIS_URL: str = "redis://redis:6379/0"
    REDIS_MAX_CONNECTIONS: int = 10
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
