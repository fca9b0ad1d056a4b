"""Library configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables (or a .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity (used for tracing resources)
    service_name: str = "supabase-ai"
    service_version: str = "0.1.0"

    # Supabase
    supabase_url: str | None = None
    supabase_key: SecretStr | None = None
    supabase_schema: str = "public"
    gateway_timeout_seconds: float = 30.0

    # Embeddings; None means "use the client default"
    openai_api_key: SecretStr | None = None
    embedding_provider: str | None = None
    embedding_model: str | None = None
    embedding_table: str | None = None
    embedding_threshold: float | None = None
    embedding_base_url: str | None = None
    embedding_timeout_seconds: float = 30.0

    # Circuit breaker
    circuit_breaker_fail_max: int = 5
    circuit_breaker_timeout: float = 60.0

    # Observability
    otel_enabled: bool = False
    otel_endpoint: str | None = None  # e.g. http://localhost:4318
    otel_console_export: bool = False
    otel_sample_rate: float = 1.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
