"""Exceptions for embedding providers."""

from supabase_ai.exceptions import SupabaseAIError


class EmbeddingProviderError(SupabaseAIError):
    """Base exception for embedding provider errors."""

    def __init__(self, message: str, *, provider: str = "unknown") -> None:
        self.provider = provider
        super().__init__(message, code="EMBEDDING_PROVIDER_ERROR")


class EmbeddingTimeoutError(EmbeddingProviderError):
    """Raised when an embedding request times out."""


class EmbeddingRateLimitError(EmbeddingProviderError):
    """Raised when rate limited by the embedding provider."""


class EmbeddingConfigurationError(EmbeddingProviderError):
    """Raised when there's a configuration issue (e.g., missing API key)."""
