"""Embedding provider infrastructure.

This module provides a Protocol-based abstraction for embedding providers,
allowing easy swapping between different embedding backends.
"""

from supabase_ai.infrastructure.embeddings.custom import (
    CustomEmbeddingProvider,
    EmbedFunction,
)
from supabase_ai.infrastructure.embeddings.exceptions import (
    EmbeddingConfigurationError,
    EmbeddingProviderError,
    EmbeddingRateLimitError,
    EmbeddingTimeoutError,
)
from supabase_ai.infrastructure.embeddings.openai import OpenAIEmbeddingProvider
from supabase_ai.infrastructure.embeddings.protocol import (
    CreateOptions,
    EmbeddingProvider,
)

__all__ = [
    "CreateOptions",
    "CustomEmbeddingProvider",
    "EmbedFunction",
    "EmbeddingConfigurationError",
    "EmbeddingProvider",
    "EmbeddingProviderError",
    "EmbeddingRateLimitError",
    "EmbeddingTimeoutError",
    "OpenAIEmbeddingProvider",
]
