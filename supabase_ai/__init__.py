"""Store text as vector embeddings in Supabase and search it by similarity."""

from supabase_ai.client import (
    EmbeddingsConfig,
    EmbeddingsOptions,
    SupabaseAI,
    SupabaseAIOptions,
)
from supabase_ai.exceptions import (
    ConfigurationError,
    SupabaseAIError,
    ValidationError,
)
from supabase_ai.infrastructure.database import (
    BackingStoreGateway,
    DatabaseError,
    GatewayError,
    GatewayResponse,
    SupabaseRestGateway,
)
from supabase_ai.infrastructure.embeddings import (
    CreateOptions,
    CustomEmbeddingProvider,
    EmbeddingProvider,
    EmbeddingProviderError,
    OpenAIEmbeddingProvider,
)
from supabase_ai.modules.embeddings import (
    EmbeddingsClient,
    SearchResult,
    StoreDocument,
)

__version__ = "0.1.0"

__all__ = [
    "BackingStoreGateway",
    "ConfigurationError",
    "CreateOptions",
    "CustomEmbeddingProvider",
    "DatabaseError",
    "EmbeddingProvider",
    "EmbeddingProviderError",
    "EmbeddingsClient",
    "EmbeddingsConfig",
    "EmbeddingsOptions",
    "GatewayError",
    "GatewayResponse",
    "OpenAIEmbeddingProvider",
    "SearchResult",
    "StoreDocument",
    "SupabaseAI",
    "SupabaseAIError",
    "SupabaseAIOptions",
    "SupabaseRestGateway",
    "ValidationError",
    "__version__",
]
