"""Embeddings module: document normalization, storage and similarity search."""

from supabase_ai.modules.embeddings.normalizer import (
    is_foreign_document,
    normalize_document,
    normalize_documents,
)
from supabase_ai.modules.embeddings.schemas import SearchResult, StoreDocument
from supabase_ai.modules.embeddings.service import EmbeddingsClient

__all__ = [
    "EmbeddingsClient",
    "SearchResult",
    "StoreDocument",
    "is_foreign_document",
    "normalize_document",
    "normalize_documents",
]
