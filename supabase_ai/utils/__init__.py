"""Stateless helpers: vector math and id generation."""

from supabase_ai.utils.ids import generate_id
from supabase_ai.utils.vector_ops import (
    cosine_similarity,
    dot_product,
    euclidean_distance,
    magnitude,
    normalize,
)

__all__ = [
    "cosine_similarity",
    "dot_product",
    "euclidean_distance",
    "generate_id",
    "magnitude",
    "normalize",
]
