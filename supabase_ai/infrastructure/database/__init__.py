"""Backing store infrastructure.

This module provides a Protocol-based abstraction for the database that
holds embeddings, plus a Supabase (PostgREST) implementation.
"""

from supabase_ai.infrastructure.database.exceptions import DatabaseError
from supabase_ai.infrastructure.database.protocol import (
    BackingStoreGateway,
    GatewayError,
    GatewayResponse,
)
from supabase_ai.infrastructure.database.supabase import SupabaseRestGateway

__all__ = [
    "BackingStoreGateway",
    "DatabaseError",
    "GatewayError",
    "GatewayResponse",
    "SupabaseRestGateway",
]
