"""Exceptions for backing store operations."""

from typing import Any

from supabase_ai.exceptions import SupabaseAIError


class DatabaseError(SupabaseAIError):
    """Raised when the backing store reports an error or a call to it fails.

    The original error payload (a GatewayError or the raised exception) is
    kept on ``original_error``.
    """

    def __init__(self, message: str, original_error: Any = None) -> None:
        self.original_error = original_error
        super().__init__(message, code="DATABASE_ERROR")
