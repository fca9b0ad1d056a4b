"""Base exceptions shared across the library.

Every error raised by supabase_ai derives from SupabaseAIError and carries
a stable, machine-readable ``code``.
"""


class SupabaseAIError(Exception):
    """Base exception for all supabase_ai errors."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        self.code = code
        super().__init__(message)


class ConfigurationError(SupabaseAIError):
    """Raised when setup options are invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR")


class ValidationError(SupabaseAIError):
    """Raised when a required per-call argument is missing or invalid."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message, code="VALIDATION_ERROR")
