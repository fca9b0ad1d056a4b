"""Embedding provider backed by a caller-supplied function."""

import inspect
from collections.abc import Awaitable, Callable, Sequence

import structlog

from supabase_ai.infrastructure.embeddings.protocol import CreateOptions

logger = structlog.get_logger()

EmbedFunction = Callable[
    [str | Sequence[str], CreateOptions | None],
    list[list[float]] | Awaitable[list[list[float]]],
]


class CustomEmbeddingProvider:
    """Embedding provider that delegates to an arbitrary function.

    The function receives ``(input, options)`` and may be synchronous or
    asynchronous. Model name and dimensions are whatever the caller
    declares; the vectors actually returned are not checked against them.
    """

    PROVIDER_NAME = "custom"

    def __init__(self, embed_fn: EmbedFunction, model: str, dimensions: int) -> None:
        self._embed_fn = embed_fn
        self._model = model
        self._dimensions = dimensions

    async def create_embedding(
        self,
        input: str | Sequence[str],
        options: CreateOptions | None = None,
    ) -> list[list[float]]:
        """Generate embeddings by calling the wrapped function."""
        result = self._embed_fn(input, options)
        if inspect.isawaitable(result):
            result = await result
        logger.debug(
            "custom_embedding_created",
            provider=self.PROVIDER_NAME,
            model=self._model,
            count=len(result),
        )
        return result

    def get_model(self) -> str:
        return self._model

    def get_dimensions(self) -> int:
        return self._dimensions
