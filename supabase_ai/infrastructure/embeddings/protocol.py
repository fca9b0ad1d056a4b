"""Protocol definition for embedding providers."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CreateOptions:
    """Per-call overrides for an embedding request.

    Fields left as None fall back to the provider's own defaults.
    """

    model: str | None = None
    dimensions: int | None = None


class EmbeddingProvider(Protocol):
    """Protocol for embedding provider implementations.

    This allows swapping between different embedding backends (OpenAI,
    local models, a caller-supplied function) without changing the
    orchestration logic.
    """

    async def create_embedding(
        self,
        input: str | Sequence[str],
        options: CreateOptions | None = None,
    ) -> list[list[float]]:
        """Generate embedding vectors for one or more texts.

        Args:
            input: A single text or an ordered sequence of texts.
            options: Optional per-call model/dimension overrides.

        Returns:
            One vector per input text, in input order.

        Raises:
            EmbeddingProviderError: If embedding generation fails.
        """
        ...

    def get_model(self) -> str:
        """Return the name of the model used by default."""
        ...

    def get_dimensions(self) -> int:
        """Return the dimensionality of embeddings produced by this provider."""
        ...
