"""OpenAI embedding provider implementation."""

from collections.abc import Sequence
from datetime import timedelta
from typing import ClassVar

import structlog
from aiobreaker import CircuitBreaker, CircuitBreakerError
from openai import APITimeoutError, AsyncOpenAI, RateLimitError

from supabase_ai.infrastructure.embeddings.exceptions import (
    EmbeddingConfigurationError,
    EmbeddingProviderError,
    EmbeddingRateLimitError,
    EmbeddingTimeoutError,
)
from supabase_ai.infrastructure.embeddings.protocol import CreateOptions
from supabase_ai.infrastructure.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class OpenAIEmbeddingProvider:
    """Embedding provider using OpenAI's embedding API.

    Failures are never retried here; a circuit breaker makes the provider
    fail fast after repeated failures so callers can apply their own
    retry policy.
    """

    PROVIDER_NAME = "openai"
    DEFAULT_MODEL = "text-embedding-3-small"

    # Known dimensions for embedding models; anything else is 1536
    MODEL_DIMENSIONS: ClassVar[dict[str, int]] = {
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
        "text-embedding-ada-002": 1536,
    }

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        timeout_seconds: float = 30.0,
        circuit_breaker_fail_max: int = 5,
        circuit_breaker_timeout: float = 60.0,
    ) -> None:
        """Initialize the embedding provider.

        Args:
            api_key: OpenAI API key.
            model: Default embedding model.
            base_url: Optional base URL for an OpenAI-compatible API.
            timeout_seconds: Request timeout in seconds.
            circuit_breaker_fail_max: Open circuit after this many failures.
            circuit_breaker_timeout: Time in seconds before attempting recovery.

        Raises:
            EmbeddingConfigurationError: If API key is missing.
        """
        if not api_key:
            raise EmbeddingConfigurationError(
                "API key is required", provider=self.PROVIDER_NAME
            )

        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
        )
        self._model = model
        self._dimensions = self.MODEL_DIMENSIONS.get(model, 1536)
        self._timeout = timeout_seconds

        self._breaker = CircuitBreaker(
            fail_max=circuit_breaker_fail_max,
            timeout_duration=timedelta(seconds=circuit_breaker_timeout),
        )

    def get_model(self) -> str:
        """Return the default model name."""
        return self._model

    def get_dimensions(self) -> int:
        """Return the dimensionality of embeddings produced by the default model."""
        return self._dimensions

    async def create_embedding(
        self,
        input: str | Sequence[str],
        options: CreateOptions | None = None,
    ) -> list[list[float]]:
        """Generate embedding vectors for one or more texts.

        Args:
            input: A single text or an ordered sequence of texts.
            options: Optional per-call model/dimension overrides. The
                instance defaults are left untouched.

        Returns:
            One vector per input text, in input order.

        Raises:
            EmbeddingProviderError: If embedding generation fails.
            EmbeddingTimeoutError: If the request times out.
            EmbeddingRateLimitError: If rate limited.
        """
        texts = [input] if isinstance(input, str) else list(input)
        model = self._model
        dimensions: int | None = None
        if options is not None:
            if options.model is not None:
                model = options.model
            dimensions = options.dimensions
        if dimensions is None and model.startswith("text-embedding-3"):
            dimensions = self.MODEL_DIMENSIONS.get(model, 1536)

        with tracer.start_as_current_span("embeddings.create") as span:
            span.set_attribute("embeddings.provider", self.PROVIDER_NAME)
            span.set_attribute("embeddings.model", model)
            span.set_attribute("embeddings.batch_size", len(texts))

            try:
                result = await self._breaker.call_async(
                    self._do_embed, texts, model, dimensions
                )
                if result:
                    span.set_attribute("embeddings.dimensions", len(result[0]))
                return result  # type: ignore[no-any-return]

            except CircuitBreakerError as e:
                span.record_exception(e)
                logger.warning(
                    "circuit_breaker_open",
                    provider=self.PROVIDER_NAME,
                    model=model,
                )
                raise EmbeddingProviderError(
                    "OpenAI embedding error: service temporarily unavailable",
                    provider=self.PROVIDER_NAME,
                ) from e

            except APITimeoutError as e:
                span.record_exception(e)
                logger.warning(
                    "embedding_timeout",
                    provider=self.PROVIDER_NAME,
                    model=model,
                    timeout_seconds=self._timeout,
                    batch_size=len(texts),
                )
                raise EmbeddingTimeoutError(
                    f"OpenAI embedding error: request timed out after {self._timeout}s",
                    provider=self.PROVIDER_NAME,
                ) from e

            except RateLimitError as e:
                span.record_exception(e)
                logger.warning(
                    "embedding_rate_limited",
                    provider=self.PROVIDER_NAME,
                    model=model,
                )
                raise EmbeddingRateLimitError(
                    f"OpenAI embedding error: {e}",
                    provider=self.PROVIDER_NAME,
                ) from e

            except Exception as e:
                span.record_exception(e)
                logger.error(
                    "embedding_request_failed",
                    provider=self.PROVIDER_NAME,
                    model=model,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise EmbeddingProviderError(
                    f"OpenAI embedding error: {e}",
                    provider=self.PROVIDER_NAME,
                ) from e

    async def _do_embed(
        self,
        texts: list[str],
        model: str,
        dimensions: int | None,
    ) -> list[list[float]]:
        """Execute the actual API call."""
        logger.debug(
            "embedding_request_start",
            provider=self.PROVIDER_NAME,
            model=model,
            batch_size=len(texts),
        )

        if dimensions is None:
            response = await self._client.embeddings.create(model=model, input=texts)
        else:
            response = await self._client.embeddings.create(
                model=model,
                input=texts,
                dimensions=dimensions,
            )

        # Sort by index to ensure correct ordering
        embeddings = [
            item.embedding for item in sorted(response.data, key=lambda x: x.index)
        ]

        logger.debug(
            "embedding_request_success",
            provider=self.PROVIDER_NAME,
            model=model,
            batch_size=len(texts),
            dimensions=len(embeddings[0]) if embeddings else 0,
        )

        return embeddings

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()
