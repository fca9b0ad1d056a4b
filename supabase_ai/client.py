"""Top-level client: validates options and wires provider, gateway and embeddings."""

from dataclasses import dataclass, replace
from types import TracebackType
from typing import Self

import structlog

from supabase_ai.config import Settings, get_settings
from supabase_ai.exceptions import ConfigurationError
from supabase_ai.infrastructure.database import (
    BackingStoreGateway,
    SupabaseRestGateway,
)
from supabase_ai.infrastructure.embeddings import (
    CustomEmbeddingProvider,
    EmbedFunction,
    EmbeddingProvider,
    OpenAIEmbeddingProvider,
)
from supabase_ai.infrastructure.observability import init_observability
from supabase_ai.modules.embeddings import EmbeddingsClient

logger = structlog.get_logger()

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "text-embedding-3-small"
DEFAULT_TABLE = "documents"
DEFAULT_THRESHOLD = 0.8


@dataclass
class EmbeddingsOptions:
    """Embeddings sub-configuration. None means "use the default"."""

    provider: str | None = None
    model: str | None = None
    table: str | None = None
    threshold: float | None = None


@dataclass
class SupabaseAIOptions:
    """Options for SupabaseAI."""

    api_key: str | None
    embeddings: EmbeddingsOptions | None = None
    base_url: str | None = None
    timeout_seconds: float = 30.0
    circuit_breaker_fail_max: int = 5
    circuit_breaker_timeout: float = 60.0


@dataclass(frozen=True)
class EmbeddingsConfig:
    """Embeddings configuration with every default applied."""

    provider: str
    model: str
    table: str
    threshold: float


def resolve_embeddings_config(options: EmbeddingsOptions | None) -> EmbeddingsConfig:
    """Apply defaults to the fields that are None.

    Present-but-falsy values (``threshold=0``, ``table=""``) are kept as
    given and left for validation.
    """
    options = options or EmbeddingsOptions()
    return EmbeddingsConfig(
        provider=options.provider if options.provider is not None else DEFAULT_PROVIDER,
        model=options.model if options.model is not None else DEFAULT_MODEL,
        table=options.table if options.table is not None else DEFAULT_TABLE,
        threshold=(
            options.threshold if options.threshold is not None else DEFAULT_THRESHOLD
        ),
    )


class SupabaseAI:
    """Entry point for storing and searching embeddings in Supabase.

    Example:
        gateway = SupabaseRestGateway(url, key)
        ai = SupabaseAI(gateway, SupabaseAIOptions(api_key="sk-..."))
        await ai.embeddings.store([{"content": "hello"}])
        results = await ai.embeddings.search("greeting")
    """

    def __init__(
        self,
        gateway: BackingStoreGateway,
        options: SupabaseAIOptions,
        *,
        provider: EmbeddingProvider | None = None,
    ) -> None:
        """Validate options and build the embeddings client.

        Args:
            gateway: Backing store gateway.
            options: Client options.
            provider: Use this provider instead of building one from
                ``options``; no API key is required in that case.

        Raises:
            ConfigurationError: If the options are invalid.
        """
        self._gateway = gateway
        self._options = options
        self._config = resolve_embeddings_config(options.embeddings)
        if provider is not None:
            self._config = _describe_injected_provider(
                self._config, options.embeddings, provider
            )

        self._validate(require_api_key=provider is None)

        self._provider = provider if provider is not None else self._create_provider()
        self.embeddings = EmbeddingsClient(
            gateway,
            self._provider,
            table=self._config.table,
            threshold=self._config.threshold,
        )

        logger.debug(
            "supabase_ai_initialized",
            provider=self._config.provider,
            model=self._config.model,
            table=self._config.table,
        )

    @classmethod
    def with_custom_provider(
        cls,
        gateway: BackingStoreGateway,
        embed_fn: EmbedFunction,
        model: str,
        dimensions: int,
        embeddings: EmbeddingsOptions | None = None,
    ) -> "SupabaseAI":
        """Build a client whose embeddings come from ``embed_fn``.

        ``embed_fn(input, options)`` may be sync or async.
        """
        embeddings = replace(
            embeddings or EmbeddingsOptions(),
            provider=CustomEmbeddingProvider.PROVIDER_NAME,
            model=model,
        )
        return cls(
            gateway,
            SupabaseAIOptions(api_key=None, embeddings=embeddings),
            provider=CustomEmbeddingProvider(embed_fn, model, dimensions),
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "SupabaseAI":
        """Build a client (and its Supabase gateway) from environment settings."""
        settings = settings or get_settings()

        if settings.otel_enabled:
            init_observability(
                settings.service_name,
                settings.service_version,
                otlp_endpoint=settings.otel_endpoint,
                console_export=settings.otel_console_export,
                sample_rate=settings.otel_sample_rate,
            )

        gateway = SupabaseRestGateway(
            settings.supabase_url or "",
            settings.supabase_key.get_secret_value() if settings.supabase_key else "",
            schema=settings.supabase_schema,
            timeout_seconds=settings.gateway_timeout_seconds,
        )
        options = SupabaseAIOptions(
            api_key=(
                settings.openai_api_key.get_secret_value()
                if settings.openai_api_key
                else None
            ),
            embeddings=EmbeddingsOptions(
                provider=settings.embedding_provider,
                model=settings.embedding_model,
                table=settings.embedding_table,
                threshold=settings.embedding_threshold,
            ),
            base_url=settings.embedding_base_url,
            timeout_seconds=settings.embedding_timeout_seconds,
            circuit_breaker_fail_max=settings.circuit_breaker_fail_max,
            circuit_breaker_timeout=settings.circuit_breaker_timeout,
        )
        return cls(gateway, options)

    @property
    def gateway(self) -> BackingStoreGateway:
        """The backing store gateway this client writes to."""
        return self._gateway

    def get_provider(self) -> str:
        return self._config.provider

    def get_model(self) -> str:
        return self._config.model

    def get_embeddings_config(self) -> EmbeddingsConfig:
        """Return a copy of the resolved embeddings configuration."""
        return replace(self._config)

    async def close(self) -> None:
        """Close the provider and gateway HTTP clients, where they have one."""
        for resource in (self._provider, self._gateway):
            close = getattr(resource, "close", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _validate(self, *, require_api_key: bool) -> None:
        if require_api_key and not self._options.api_key:
            raise ConfigurationError("API key is required")

        if not 0 <= self._config.threshold <= 1:
            raise ConfigurationError("threshold must be between 0 and 1")

        if not self._config.table.strip():
            raise ConfigurationError("table cannot be empty")

    def _create_provider(self) -> EmbeddingProvider:
        if self._config.provider == OpenAIEmbeddingProvider.PROVIDER_NAME:
            return OpenAIEmbeddingProvider(
                self._options.api_key or "",
                model=self._config.model,
                base_url=self._options.base_url,
                timeout_seconds=self._options.timeout_seconds,
                circuit_breaker_fail_max=self._options.circuit_breaker_fail_max,
                circuit_breaker_timeout=self._options.circuit_breaker_timeout,
            )

        if self._config.provider == CustomEmbeddingProvider.PROVIDER_NAME:
            raise ConfigurationError(
                "Custom provider requires SupabaseAI.with_custom_provider()"
            )

        raise ConfigurationError(f"Unknown provider: {self._config.provider}")


def _describe_injected_provider(
    config: EmbeddingsConfig,
    options: EmbeddingsOptions | None,
    provider: EmbeddingProvider,
) -> EmbeddingsConfig:
    """Report an injected provider's own name and model unless options set them."""
    options = options or EmbeddingsOptions()
    name = getattr(provider, "PROVIDER_NAME", None)
    model = provider.get_model()
    return replace(
        config,
        provider=(
            name
            if options.provider is None and isinstance(name, str)
            else config.provider
        ),
        model=(
            model
            if options.model is None and isinstance(model, str)
            else config.model
        ),
    )
