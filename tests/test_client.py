"""Tests for the top-level SupabaseAI client and its configuration."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from supabase_ai import (
    ConfigurationError,
    CustomEmbeddingProvider,
    EmbeddingsClient,
    EmbeddingsConfig,
    EmbeddingsOptions,
    GatewayResponse,
    OpenAIEmbeddingProvider,
    SupabaseAI,
    SupabaseAIOptions,
    SupabaseRestGateway,
)
from supabase_ai.config import Settings


@pytest.fixture
def mock_gateway():
    """Create a mock gateway."""
    gateway = MagicMock()
    gateway.insert = AsyncMock(return_value=GatewayResponse())
    gateway.call_similarity_search = AsyncMock(return_value=GatewayResponse(data=[]))
    gateway.close = AsyncMock()
    return gateway


class TestSupabaseAIInit:
    """Tests for SupabaseAI construction."""

    def test_default_embeddings_config(self, mock_gateway):
        """Missing embeddings options should resolve to the defaults."""
        ai = SupabaseAI(mock_gateway, SupabaseAIOptions(api_key="test-api-key"))

        assert isinstance(ai.embeddings, EmbeddingsClient)
        assert isinstance(ai.embeddings.provider, OpenAIEmbeddingProvider)
        assert ai.get_embeddings_config() == EmbeddingsConfig(
            provider="openai",
            model="text-embedding-3-small",
            table="documents",
            threshold=0.8,
        )

    def test_custom_embeddings_config(self, mock_gateway):
        """Given embeddings options should be used as-is."""
        ai = SupabaseAI(
            mock_gateway,
            SupabaseAIOptions(
                api_key="test-api-key",
                embeddings=EmbeddingsOptions(
                    provider="openai",
                    model="text-embedding-3-large",
                    table="custom_docs",
                    threshold=0.9,
                ),
            ),
        )

        assert ai.get_embeddings_config() == EmbeddingsConfig(
            provider="openai",
            model="text-embedding-3-large",
            table="custom_docs",
            threshold=0.9,
        )
        assert ai.embeddings.default_table == "custom_docs"
        assert ai.embeddings.default_threshold == 0.9
        assert ai.embeddings.provider.get_dimensions() == 3072

    @pytest.mark.parametrize("api_key", [None, ""])
    def test_missing_api_key_raises(self, mock_gateway, api_key):
        """A missing or empty API key should fail fast."""
        with pytest.raises(ConfigurationError, match="API key is required") as exc_info:
            SupabaseAI(mock_gateway, SupabaseAIOptions(api_key=api_key))

        assert exc_info.value.code == "CONFIGURATION_ERROR"

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range_raises(self, mock_gateway, threshold):
        """Thresholds outside [0, 1] should be rejected."""
        with pytest.raises(ConfigurationError, match="threshold must be between 0 and 1"):
            SupabaseAI(
                mock_gateway,
                SupabaseAIOptions(
                    api_key="k", embeddings=EmbeddingsOptions(threshold=threshold)
                ),
            )

    @pytest.mark.parametrize("table", ["", "   "])
    def test_blank_table_raises(self, mock_gateway, table):
        """Empty or whitespace-only table names should be rejected."""
        with pytest.raises(ConfigurationError, match="table cannot be empty"):
            SupabaseAI(
                mock_gateway,
                SupabaseAIOptions(api_key="k", embeddings=EmbeddingsOptions(table=table)),
            )

    def test_unknown_provider_raises(self, mock_gateway):
        """Unsupported providers should be rejected."""
        with pytest.raises(ConfigurationError, match="Unknown provider: anthropic"):
            SupabaseAI(
                mock_gateway,
                SupabaseAIOptions(
                    api_key="k", embeddings=EmbeddingsOptions(provider="anthropic")
                ),
            )

    def test_custom_provider_name_requires_factory(self, mock_gateway):
        """provider='custom' without a function should point to the factory."""
        with pytest.raises(ConfigurationError, match="with_custom_provider"):
            SupabaseAI(
                mock_gateway,
                SupabaseAIOptions(
                    api_key="k", embeddings=EmbeddingsOptions(provider="custom")
                ),
            )

    def test_injected_provider_needs_no_api_key(self, mock_gateway):
        """Passing a provider directly should skip the API key requirement."""
        provider = MagicMock()

        ai = SupabaseAI(mock_gateway, SupabaseAIOptions(api_key=None), provider=provider)

        assert ai.embeddings.provider is provider

    def test_injected_provider_reports_its_own_name_and_model(self, mock_gateway):
        """Without options, accessors should describe the injected provider."""
        provider = CustomEmbeddingProvider(AsyncMock(), "local-minilm", 384)

        ai = SupabaseAI(mock_gateway, SupabaseAIOptions(api_key=None), provider=provider)

        assert ai.get_provider() == "custom"
        assert ai.get_model() == "local-minilm"

    def test_options_win_over_injected_provider_description(self, mock_gateway):
        """Explicit provider and model options should be reported as given."""
        provider = CustomEmbeddingProvider(AsyncMock(), "local-minilm", 384)

        ai = SupabaseAI(
            mock_gateway,
            SupabaseAIOptions(
                api_key=None,
                embeddings=EmbeddingsOptions(provider="local", model="minilm-v2"),
            ),
            provider=provider,
        )

        assert ai.get_provider() == "local"
        assert ai.get_model() == "minilm-v2"


class TestNullishDefaults:
    """Defaults apply only to missing values, never to falsy ones."""

    def test_none_fields_use_defaults(self, mock_gateway):
        """Explicit None fields should resolve to the defaults."""
        ai = SupabaseAI(
            mock_gateway,
            SupabaseAIOptions(
                api_key="k",
                embeddings=EmbeddingsOptions(
                    provider=None, model=None, table=None, threshold=None
                ),
            ),
        )

        config = ai.get_embeddings_config()
        assert config.provider == "openai"
        assert config.model == "text-embedding-3-small"
        assert config.table == "documents"
        assert config.threshold == 0.8

    def test_empty_strings_are_not_defaulted(self, mock_gateway):
        """An empty table should fail validation instead of using 'documents'."""
        with pytest.raises(ConfigurationError):
            SupabaseAI(
                mock_gateway,
                SupabaseAIOptions(
                    api_key="k", embeddings=EmbeddingsOptions(model="", table="")
                ),
            )

    def test_zero_threshold_is_kept(self, mock_gateway):
        """threshold=0 is a valid value and must not become 0.8."""
        ai = SupabaseAI(
            mock_gateway,
            SupabaseAIOptions(api_key="k", embeddings=EmbeddingsOptions(threshold=0)),
        )

        assert ai.get_embeddings_config().threshold == 0
        assert ai.embeddings.default_threshold == 0


class TestSupabaseAIAccessors:
    """Tests for accessor methods."""

    def test_get_provider_and_model(self, mock_gateway):
        """Provider and model names should reflect the resolved config."""
        ai = SupabaseAI(
            mock_gateway,
            SupabaseAIOptions(
                api_key="k",
                embeddings=EmbeddingsOptions(model="text-embedding-3-large"),
            ),
        )

        assert ai.get_provider() == "openai"
        assert ai.get_model() == "text-embedding-3-large"

    def test_get_embeddings_config_returns_copy(self, mock_gateway):
        """Each call should return an equal but distinct object."""
        ai = SupabaseAI(mock_gateway, SupabaseAIOptions(api_key="k"))

        config1 = ai.get_embeddings_config()
        config2 = ai.get_embeddings_config()

        assert config1 == config2
        assert config1 is not config2

    def test_gateway_property(self, mock_gateway):
        """The gateway should be exposed unchanged."""
        ai = SupabaseAI(mock_gateway, SupabaseAIOptions(api_key="k"))

        assert ai.gateway is mock_gateway

    async def test_close_closes_gateway_and_provider(self, mock_gateway):
        """close() should close every resource that has a close method."""
        provider = MagicMock()
        provider.close = AsyncMock()
        ai = SupabaseAI(mock_gateway, SupabaseAIOptions(api_key=None), provider=provider)

        async with ai:
            pass

        provider.close.assert_awaited_once()
        mock_gateway.close.assert_awaited_once()


class TestWithCustomProvider:
    """Tests for SupabaseAI.with_custom_provider()."""

    async def test_builds_client_around_function(self, mock_gateway):
        """The custom function should back all embedding calls."""
        embed_fn = AsyncMock(return_value=[[0.5, 0.5]])

        ai = SupabaseAI.with_custom_provider(
            mock_gateway,
            embed_fn,
            "my-model",
            2,
            embeddings=EmbeddingsOptions(table="notes", threshold=0.5),
        )
        await ai.embeddings.store([{"content": "hello"}])

        assert isinstance(ai.embeddings.provider, CustomEmbeddingProvider)
        assert ai.get_provider() == "custom"
        assert ai.get_model() == "my-model"
        assert ai.embeddings.provider.get_dimensions() == 2
        embed_fn.assert_awaited_once_with("hello", None)
        mock_gateway.insert.assert_awaited_once()
        assert mock_gateway.insert.call_args.args[0] == "notes"

    def test_defaults_apply_without_options(self, mock_gateway):
        """Without options the usual table and threshold defaults apply."""
        ai = SupabaseAI.with_custom_provider(mock_gateway, AsyncMock(), "m", 4)

        config = ai.get_embeddings_config()
        assert config.table == "documents"
        assert config.threshold == 0.8


class TestFromSettings:
    """Tests for SupabaseAI.from_settings()."""

    async def test_builds_gateway_and_provider(self):
        """Settings should produce a Supabase gateway and an OpenAI provider."""
        settings = Settings(
            _env_file=None,
            supabase_url="https://abc.supabase.co",
            supabase_key=SecretStr("service-key"),
            openai_api_key=SecretStr("sk-test"),
            embedding_table="kb",
            embedding_threshold=0.7,
        )

        ai = SupabaseAI.from_settings(settings)

        assert isinstance(ai.gateway, SupabaseRestGateway)
        assert isinstance(ai.embeddings.provider, OpenAIEmbeddingProvider)
        assert ai.get_embeddings_config() == EmbeddingsConfig(
            provider="openai",
            model="text-embedding-3-small",
            table="kb",
            threshold=0.7,
        )
        await ai.close()

    def test_missing_supabase_url_raises(self):
        """Without a Supabase URL the gateway cannot be built."""
        settings = Settings(
            _env_file=None,
            supabase_url=None,
            supabase_key=SecretStr("service-key"),
            openai_api_key=SecretStr("sk-test"),
        )

        with pytest.raises(ConfigurationError, match="Supabase URL is required"):
            SupabaseAI.from_settings(settings)
