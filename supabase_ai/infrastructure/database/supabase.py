"""Supabase backing store gateway speaking PostgREST over HTTP."""

from collections.abc import Mapping, Sequence
from typing import Any

import httpx
import structlog

from supabase_ai.exceptions import ConfigurationError
from supabase_ai.infrastructure.database.protocol import GatewayError, GatewayResponse
from supabase_ai.infrastructure.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class SupabaseRestGateway:
    """Gateway to a Supabase project using its PostgREST endpoint.

    Error statuses from PostgREST come back as ``GatewayResponse.error``.
    Transport failures (timeouts, refused connections) are raised as
    httpx exceptions.
    """

    PROVIDER_NAME = "supabase"

    def __init__(
        self,
        url: str,
        key: str,
        *,
        schema: str = "public",
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize the gateway.

        Args:
            url: Supabase project URL (e.g. https://xyz.supabase.co).
            key: Supabase API key (anon or service role).
            schema: Postgres schema exposed through PostgREST.
            timeout_seconds: Request timeout in seconds.

        Raises:
            ConfigurationError: If the URL or key is missing.
        """
        if not url:
            raise ConfigurationError("Supabase URL is required")
        if not key:
            raise ConfigurationError("Supabase key is required")

        self._url = url.rstrip("/")
        self._schema = schema
        self._timeout = timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=f"{self._url}/rest/v1",
            timeout=httpx.Timeout(timeout_seconds),
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
                "Content-Profile": schema,
                "Accept-Profile": schema,
            },
        )

    async def insert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
    ) -> GatewayResponse:
        """Insert rows into a table with a single request."""
        with tracer.start_as_current_span("gateway.insert") as span:
            span.set_attribute("gateway.provider", self.PROVIDER_NAME)
            span.set_attribute("gateway.table", table)
            span.set_attribute("gateway.row_count", len(rows))

            response = await self._client.post(
                f"/{table}",
                json=list(rows),
                headers={"Prefer": "return=minimal"},
            )

            if response.is_error:
                error = _parse_error(response)
                span.set_attribute("gateway.status_code", response.status_code)
                logger.error(
                    "gateway_insert_failed",
                    table=table,
                    status_code=response.status_code,
                    error=error.message,
                )
                return GatewayResponse(error=error)

            logger.debug("gateway_insert_success", table=table, row_count=len(rows))
            return GatewayResponse()

    async def call_similarity_search(
        self,
        procedure_name: str,
        params: Mapping[str, Any],
    ) -> GatewayResponse:
        """Call a remote procedure and return its rows."""
        with tracer.start_as_current_span("gateway.rpc") as span:
            span.set_attribute("gateway.provider", self.PROVIDER_NAME)
            span.set_attribute("gateway.procedure", procedure_name)

            response = await self._client.post(
                f"/rpc/{procedure_name}",
                json=dict(params),
            )

            if response.is_error:
                error = _parse_error(response)
                span.set_attribute("gateway.status_code", response.status_code)
                logger.error(
                    "gateway_rpc_failed",
                    procedure=procedure_name,
                    status_code=response.status_code,
                    error=error.message,
                )
                return GatewayResponse(error=error)

            data = response.json()
            if data is not None and not isinstance(data, list):
                data = [data]

            span.set_attribute("gateway.row_count", len(data or []))
            logger.debug(
                "gateway_rpc_success",
                procedure=procedure_name,
                row_count=len(data or []),
            )
            return GatewayResponse(data=data)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


def _parse_error(response: httpx.Response) -> GatewayError:
    """Build a GatewayError from a PostgREST error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        return GatewayError(
            message=body.get("message") or response.text,
            code=body.get("code"),
            details=body.get("details"),
            hint=body.get("hint"),
            status_code=response.status_code,
        )

    return GatewayError(
        message=response.text or f"HTTP {response.status_code}",
        status_code=response.status_code,
    )
