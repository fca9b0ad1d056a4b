"""Protocol definition for the backing store gateway."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class GatewayError:
    """Error reported by the backing store (as opposed to a raised exception)."""

    message: str
    code: str | None = None
    details: str | None = None
    hint: str | None = None
    status_code: int | None = None


@dataclass
class GatewayResponse:
    """Result of a gateway call.

    ``error`` is None on success. ``data`` holds the returned rows for
    calls that produce any.
    """

    data: list[dict[str, Any]] | None = None
    error: GatewayError | None = None


class BackingStoreGateway(Protocol):
    """Minimal capability the embeddings client needs from the database.

    Implementations report store-side failures through
    ``GatewayResponse.error`` and let transport failures raise.
    """

    async def insert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
    ) -> GatewayResponse:
        """Insert rows into a table.

        Args:
            table: Target table name.
            rows: Rows to insert, in order.

        Returns:
            A response whose ``error`` is None on success.
        """
        ...

    async def call_similarity_search(
        self,
        procedure_name: str,
        params: Mapping[str, Any],
    ) -> GatewayResponse:
        """Invoke a similarity-search remote procedure.

        Args:
            procedure_name: Name of the remote procedure (e.g. match_documents).
            params: Procedure parameters; always includes query_embedding,
                match_threshold, match_count and table_name.

        Returns:
            A response with ranked rows in ``data`` or an ``error``.
        """
        ...
