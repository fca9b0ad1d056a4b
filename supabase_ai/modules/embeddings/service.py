"""Embeddings client orchestrating embedding, storage and similarity search."""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, cast

import structlog

from supabase_ai.exceptions import ValidationError
from supabase_ai.infrastructure.database import BackingStoreGateway, DatabaseError
from supabase_ai.infrastructure.embeddings import CreateOptions, EmbeddingProvider
from supabase_ai.infrastructure.observability import get_tracer, traced
from supabase_ai.modules.embeddings.normalizer import (
    DocumentInput,
    normalize_document,
)
from supabase_ai.modules.embeddings.schemas import SearchResult, StoreDocument
from supabase_ai.utils import vector_ops
from supabase_ai.utils.ids import generate_id

logger = structlog.get_logger()
tracer = get_tracer(__name__)

DEFAULT_THRESHOLD = 0.8
DEFAULT_LIMIT = 10
DEFAULT_BATCH_SIZE = 100
DEFAULT_RPC = "match_documents"


class EmbeddingsClient:
    """Stores documents as embeddings and searches them by similarity.

    The client coordinates:
    - Storage (normalize, embed one document at a time, insert in batches)
    - Search (embed query, call the similarity procedure, shape rows)
    - Ad-hoc similarity between two texts

    Embedding calls and inserts run strictly one after another. A failed
    insert leaves earlier batches persisted and later batches unsent.
    """

    def __init__(
        self,
        gateway: BackingStoreGateway,
        provider: EmbeddingProvider,
        *,
        table: str | None = None,
        threshold: float | None = None,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        """Initialize the embeddings client.

        Args:
            gateway: Backing store used for inserts and similarity calls.
            provider: Provider used to create embeddings.
            table: Default table for store/search when none is given per call.
            threshold: Default similarity threshold for search. Only None
                falls back to 0.8; an explicit 0 is kept.
            id_factory: Generates ids when ``generate_id=True``.
        """
        self._gateway = gateway
        self._provider = provider
        self._default_table = table
        self._default_threshold = (
            threshold if threshold is not None else DEFAULT_THRESHOLD
        )
        self._id_factory = id_factory

    @property
    def provider(self) -> EmbeddingProvider:
        """The active embedding provider."""
        return self._provider

    @property
    def default_table(self) -> str | None:
        return self._default_table

    @property
    def default_threshold(self) -> float:
        return self._default_threshold

    async def create(
        self,
        input: str | Sequence[str],
        options: CreateOptions | None = None,
    ) -> list[list[float]]:
        """Create embeddings with the active provider (no caching)."""
        return await self._provider.create_embedding(input, options)

    async def store(
        self,
        documents: Iterable[DocumentInput],
        *,
        table: str | None = None,
        generate_id: bool = False,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        """Embed documents and insert them into a table.

        Args:
            documents: Native or LangChain-style documents; shapes may be mixed.
            table: Target table (defaults to the client's table).
            generate_id: Assign a fresh id to documents that have none.
                Documents with an explicit id always keep it.
            batch_size: Maximum number of rows per insert call.

        Raises:
            ValidationError: If no table can be resolved or batch_size < 1.
            EmbeddingProviderError: If the provider fails.
            DatabaseError: If an insert reports an error or fails.
        """
        items = list(documents)
        if not items:
            return

        resolved_table = self._resolve_table(table, "store")
        if batch_size < 1:
            raise ValidationError(
                "batch_size must be greater than 0", field="batch_size"
            )

        with tracer.start_as_current_span("embeddings.store") as span:
            span.set_attribute("embeddings.table", resolved_table)
            span.set_attribute("embeddings.document_count", len(items))
            span.set_attribute("embeddings.batch_size", batch_size)

            records: list[dict[str, Any]] = []
            for item in items:
                document = normalize_document(item)
                embeddings = await self.create(document.content)
                records.append(
                    self._build_record(document, embeddings[0], generate_id)
                )

            batch_count = 0
            for start in range(0, len(records), batch_size):
                batch = records[start : start + batch_size]
                try:
                    response = await self._gateway.insert(resolved_table, batch)
                    if response.error is not None:
                        raise DatabaseError(
                            f"Failed to store embeddings: {response.error.message}",
                            response.error,
                        )
                except DatabaseError as e:
                    span.record_exception(e)
                    logger.error(
                        "embeddings_store_failed",
                        table=resolved_table,
                        batch_index=batch_count,
                        batch_rows=len(batch),
                        error=str(e),
                    )
                    raise
                except Exception as e:
                    span.record_exception(e)
                    logger.error(
                        "embeddings_store_error",
                        table=resolved_table,
                        batch_index=batch_count,
                        batch_rows=len(batch),
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    raise DatabaseError(f"Failed to store embeddings: {e}", e) from e
                batch_count += 1

            span.set_attribute("embeddings.insert_calls", batch_count)
            logger.info(
                "embeddings_store_complete",
                table=resolved_table,
                documents=len(records),
                batches=batch_count,
            )

    async def search(
        self,
        query: str,
        *,
        table: str | None = None,
        threshold: float | None = None,
        limit: int | None = None,
        filters: Mapping[str, Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
        select: str | None = None,
        order_by: str | None = None,
        include_distance: bool = False,
        rpc: str | None = None,
    ) -> list[SearchResult]:
        """Find stored rows most similar to a query.

        Ranking is done entirely by the remote procedure; rows are only
        projected, optionally re-sorted and backfilled here.

        Args:
            query: Text to search for.
            table: Table to search (defaults to the client's table).
            threshold: Minimum similarity (defaults to the client's threshold).
            limit: Maximum number of rows (default 10).
            filters: Column filters passed through as ``filters``.
            metadata: Metadata filter passed through as ``metadata_filter``.
            select: Comma-separated list of fields to keep on each row.
            order_by: Field to sort ascending by. ``"similarity"`` keeps the
                order returned by the procedure.
            include_distance: Ensure each row has ``similarity`` (0 if absent).
            rpc: Remote procedure name (default ``match_documents``).

        Returns:
            Result rows as dictionaries.

        Raises:
            ValidationError: If no table can be resolved.
            EmbeddingProviderError: If embedding the query fails.
            DatabaseError: If the similarity call fails.
        """
        resolved_table = self._resolve_table(table, "search")
        procedure = rpc or DEFAULT_RPC

        with tracer.start_as_current_span("embeddings.search") as span:
            span.set_attribute("embeddings.table", resolved_table)
            span.set_attribute("embeddings.rpc", procedure)

            query_embedding = (await self.create([query]))[0]

            params: dict[str, Any] = {
                "query_embedding": query_embedding,
                "match_threshold": (
                    threshold if threshold is not None else self._default_threshold
                ),
                "match_count": limit if limit is not None else DEFAULT_LIMIT,
                "table_name": resolved_table,
            }
            if filters is not None:
                params["filters"] = dict(filters)
            if metadata is not None:
                params["metadata_filter"] = dict(metadata)

            try:
                response = await self._gateway.call_similarity_search(
                    procedure, params
                )
                if response.error is not None:
                    raise DatabaseError(
                        f"Search failed: {response.error.message}",
                        response.error,
                    )
                results = [dict(row) for row in response.data or []]
            except DatabaseError as e:
                span.record_exception(e)
                logger.error(
                    "embeddings_search_failed",
                    table=resolved_table,
                    rpc=procedure,
                    error=str(e),
                )
                raise
            except Exception as e:
                span.record_exception(e)
                logger.error(
                    "embeddings_search_error",
                    table=resolved_table,
                    rpc=procedure,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise DatabaseError(f"Search operation failed: {e}", e) from e

            if select:
                results = _project(results, select)

            if order_by and order_by != "similarity":
                results = _sort_by_field(results, order_by)

            if include_distance:
                for row in results:
                    if row.get("similarity") is None:
                        row["similarity"] = 0

            span.set_attribute("embeddings.results_count", len(results))
            logger.debug(
                "embeddings_search_complete",
                table=resolved_table,
                rpc=procedure,
                results=len(results),
            )
            return cast(list[SearchResult], results)

    @traced("embeddings.similarity")
    async def similarity(self, text1: str, text2: str) -> float:
        """Return the cosine similarity between the embeddings of two texts.

        Raises:
            ValueError: If the provider returns vectors of unequal length.
        """
        embeddings = await self.create([text1, text2])
        return vector_ops.cosine_similarity(embeddings[0], embeddings[1])

    def cosine_similarity(
        self,
        vector1: Sequence[float],
        vector2: Sequence[float],
    ) -> float:
        """Return the cosine similarity of two precomputed vectors."""
        return vector_ops.cosine_similarity(vector1, vector2)

    def _resolve_table(self, table: str | None, operation: str) -> str:
        resolved = table if table is not None else self._default_table
        if not resolved:
            raise ValidationError(
                f"Table name is required for {operation} operation", field="table"
            )
        return resolved

    def _build_record(
        self,
        document: StoreDocument,
        embedding: list[float],
        generate_id: bool,
    ) -> dict[str, Any]:
        record: dict[str, Any] = {
            "content": document.content,
            "embedding": embedding,
            "metadata": document.metadata if document.metadata is not None else {},
            **document.extra,
        }
        # No id key at all lets the database apply its column default
        if document.id is not None:
            record["id"] = document.id
        elif generate_id:
            record["id"] = self._id_factory()
        return record


def _project(rows: list[dict[str, Any]], select: str) -> list[dict[str, Any]]:
    """Keep only the selected fields that are present on each row."""
    fields = [f.strip() for f in select.split(",") if f.strip()]
    return [{f: row[f] for f in fields if f in row} for row in rows]


def _sort_by_field(rows: list[dict[str, Any]], field: str) -> list[dict[str, Any]]:
    """Stable ascending sort by a field; rows without it go last.

    Values that cannot be compared with each other are compared by their
    string form.
    """
    present = [row for row in rows if row.get(field) is not None]
    missing = [row for row in rows if row.get(field) is None]
    try:
        ordered = sorted(present, key=lambda row: row[field])
    except TypeError:
        ordered = sorted(present, key=lambda row: str(row[field]))
    return ordered + missing
