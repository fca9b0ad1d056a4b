"""Schemas for the embeddings module."""

from dataclasses import dataclass, field
from typing import Any, TypedDict

# Keys handled explicitly on documents; everything else is passthrough.
RESERVED_FIELDS = frozenset({"content", "metadata", "id"})


@dataclass
class StoreDocument:
    """A document ready to be embedded and stored.

    ``metadata`` stays None until a record is assembled, where it is
    defaulted to an empty mapping. ``extra`` holds arbitrary passthrough
    columns copied verbatim into the stored row.
    """

    content: str
    metadata: dict[str, Any] | None = None
    id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


class SearchResult(TypedDict, total=False):
    """A row returned by a similarity search.

    Rows may carry any further columns returned by the remote procedure.
    """

    id: str
    content: str
    metadata: dict[str, Any]
    similarity: float
    created_at: str
