"""Normalization of accepted document shapes into StoreDocument.

Two shapes are accepted:

- native: a mapping with ``content`` and optional ``metadata``/``id``;
  any other keys are passthrough columns.
- foreign (LangChain-style): a mapping with ``pageContent`` or
  ``page_content``, or an object with a ``page_content`` attribute.
  Only ``metadata`` and ``id`` are carried over, and only when present.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from supabase_ai.exceptions import ValidationError
from supabase_ai.modules.embeddings.schemas import RESERVED_FIELDS, StoreDocument

_FOREIGN_CONTENT_KEYS = ("pageContent", "page_content")

DocumentInput = StoreDocument | Mapping[str, Any] | Any


def is_foreign_document(item: Any) -> bool:
    """Return True if the item uses the page-content shape."""
    if isinstance(item, Mapping):
        return any(key in item for key in _FOREIGN_CONTENT_KEYS)
    return hasattr(item, "page_content")


def normalize_document(item: DocumentInput) -> StoreDocument:
    """Convert one input item into a StoreDocument.

    Raises:
        ValidationError: If the item has no recognizable content field.
    """
    if isinstance(item, StoreDocument):
        return item

    if is_foreign_document(item):
        return _from_foreign(item)

    if isinstance(item, Mapping):
        if "content" not in item:
            raise ValidationError("Document content is required", field="content")
        return StoreDocument(
            content=item["content"],
            metadata=item.get("metadata"),
            id=item.get("id"),
            extra={k: v for k, v in item.items() if k not in RESERVED_FIELDS},
        )

    raise ValidationError(
        f"Unsupported document type: {type(item).__name__}", field="content"
    )


def normalize_documents(items: Iterable[DocumentInput]) -> list[StoreDocument]:
    """Normalize each item independently; mixed shapes are allowed."""
    return [normalize_document(item) for item in items]


def _from_foreign(item: Any) -> StoreDocument:
    if isinstance(item, Mapping):
        key = next(k for k in _FOREIGN_CONTENT_KEYS if k in item)
        content = item[key]
        metadata = item.get("metadata")
        doc_id = item.get("id")
    else:
        content = item.page_content
        metadata = getattr(item, "metadata", None)
        doc_id = getattr(item, "id", None)

    # Absent metadata stays absent; record assembly applies the default.
    return StoreDocument(content=content, metadata=metadata, id=doc_id)
