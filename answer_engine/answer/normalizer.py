"""Citation normalization - maps every backend citation shape onto Citation."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .schemas import Citation

# Field aliases in preference order
ID_FIELDS = ("docId", "docID", "id")
FILEPATH_FIELDS = ("source", "pageSource", "filepath")
PAGE_FIELDS = ("page", "pageNumber")
CHUNK_ID_FIELDS = ("chunk_id", "chunkId")


def _first(raw: Mapping[str, Any], fields: tuple[str, ...]) -> Any:
    for name in fields:
        value = raw.get(name)
        if value is not None:
            return value
    return None


def _as_text(value: Any) -> str | None:
    """Coerce a raw field to text; structured values are JSON-encoded."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _metadata(raw: Mapping[str, Any], page: Any) -> str | None:
    explicit = raw.get("metadata")
    if isinstance(explicit, str):
        return explicit
    if page is not None:
        return json.dumps({"page": page}, separators=(",", ":"), default=str)
    return _as_text(explicit)


def _page_seed(page: Any) -> int | None:
    if isinstance(page, int) and not isinstance(page, bool):
        return page
    return None


def normalize_citation(raw: Mapping[str, Any], i: int) -> Citation:
    """Convert one integration-specific citation record into a Citation.

    Never fails: every field falls back to a default.

    Args:
        raw: The backend citation object.
        i: 0-based position of the record in its source array.

    Returns:
        The canonical Citation, without ``reindex_id``. ``part_index`` is
        only seeded from the page number and is overwritten during
        enumeration.
    """
    page = _first(raw, PAGE_FIELDS)
    doc_id = _as_text(_first(raw, ID_FIELDS))

    return Citation(
        id=doc_id if doc_id is not None else str(i + 1),
        content=_as_text(raw.get("content")) or "",
        title=_as_text(raw.get("title")),
        filepath=_as_text(_first(raw, FILEPATH_FIELDS)),
        url=_as_text(raw.get("url")),
        metadata=_metadata(raw, page),
        chunk_id=_as_text(_first(raw, CHUNK_ID_FIELDS)),
        reindex_id=None,
        part_index=_page_seed(page),
    )
