"""Frontend helpers for presenting a ResolvedAnswer.

The resolver hands out plain data; this module covers what the chat UI
does with it:
1. Turning the base64 chart into an image source
2. Ordering citations for display
3. Labelling repeated excerpts of the same document
"""

from __future__ import annotations

from collections import Counter

from .schemas import Citation, ResolvedAnswer


def chart_data_uri(chart: str | None, media_type: str = "image/png") -> str | None:
    """Prefix a plain base64 chart with its data URI scheme."""
    if not chart:
        return None
    return f"data:{media_type};base64,{chart}"


def ordered_citations(answer: ResolvedAnswer) -> list[Citation]:
    """Citations in display (``reindex_id``) order."""

    def _key(citation: Citation) -> tuple[int, int]:
        reindex = citation.reindex_id
        if reindex is not None and reindex.isdigit():
            return (0, int(reindex))
        return (1, 0)

    return sorted(answer.citations, key=_key)


def citation_display_title(citation: Citation, citations: list[Citation]) -> str:
    """Label a citation, adding its part number when its file is cited more than once."""
    label = citation.title or citation.filepath or "Citation"
    if citation.filepath is None or citation.part_index is None:
        return label

    per_file = Counter(c.filepath for c in citations)
    if per_file[citation.filepath] > 1:
        return f"{label} - Part {citation.part_index}"
    return label
