"""Answer resolution - turns one backend payload into a ResolvedAnswer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from answer_engine.runtime.trace import ResolutionTrace, record

from .extractors import (
    FALLBACK_STRATEGIES,
    extract_chart,
    extract_inline_citations,
)
from .schemas import Citation, ResolvedAnswer

logger = logging.getLogger(__name__)


def reindex_citations(citations: list[Citation]) -> list[Citation]:
    """Assign a fresh 1-based ``reindex_id`` in list order."""
    return [
        citation.model_copy(update={"reindex_id": str(position)})
        for position, citation in enumerate(citations, 1)
    ]


def enumerate_citations(citations: list[Citation]) -> list[Citation]:
    """Number repeated excerpts of the same filepath.

    ``part_index`` counts from 1 per distinct filepath (``None`` is a group
    of its own) and replaces any earlier value.
    """
    counters: dict[str | None, int] = {}
    enumerated = []
    for citation in citations:
        part = counters.get(citation.filepath, 0) + 1
        counters[citation.filepath] = part
        enumerated.append(citation.model_copy(update={"part_index": part}))
    return enumerated


def resolve_answer(
    payload: Mapping[str, Any],
    trace: ResolutionTrace | None = None,
) -> ResolvedAnswer | None:
    """Resolve display text, citations and chart from a backend payload.

    Inline ``[docN]`` markers win; only when they yield nothing are the
    flat and tool message citation schemes tried, in that order.

    Args:
        payload: The raw backend response.
        trace: Optional observer collecting every resolution step.

    Returns:
        The ResolvedAnswer, or None when the payload has no text answer
        (nothing to render).
    """
    answer_text = payload.get("answer") if isinstance(payload, Mapping) else None
    if not isinstance(answer_text, str):
        record(trace, "validate", "Answer is not text", type=type(answer_text).__name__)
        logger.warning("Cannot resolve answer of type %s", type(answer_text).__name__)
        return None
    record(trace, "validate", "Answer text accepted", length=len(answer_text))

    strategy = None
    citations, markdown_text = extract_inline_citations(answer_text, payload.get("citations"), trace)
    if citations:
        strategy = "inline"
    else:
        for name, extractor in FALLBACK_STRATEGIES:
            citations = extractor(payload, trace)
            if citations:
                strategy = name
                citations = reindex_citations(citations)
                break

    citations = enumerate_citations(citations)
    generated_chart = extract_chart(payload, trace)

    record(trace, "complete", "Answer resolved", strategy=strategy, citations=len(citations))
    if trace is not None:
        trace.complete(strategy)

    return ResolvedAnswer(
        citations=citations,
        markdown_text=markdown_text,
        generated_chart=generated_chart,
    )
