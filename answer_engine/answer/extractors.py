"""Citation and chart extractors, one per backend payload shape.

Every extractor returns zero or more results and never raises on
malformed backend data; a broken piece is skipped and reported to the
optional trace.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from answer_engine.runtime.trace import ResolutionTrace, record

from .normalizer import normalize_citation
from .schemas import Citation


# =============================================================================
# Payload Constants
# =============================================================================

INLINE_MARKER_RE = re.compile(r"\[doc(\d{1,3})\]")
DATA_URI_RE = re.compile(r"^data:[^,]*,")

TOOL_ROLE = "tool"

# A flat citation carries at least one of these integration fields
FLAT_CITATION_FIELDS = ("docId", "docID", "pageSource")

EXEC_RESULTS_FIELD = "all_exec_results"
CHART_FIELD = "code_exec_result"


# =============================================================================
# Inline [docN] Markers
# =============================================================================


def extract_inline_citations(
    answer_text: str,
    pool: Any,
    trace: ResolutionTrace | None = None,
) -> tuple[list[Citation], str]:
    """Resolve ``[docN]`` markers against the index-addressed citation pool.

    Each distinct valid index becomes one citation (id = the original
    1-based index) and every marker for it is replaced by `` ^k^ ``, k
    being its display order. Unresolvable markers stay in the text.

    Returns:
        The citations in first-seen order and the rewritten text.
    """
    pool = pool if isinstance(pool, list) else []
    citations: list[Citation] = []
    placeholders: dict[int, str] = {}
    seen_markers: set[str] = set()
    text = answer_text

    for match in INLINE_MARKER_RE.finditer(answer_text):
        marker = match.group(0)
        if marker in seen_markers:
            continue
        seen_markers.add(marker)
        index = int(match.group(1))

        if index in placeholders:
            # e.g. [doc01] after [doc1]: same source, same number
            text = text.replace(marker, placeholders[index])
            record(trace, "inline", "Reused citation for marker", marker=marker, index=index)
            continue

        raw = pool[index - 1] if 1 <= index <= len(pool) else None
        if not isinstance(raw, Mapping):
            record(trace, "inline", "Unresolvable marker left as-is", marker=marker)
            continue

        reindex = len(citations) + 1
        placeholders[index] = f" ^{reindex}^ "
        text = text.replace(marker, placeholders[index])
        citations.append(
            normalize_citation(raw, index - 1).model_copy(
                update={"id": str(index), "reindex_id": str(reindex)}
            )
        )
        record(trace, "inline", "Added citation", marker=marker, reindex_id=reindex)

    return citations, text


# =============================================================================
# Flat Tool Citations
# =============================================================================


def extract_flat_citations(
    payload: Mapping[str, Any],
    trace: ResolutionTrace | None = None,
) -> list[Citation]:
    """Normalize the top-level citation array of flat tool integrations.

    Only objects carrying one of FLAT_CITATION_FIELDS (even as null) are recognized;
    positions of skipped objects still count toward fallback ids.
    """
    raw_citations = payload.get("citations")
    if not isinstance(raw_citations, list):
        return []

    citations = []
    for i, raw in enumerate(raw_citations):
        if not isinstance(raw, Mapping) or not any(
            name in raw for name in FLAT_CITATION_FIELDS
        ):
            record(trace, "flat_citations", "Skipped unrecognized citation", position=i)
            continue
        citations.append(normalize_citation(raw, i))

    record(trace, "flat_citations", "Extracted flat citations", count=len(citations))
    return citations


# =============================================================================
# Structured Tool Messages
# =============================================================================


def iter_tool_contents(
    payload: Mapping[str, Any],
    trace: ResolutionTrace | None = None,
) -> Iterator[Mapping[str, Any]]:
    """Yield the parsed content object of every tool message, in scan order.

    String content is parsed as JSON; messages that fail to parse or
    do not hold an object are skipped.
    """
    choices = payload.get("choices")
    if not isinstance(choices, list):
        return

    for choice in choices:
        messages = choice.get("messages") if isinstance(choice, Mapping) else None
        if not isinstance(messages, list):
            continue

        for message in messages:
            if not isinstance(message, Mapping) or message.get("role") != TOOL_ROLE:
                continue

            content = message.get("content")
            if isinstance(content, str):
                try:
                    content = json.loads(content)
                except ValueError as e:
                    record(trace, "tool_messages", "Skipped unparsable tool content", error=str(e))
                    continue

            if isinstance(content, Mapping):
                yield content


def extract_tool_message_citations(
    payload: Mapping[str, Any],
    trace: ResolutionTrace | None = None,
) -> list[Citation]:
    """Normalize the ``citations`` array of every tool message."""
    citations = []
    for content in iter_tool_contents(payload, trace):
        raw_citations = content.get("citations")
        if not isinstance(raw_citations, list):
            record(trace, "tool_messages", "Tool content has no citations", keys=list(content))
            continue
        # Positions run across messages so fallback ids stay unique
        offset = len(citations)
        citations.extend(
            normalize_citation(raw if isinstance(raw, Mapping) else {}, offset + i)
            for i, raw in enumerate(raw_citations)
        )

    record(trace, "tool_messages", "Extracted tool message citations", count=len(citations))
    return citations


CitationExtractor = Callable[[Mapping[str, Any], "ResolutionTrace | None"], list[Citation]]

# Fallback strategies for payloads without inline markers, in priority order
FALLBACK_STRATEGIES: tuple[tuple[str, CitationExtractor], ...] = (
    ("flat_citations", extract_flat_citations),
    ("tool_messages", extract_tool_message_citations),
)


# =============================================================================
# Generated Chart
# =============================================================================


def _plain_base64(chart: Any) -> str | None:
    if not isinstance(chart, str) or not chart:
        return None
    return DATA_URI_RE.sub("", chart, count=1) or None


def extract_chart(
    payload: Mapping[str, Any],
    trace: ResolutionTrace | None = None,
) -> str | None:
    """Find the generated chart of the answer.

    Takes the chart of the last execution result of the last tool message
    that has one, else the payload's own ``generated_chart``.

    Returns:
        Plain base64 image data, or None.
    """
    chart = None
    for content in iter_tool_contents(payload, trace):
        results = content.get(EXEC_RESULTS_FIELD)
        if not isinstance(results, list) or not results:
            continue
        last = results[-1]
        found = _plain_base64(last.get(CHART_FIELD)) if isinstance(last, Mapping) else None
        if found is not None:
            chart = found

    if chart is not None:
        record(trace, "chart", "Chart found in execution results")
        return chart

    chart = _plain_base64(payload.get("generated_chart"))
    record(trace, "chart", "Using payload chart field", present=chart is not None)
    return chart
