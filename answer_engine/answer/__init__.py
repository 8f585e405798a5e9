"""Answer domain - resolves backend payloads into display-ready answers."""

from .router import router
from .schemas import (
    Choice,
    Citation,
    Message,
    RawAnswerPayload,
    ResolvedAnswer,
    ResolverStatus,
    TracingToggleRequest,
)
from .normalizer import normalize_citation
from .extractors import (
    FALLBACK_STRATEGIES,
    extract_chart,
    extract_flat_citations,
    extract_inline_citations,
    extract_tool_message_citations,
    iter_tool_contents,
)
from .service import (
    enumerate_citations,
    reindex_citations,
    resolve_answer,
)

# Frontend helpers
from .frontend_helpers import (
    chart_data_uri,
    citation_display_title,
    ordered_citations,
)

__all__ = [
    # Router
    "router",
    # Schemas
    "Choice",
    "Citation",
    "Message",
    "RawAnswerPayload",
    "ResolvedAnswer",
    "ResolverStatus",
    "TracingToggleRequest",
    # Normalization
    "normalize_citation",
    # Extraction
    "FALLBACK_STRATEGIES",
    "extract_chart",
    "extract_flat_citations",
    "extract_inline_citations",
    "extract_tool_message_citations",
    "iter_tool_contents",
    # Resolution
    "enumerate_citations",
    "reindex_citations",
    "resolve_answer",
    # Frontend Helpers
    "chart_data_uri",
    "citation_display_title",
    "ordered_citations",
]
