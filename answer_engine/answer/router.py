"""Routes for answer resolution."""

from typing import Any

from fastapi import APIRouter, HTTPException

from answer_engine.runtime.trace import set_tracing_enabled, tracing_enabled

from .extractors import FALLBACK_STRATEGIES
from .schemas import ResolvedAnswer, ResolverStatus, TracingToggleRequest
from .service import resolve_answer

router = APIRouter(prefix="/answers", tags=["Answers"])


@router.post("/resolve", response_model=ResolvedAnswer)
async def resolve(payload: dict[str, Any]) -> ResolvedAnswer:
    """Resolve a raw backend payload into display text, citations and chart."""
    resolved = resolve_answer(payload)
    if resolved is None:
        raise HTTPException(
            status_code=422,
            detail="Payload has no text answer; nothing to render",
        )
    return resolved


@router.get("/status", response_model=ResolverStatus)
async def get_status() -> ResolverStatus:
    """Get the status of the answer resolver."""
    return ResolverStatus(
        tracing_enabled=tracing_enabled(),
        strategies=["inline", *(name for name, _ in FALLBACK_STRATEGIES)],
    )


@router.put("/tracing", response_model=ResolverStatus)
async def toggle_tracing(request: TracingToggleRequest) -> ResolverStatus:
    """Switch verbose resolution tracing on or off."""
    set_tracing_enabled(request.enabled)
    return await get_status()
