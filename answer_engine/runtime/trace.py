"""
Step tracing for answer resolution.

Resolution is a pure function; tracing is an optional observer layered on top:
- A caller may pass a ResolutionTrace to capture every step explicitly
- The process-wide switch mirrors the steps to the DEBUG log

Neither affects control flow or the resolved answer.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from answer_engine.core.config import get_settings

logger = logging.getLogger(__name__)

_tracing_enabled: bool | None = None


def tracing_enabled() -> bool:
    """Whether verbose step tracing is mirrored to the log.

    Defaults to ``Settings.trace_answers`` until toggled explicitly.
    """
    if _tracing_enabled is None:
        return get_settings().trace_answers
    return _tracing_enabled


def set_tracing_enabled(enabled: bool | None) -> None:
    """Toggle verbose tracing. ``None`` restores the configured default."""
    global _tracing_enabled
    _tracing_enabled = enabled


class TraceStep(BaseModel):
    """A single step taken while resolving an answer."""

    stage: str
    """Pipeline stage (e.g., 'validate', 'inline', 'tool_messages', 'chart')."""

    description: str
    """Human-readable description of what happened."""

    detail: dict[str, Any] = Field(default_factory=dict)
    """Structured side data (indices, counts, keys)."""


class ResolutionTrace(BaseModel):
    """Complete trace of one answer resolution.

    Create one per call and pass it to ``resolve_answer`` to capture
    the steps without enabling log output.
    """

    started_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    """ISO timestamp of when resolution started."""

    completed_at: str | None = None
    """ISO timestamp of when resolution completed."""

    strategy: str | None = None
    """Citation strategy that produced the citations, if any."""

    steps: list[TraceStep] = Field(default_factory=list)
    """Steps in the order they were taken."""

    def add_step(self, stage: str, description: str, **detail: Any) -> TraceStep:
        """Append a step to the trace.

        Returns:
            The created TraceStep
        """
        step = TraceStep(stage=stage, description=description, detail=detail)
        self.steps.append(step)
        return step

    def complete(self, strategy: str | None = None) -> None:
        """Mark the trace as complete.

        Args:
            strategy: The citation strategy that won, if any
        """
        self.strategy = strategy
        self.completed_at = datetime.now(timezone.utc).isoformat()

    def stages(self) -> list[str]:
        """Stage names in order, for quick assertions and summaries."""
        return [step.stage for step in self.steps]


def record(trace: ResolutionTrace | None, stage: str, description: str, **detail: Any) -> None:
    """Report a step to the optional trace and, when enabled, the log."""
    if trace is not None:
        trace.add_step(stage, description, **detail)
    if tracing_enabled():
        logger.debug("[%s] %s %s", stage, description, detail or "")
