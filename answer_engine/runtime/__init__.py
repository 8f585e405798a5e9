"""
Runtime diagnostics for answer resolution.

Provides:
- Injectable step traces for a single resolution
- The process-wide verbose tracing switch
"""

from answer_engine.runtime.trace import (
    ResolutionTrace,
    TraceStep,
    set_tracing_enabled,
    tracing_enabled,
)

__all__ = [
    "ResolutionTrace",
    "TraceStep",
    "set_tracing_enabled",
    "tracing_enabled",
]
