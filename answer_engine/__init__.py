"""Answer Resolution Engine - display-ready answers from heterogeneous chat backends."""

from answer_engine.answer import ResolvedAnswer, Citation, resolve_answer

__all__ = ["ResolvedAnswer", "Citation", "resolve_answer"]

__version__ = "0.1.0"
