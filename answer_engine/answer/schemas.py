"""Pydantic models for answer resolution payloads and results."""

from __future__ import annotations

from typing import Any, TypedDict

from pydantic import BaseModel, Field


# =============================================================================
# Raw payload (produced by the backend integrations, read-only here)
# =============================================================================


class Message(TypedDict, total=False):
    """One chat message of a backend choice."""

    role: str
    content: str | dict[str, Any]


class Choice(TypedDict, total=False):
    """One backend choice carrying its messages."""

    messages: list[Message]


class RawAnswerPayload(TypedDict, total=False):
    """Backend response as fetched by the network layer.

    Every field may be missing or of the wrong type; the resolver
    checks each one before use.
    """

    answer: str
    citations: list[dict[str, Any]]
    generated_chart: str | None
    choices: list[Choice]


# =============================================================================
# Canonical results
# =============================================================================


class Citation(BaseModel):
    """A normalized, integration-agnostic cited source."""

    id: str
    content: str = ""
    title: str | None = None
    filepath: str | None = None
    url: str | None = None
    metadata: str | None = Field(None, description="JSON-encoded side data, e.g. the page number")
    chunk_id: str | None = None
    reindex_id: str | None = Field(None, description="1-based display order")
    part_index: int | None = Field(None, description="1-based excerpt counter per filepath")

    model_config = {"frozen": True}


class ResolvedAnswer(BaseModel):
    """Display-ready answer handed to the rendering layer."""

    citations: list[Citation]
    markdown_text: str
    generated_chart: str | None = Field(
        None, description="Plain base64 image payload, never a data URI"
    )

    model_config = {"frozen": True}


# =============================================================================
# API models
# =============================================================================


class TracingToggleRequest(BaseModel):
    """Request to switch verbose resolution tracing on or off."""

    enabled: bool


class ResolverStatus(BaseModel):
    """Status of the answer resolver."""

    tracing_enabled: bool
    strategies: list[str]
