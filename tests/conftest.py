"""Pytest fixtures for test suite."""

import json
from typing import Any

import pytest

from answer_engine.runtime.trace import set_tracing_enabled


# =============================================================================
# Core Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_tracing():
    """Restore the configured tracing default after every test."""
    yield
    set_tracing_enabled(None)


@pytest.fixture
def inline_pool() -> list[dict[str, Any]]:
    """Index-addressed citation pool as sent by data-source integrations."""
    return [
        {
            "id": "doc1v",
            "content": "Grade 3 water requires UniFlex fittings.",
            "title": "Installation guide",
            "filepath": "file1.pdf",
            "url": "https://example.com/file1.pdf",
            "metadata": None,
            "chunk_id": "0",
        },
        {
            "id": "doc2v",
            "content": "Maintenance intervals are quarterly.",
            "title": "Installation guide",
            "filepath": "file1.pdf",
            "url": "https://example.com/file1.pdf",
            "metadata": None,
            "chunk_id": "1",
        },
        {
            "id": "doc3v",
            "content": "Operating pressure is 6 bar.",
            "title": "Datasheet",
            "filepath": "file2.pdf",
            "url": None,
            "metadata": None,
            "chunk_id": "0",
        },
    ]


def _tool_message(content: Any) -> dict[str, Any]:
    """Build a tool message, JSON-encoding structured content."""
    if not isinstance(content, str):
        content = json.dumps(content)
    return {"role": "tool", "content": content}


def _with_messages(*messages: dict[str, Any], answer: Any = "Answer text.", **fields: Any) -> dict[str, Any]:
    """Build a payload with one choice holding the given messages."""
    payload = {
        "answer": answer,
        "citations": [],
        "generated_chart": None,
        "choices": [{"messages": [{"role": "assistant", "content": "Answer"}, *messages]}],
    }
    payload.update(fields)
    return payload


@pytest.fixture
def tool_payload() -> dict[str, Any]:
    """Payload citing three documents through a tool message."""
    return _with_messages(
        _tool_message({
            "citations": [
                {"docId": "TI46", "page": 1, "source": "document1.pdf"},
                {"docId": "TI47", "page": 2, "source": "document2.pdf"},
                {"docId": "TI48", "page": 3, "source": "document1.pdf"},
            ]
        }),
        answer="Multiple sources provide information about water treatment.",
    )


@pytest.fixture
def tool_message():
    """Factory for tool messages."""
    return _tool_message


@pytest.fixture
def make_payload():
    """Factory for payloads with one choice of messages."""
    return _with_messages
