"""Shared pytest fixtures for the dashboard test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest

from dreamer_dashboard.interfaces.knowledge_api import IKnowledgeAPI
from dreamer_dashboard.models.knowledge import (
    Namespace,
    Stats,
    TextDocument,
    TripletDocument,
)
from dreamer_dashboard.services.notification_queue import NotificationQueue
from dreamer_dashboard.state.app_state import AppState
from dreamer_dashboard.state.store import AppStateStore

# ---------------------------------------------------------------------------
# Sample backend data
# ---------------------------------------------------------------------------


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)  # noqa: UP017


@pytest.fixture
def sample_namespaces() -> list[Namespace]:
    return [
        Namespace(name="ProjectA", count=12),
        Namespace(name="ProjectB", count=3),
    ]


@pytest.fixture
def sample_stats() -> Stats:
    return Stats(total_documents=15, vectorized=14)


@pytest.fixture
def sample_documents() -> list[Any]:
    return [
        TextDocument(
            namespace="ProjectA",
            timestamp="2026-10-19T11:58:00Z",
            content="Staging cluster moved to eu-west-2.",
        ),
        TripletDocument(
            namespace="ProjectB",
            timestamp="2026-10-19T09:00:00Z",
            head="Alice",
            relation="owns",
            tail="billing service",
        ),
    ]


@pytest.fixture
def sample_payloads() -> dict[str, Any]:
    """Raw JSON bodies as the backend sends them."""
    return {
        "namespaces": {
            "namespaces": [
                {"name": "ProjectA", "count": 12},
                {"name": "ProjectB", "count": 3},
            ]
        },
        "stats": {"total_documents": 15, "vectorized": 14},
        "recent": {
            "documents": [
                {
                    "namespace": "ProjectA",
                    "doc_type": "text",
                    "timestamp": "2026-10-19T11:58:00Z",
                    "content": "Staging cluster moved to eu-west-2.",
                },
                {
                    "namespace": "ProjectB",
                    "doc_type": "triplet",
                    "timestamp": "2026-10-19T09:00:00Z",
                    "head": "Alice",
                    "relation": "owns",
                    "tail": "billing service",
                    "score": 0.91,
                },
            ]
        },
    }


# ---------------------------------------------------------------------------
# Ports and collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_api(
    sample_namespaces: list[Namespace],
    sample_stats: Stats,
    sample_documents: list[Any],
) -> AsyncMock:
    """An IKnowledgeAPI whose reads succeed with the sample data."""
    api = AsyncMock(spec=IKnowledgeAPI)
    api.list_namespaces.return_value = sample_namespaces
    api.get_stats.return_value = sample_stats
    api.get_recent.return_value = sample_documents
    api.ingest.return_value = None
    api.get_provider_name.return_value = "fake_api"
    return api


@pytest.fixture
def store() -> AppStateStore:
    return AppStateStore(AppState())


@pytest.fixture
def notifications() -> NotificationQueue:
    # Long enough that no toast expires during a test unless it waits for it.
    return NotificationQueue(dismiss_after=30.0)
