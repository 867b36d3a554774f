"""Plain-text rendering of dashboard state for the terminal views."""

from __future__ import annotations

from datetime import datetime

from dreamer_dashboard.models.knowledge import Document, TripletDocument
from dreamer_dashboard.models.notification import ToastKind, ToastNotification
from dreamer_dashboard.state.app_state import AppState
from dreamer_dashboard.utils.time_format import format_relative_time

# Embedding width of the backend's vector index; informational only.
VECTOR_DIMENSIONS = 3072

EMPTY_RECENT_MESSAGE = "No documents yet. Ingest some knowledge!"


def render_stats(state: AppState) -> str:
    return (
        f"Total Documents: {state.stats.total_documents}"
        f" | Vectorized: {state.stats.vectorized}"
        f" | Namespaces: {len(state.namespaces)}"
        f" | Vector Dims: {VECTOR_DIMENSIONS}"
    )


def render_namespaces(state: AppState) -> list[str]:
    """One line per namespace; ``*`` marks the ingest target, ``>`` the filter."""
    lines = []
    for ns in state.namespaces:
        selected = "*" if ns.name == state.selected_namespace else " "
        filtered = ">" if ns.name == state.filter_namespace else " "
        lines.append(f"{selected}{filtered} {ns.name} ({ns.count} docs)")
    return lines


def render_document(document: Document, now: datetime) -> list[str]:
    try:
        when = format_relative_time(document.timestamp, now)
    except ValueError:
        # Unreadable timestamps are shown as sent rather than failing the view.
        when = document.timestamp
    header = f"[{document.namespace}] {document.doc_type} · {when}"
    if isinstance(document, TripletDocument):
        body = f"{document.head} → {document.relation} → {document.tail}"
    else:
        body = document.content
    return [header, f"    {body}"]


def render_recent(state: AppState, now: datetime) -> list[str]:
    if not state.recent_documents:
        return [EMPTY_RECENT_MESSAGE]
    lines: list[str] = []
    for document in state.recent_documents:
        lines.extend(render_document(document, now))
    return lines


def render_toast(toast: ToastNotification | None) -> str:
    if toast is None:
        return ""
    prefix = "OK" if toast.kind is ToastKind.SUCCESS else "ERROR"
    return f"{prefix}: {toast.message}"


def render_dashboard(state: AppState, now: datetime, toast: ToastNotification | None = None) -> str:
    scope = state.filter_namespace or "All"
    lines = [
        render_stats(state),
        "",
        "Namespaces:",
        *(render_namespaces(state) or ["  (none)"]),
        "",
        f"Recent Documents ({scope}):",
        *render_recent(state, now),
    ]
    if toast is not None:
        lines.extend(["", render_toast(toast)])
    return "\n".join(lines)
