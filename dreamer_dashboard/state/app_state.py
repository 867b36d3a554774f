"""Application state snapshot and the pure transitions between snapshots.

``AppState`` is frozen: every change produces a new instance via
``model_copy(update={...})`` and the store swaps the whole snapshot in one
step.  A sync therefore lands all three of namespaces / stats / recent
documents together or not at all, and readers never observe a half-applied
update.

Backend-owned fields (``namespaces``, ``stats``, ``recent_documents``) are
only written by :func:`apply_sync_result`.  Draft fields belong to the
operator and are cleared by :func:`apply_submission_outcome` after a
successful ingestion.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dreamer_dashboard.models.knowledge import Document, Namespace, Stats
from dreamer_dashboard.models.submission import SubmissionResult
from dreamer_dashboard.models.sync import SyncResult
from dreamer_dashboard.state.selection import derive_selection
from dreamer_dashboard.utils.errors import UnknownNamespaceError

MAX_TEXT_LENGTH = 5000


class AppState(BaseModel):
    """Everything the dashboard shows, as one immutable value."""

    model_config = ConfigDict(frozen=True)

    # --- Last successful sync ---
    namespaces: list[Namespace] = Field(default_factory=list)
    stats: Stats = Field(default_factory=Stats)
    recent_documents: list[Document] = Field(default_factory=list)

    # --- Operator drafts / selections ---
    selected_namespace: str = ""
    filter_namespace: str | None = None
    draft_new_namespace: str = ""
    draft_text: str = Field(default="", max_length=MAX_TEXT_LENGTH)
    submitting: bool = False

    @property
    def namespace_names(self) -> list[str]:
        return [ns.name for ns in self.namespaces]

    @property
    def can_submit(self) -> bool:
        """Whether the submit affordance should be enabled."""
        if self.submitting:
            return False
        if not self.selected_namespace and not self.draft_new_namespace.strip():
            return False
        return bool(self.draft_text.strip())

    @property
    def character_count(self) -> str:
        return f"{len(self.draft_text)}/{MAX_TEXT_LENGTH}"


# ---------------------------------------------------------------------------
# Sync
# ---------------------------------------------------------------------------

def apply_sync_result(state: AppState, result: SyncResult) -> AppState:
    """Replace the backend-owned fields wholesale and derive the selection."""
    return state.model_copy(
        update={
            "namespaces": list(result.namespaces),
            "stats": result.stats,
            "recent_documents": list(result.recent_documents),
            "selected_namespace": derive_selection(state.selected_namespace, result.namespaces),
        }
    )


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

def begin_submission(state: AppState) -> AppState:
    return state.model_copy(update={"submitting": True})


def end_submission(state: AppState) -> AppState:
    return state.model_copy(update={"submitting": False})


def apply_submission_outcome(state: AppState, result: SubmissionResult) -> AppState:
    """Clear both drafts after a successful ingestion; otherwise keep them.

    Failed attempts leave the text in place so the operator can retry.
    """
    if not result.succeeded:
        return state
    return state.model_copy(update={"draft_text": "", "draft_new_namespace": ""})


# ---------------------------------------------------------------------------
# Operator input
# ---------------------------------------------------------------------------

def with_draft_text(state: AppState, text: str) -> AppState:
    """Set the draft text, truncated to :data:`MAX_TEXT_LENGTH` characters."""
    return state.model_copy(update={"draft_text": text[:MAX_TEXT_LENGTH]})


def with_draft_new_namespace(state: AppState, name: str) -> AppState:
    return state.model_copy(update={"draft_new_namespace": name})


def with_selected_namespace(state: AppState, name: str) -> AppState:
    # Any name is accepted, including "" to go back to "Select a namespace...".
    return state.model_copy(update={"selected_namespace": name})


def with_filter(state: AppState, name: str | None) -> AppState:
    """Scope the recent-documents list to *name*, or clear it with ``None``.

    Raises
    ------
    UnknownNamespaceError
        If *name* is not among the namespaces of the last sync.
    """
    if name is not None and name not in state.namespace_names:
        raise UnknownNamespaceError(name)
    return state.model_copy(update={"filter_namespace": name})


def toggle_filter(state: AppState, name: str | None) -> AppState:
    """Pick *name* as the filter, or clear it when it is already active."""
    if name is None or state.filter_namespace == name:
        return with_filter(state, None)
    return with_filter(state, name)
