"""Application state: the immutable snapshot, its transitions, and the store."""

from dreamer_dashboard.state.app_state import (
    MAX_TEXT_LENGTH,
    AppState,
    apply_submission_outcome,
    apply_sync_result,
    begin_submission,
    end_submission,
    toggle_filter,
    with_draft_new_namespace,
    with_draft_text,
    with_filter,
    with_selected_namespace,
)
from dreamer_dashboard.state.selection import derive_selection
from dreamer_dashboard.state.store import AppStateStore, StateListener

__all__ = [
    "MAX_TEXT_LENGTH",
    "AppState",
    "AppStateStore",
    "StateListener",
    "apply_submission_outcome",
    "apply_sync_result",
    "begin_submission",
    "derive_selection",
    "end_submission",
    "toggle_filter",
    "with_draft_new_namespace",
    "with_draft_text",
    "with_filter",
    "with_selected_namespace",
]
