"""Dashboard domain models: re-exports all public model classes.

    - knowledge.py    : backend payloads (Namespace, Stats, Document union)
    - notification.py : the single-slot toast
    - submission.py   : submission outcomes
    - sync.py         : a fully-successful sync tick

The application state snapshot and its transitions live in
``dreamer_dashboard.state``.
"""

from __future__ import annotations

from dreamer_dashboard.models.knowledge import (
    DOCUMENT_LIST,
    NAMESPACE_LIST,
    Document,
    Namespace,
    Stats,
    TextDocument,
    TripletDocument,
)
from dreamer_dashboard.models.notification import ToastKind, ToastNotification
from dreamer_dashboard.models.submission import SubmissionOutcome, SubmissionResult
from dreamer_dashboard.models.sync import SyncResult

__all__ = [
    "DOCUMENT_LIST",
    "NAMESPACE_LIST",
    "Document",
    "Namespace",
    "Stats",
    "SubmissionOutcome",
    "SubmissionResult",
    "SyncResult",
    "TextDocument",
    "ToastKind",
    "ToastNotification",
    "TripletDocument",
]
