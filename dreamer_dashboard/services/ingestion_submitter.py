"""Validation and submission of new knowledge.

Every call to :meth:`IngestionSubmitter.submit` ends in exactly one toast
(except a BUSY rejection, which shows none) and at most one triggered sync:

    invalid input   -> error toast, no request, ``submitting`` untouched
    2xx             -> success toast, drafts cleared, sync triggered
    non-2xx         -> error toast with the server's ``detail`` if any
    no response     -> error toast with a generic connectivity message
    anything else   -> logged with traceback, same generic error toast

``submitting`` is set before the request and cleared in a ``finally``
block, so it is released on every path, cancellation included.

Unlike a disabled button, ``submitting`` is also enforced here: a second
``submit`` while one is in flight is refused with a BUSY result and no
request.  The check and the flag flip happen before the first ``await``,
so two callers on the same loop cannot both pass it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from dreamer_dashboard.interfaces.knowledge_api import IKnowledgeAPI
from dreamer_dashboard.models.notification import ToastKind
from dreamer_dashboard.models.submission import SubmissionOutcome, SubmissionResult
from dreamer_dashboard.services.notification_queue import NotificationQueue
from dreamer_dashboard.state.app_state import (
    apply_submission_outcome,
    begin_submission,
    end_submission,
)
from dreamer_dashboard.state.store import AppStateStore
from dreamer_dashboard.utils.errors import HttpError, NetworkError, ValidationError
from dreamer_dashboard.utils.logging import get_logger

MISSING_INPUT_MESSAGE = "Namespace and text are required"
INGESTION_FAILED_MESSAGE = "Ingestion failed"
NETWORK_ERROR_MESSAGE = "Network error - is the backend running?"


def success_message(namespace: str) -> str:
    return f'✓ Ingested into "{namespace}" - now queryable by the AI agent'


def resolve_target_namespace(draft_new_namespace: str, selected_namespace: str) -> str:
    """A non-blank new namespace wins over the selected one."""
    return draft_new_namespace.strip() or selected_namespace


def validate_submission(draft_new_namespace: str, selected_namespace: str, draft_text: str) -> tuple[str, str]:
    """Return ``(namespace, trimmed_text)`` or raise :class:`ValidationError`."""
    namespace = resolve_target_namespace(draft_new_namespace, selected_namespace)
    text = draft_text.strip()
    if not namespace or not text:
        raise ValidationError(MISSING_INPUT_MESSAGE)
    return namespace, text


class IngestionSubmitter:
    """Sends operator drafts to the backend and reports the outcome.

    Parameters
    ----------
    api:
        Backend port; only :meth:`IKnowledgeAPI.ingest` is used.
    store:
        State store holding ``submitting`` and the drafts.
    notifications:
        Toast slot for the outcome message.
    on_ingested:
        Called with no arguments after a 2xx; normally
        :meth:`DataSyncScheduler.trigger`.
    """

    def __init__(
        self,
        api: IKnowledgeAPI,
        store: AppStateStore,
        notifications: NotificationQueue,
        on_ingested: Callable[[], Any] | None = None,
    ) -> None:
        self._api = api
        self._store = store
        self._notifications = notifications
        self._on_ingested = on_ingested
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def submit(
        self,
        draft_new_namespace: str,
        selected_namespace: str,
        draft_text: str,
    ) -> SubmissionResult:
        """Validate and ingest one draft.

        Parameters
        ----------
        draft_new_namespace:
            Free-typed namespace; used when non-blank after trimming.
        selected_namespace:
            Namespace picked from the list; the fallback target.
        draft_text:
            Knowledge to ingest; sent trimmed.

        Returns
        -------
        SubmissionResult
            Never raises for a failed attempt; only cancellation propagates.
        """
        try:
            namespace, text = validate_submission(draft_new_namespace, selected_namespace, draft_text)
        except ValidationError as exc:
            self._logger.info("ingest_rejected", reason=exc.message)
            self._notifications.push(exc.message, ToastKind.ERROR)
            return SubmissionResult(
                outcome=SubmissionOutcome.INVALID,
                namespace=resolve_target_namespace(draft_new_namespace, selected_namespace),
                message=exc.message,
            )

        if self._store.state.submitting:
            self._logger.warning("ingest_busy", namespace=namespace)
            return SubmissionResult(outcome=SubmissionOutcome.BUSY, namespace=namespace)

        self._store.transition(begin_submission)
        try:
            result = await self._send(namespace, text)
        finally:
            self._store.transition(end_submission)

        if result.succeeded and self._on_ingested is not None:
            self._on_ingested()
        return result

    async def _send(self, namespace: str, text: str) -> SubmissionResult:
        self._logger.info("ingest_started", namespace=namespace, chars=len(text))
        try:
            await self._api.ingest(namespace, text)
        except HttpError as exc:
            message = exc.detail or INGESTION_FAILED_MESSAGE
            self._logger.warning(
                "ingest_http_error",
                namespace=namespace,
                status_code=exc.status_code,
                detail=exc.detail,
            )
            self._notifications.push(message, ToastKind.ERROR)
            return SubmissionResult(
                outcome=SubmissionOutcome.HTTP_ERROR,
                namespace=namespace,
                message=message,
                status_code=exc.status_code,
            )
        except NetworkError as exc:
            self._logger.warning("ingest_network_error", namespace=namespace, error=str(exc))
            self._notifications.push(NETWORK_ERROR_MESSAGE, ToastKind.ERROR)
            return SubmissionResult(
                outcome=SubmissionOutcome.NETWORK_ERROR,
                namespace=namespace,
                message=NETWORK_ERROR_MESSAGE,
            )
        except Exception:
            # Anything else (bad URL, adapter bug) still ends in one toast.
            # CancelledError is a BaseException and passes through.
            self._logger.error("ingest_unexpected_error", namespace=namespace, exc_info=True)
            self._notifications.push(NETWORK_ERROR_MESSAGE, ToastKind.ERROR)
            return SubmissionResult(
                outcome=SubmissionOutcome.NETWORK_ERROR,
                namespace=namespace,
                message=NETWORK_ERROR_MESSAGE,
            )

        message = success_message(namespace)
        result = SubmissionResult(
            outcome=SubmissionOutcome.INGESTED,
            namespace=namespace,
            message=message,
        )
        self._store.transition(apply_submission_outcome, result)
        self._notifications.push(message, ToastKind.SUCCESS)
        self._logger.info("ingest_succeeded", namespace=namespace)
        return result
