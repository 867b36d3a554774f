"""Unit tests for IngestionSubmitter."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from dreamer_dashboard.models.notification import ToastKind, ToastNotification
from dreamer_dashboard.models.submission import SubmissionOutcome
from dreamer_dashboard.services.ingestion_submitter import (
    INGESTION_FAILED_MESSAGE,
    MISSING_INPUT_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    IngestionSubmitter,
    resolve_target_namespace,
    validate_submission,
)
from dreamer_dashboard.services.notification_queue import NotificationQueue
from dreamer_dashboard.state.app_state import AppState
from dreamer_dashboard.state.store import AppStateStore
from dreamer_dashboard.utils.errors import HttpError, NetworkError, ValidationError


@pytest.fixture
def on_ingested() -> MagicMock:
    return MagicMock()


@pytest.fixture
def submitter(
    fake_api: AsyncMock,
    store: AppStateStore,
    notifications: NotificationQueue,
    on_ingested: MagicMock,
) -> IngestionSubmitter:
    return IngestionSubmitter(fake_api, store, notifications, on_ingested=on_ingested)


def _record_toasts(queue: NotificationQueue) -> list[ToastNotification]:
    pushed: list[ToastNotification] = []
    queue.subscribe(lambda toast: pushed.append(toast) if toast is not None else None)
    return pushed


# ======================================================================
# Pure helpers
# ======================================================================


class TestResolveAndValidate:
    def test_new_namespace_takes_precedence(self) -> None:
        assert resolve_target_namespace("ProjectB", "ProjectA") == "ProjectB"

    def test_blank_new_namespace_falls_back(self) -> None:
        assert resolve_target_namespace("   ", "ProjectA") == "ProjectA"

    def test_new_namespace_is_trimmed(self) -> None:
        assert resolve_target_namespace("  ProjectB \t", "") == "ProjectB"

    def test_validate_returns_trimmed_text(self) -> None:
        assert validate_submission("", "ProjectA", "  note \n") == ("ProjectA", "note")

    @pytest.mark.parametrize(
        ("new_ns", "selected", "text"),
        [("", "", "hello"), ("", "ProjectA", ""), ("", "ProjectA", "  \n "), ("  ", "", "hello")],
    )
    def test_validate_rejects(self, new_ns: str, selected: str, text: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(new_ns, selected, text)
        assert exc_info.value.message == MISSING_INPUT_MESSAGE


# ======================================================================
# submit()
# ======================================================================


class TestValidationFailures:
    @pytest.mark.asyncio
    async def test_missing_namespace_makes_no_request(
        self,
        submitter: IngestionSubmitter,
        fake_api: AsyncMock,
        notifications: NotificationQueue,
        on_ingested: MagicMock,
    ) -> None:
        result = await submitter.submit("", "", "hello")

        assert result.outcome is SubmissionOutcome.INVALID
        fake_api.ingest.assert_not_awaited()
        on_ingested.assert_not_called()
        assert notifications.current is not None
        assert notifications.current.kind is ToastKind.ERROR
        assert notifications.current.message == MISSING_INPUT_MESSAGE

    @pytest.mark.asyncio
    async def test_empty_text_makes_no_request(
        self, submitter: IngestionSubmitter, fake_api: AsyncMock
    ) -> None:
        result = await submitter.submit("", "ProjectA", "")

        assert result.outcome is SubmissionOutcome.INVALID
        assert result.namespace == "ProjectA"
        fake_api.ingest.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_submitting_never_set(self, submitter: IngestionSubmitter, store: AppStateStore) -> None:
        seen: list[AppState] = []
        store.subscribe(lambda prev, cur: seen.append(cur))

        await submitter.submit("", "", "hello")

        assert seen == []
        assert store.state.submitting is False


class TestSuccessfulSubmission:
    @pytest.mark.asyncio
    async def test_new_namespace_wins(self, submitter: IngestionSubmitter, fake_api: AsyncMock) -> None:
        result = await submitter.submit("ProjectB", "ProjectA", "note")

        assert result.namespace == "ProjectB"
        fake_api.ingest.assert_awaited_once_with("ProjectB", "note")

    @pytest.mark.asyncio
    async def test_sends_trimmed_values(self, submitter: IngestionSubmitter, fake_api: AsyncMock) -> None:
        await submitter.submit("  ProjectB  ", "", "\n  the note  \n")
        fake_api.ingest.assert_awaited_once_with("ProjectB", "the note")

    @pytest.mark.asyncio
    async def test_success_clears_drafts_toasts_and_syncs_once(
        self,
        fake_api: AsyncMock,
        notifications: NotificationQueue,
        on_ingested: MagicMock,
    ) -> None:
        store = AppStateStore(
            AppState(selected_namespace="ProjectA", draft_new_namespace="ProjectB", draft_text="note")
        )
        submitter = IngestionSubmitter(fake_api, store, notifications, on_ingested=on_ingested)
        pushed = _record_toasts(notifications)

        result = await submitter.submit("ProjectB", "ProjectA", "note")

        assert result.outcome is SubmissionOutcome.INGESTED
        assert result.succeeded is True
        assert store.state.draft_text == ""
        assert store.state.draft_new_namespace == ""
        assert store.state.selected_namespace == "ProjectA"
        assert len(pushed) == 1
        assert pushed[0].kind is ToastKind.SUCCESS
        assert '"ProjectB"' in pushed[0].message
        on_ingested.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_submitting_true_only_during_request(
        self, submitter: IngestionSubmitter, fake_api: AsyncMock, store: AppStateStore
    ) -> None:
        during: list[bool] = []

        async def ingest(namespace: str, text: str) -> None:
            during.append(store.state.submitting)

        fake_api.ingest.side_effect = ingest

        await submitter.submit("", "ProjectA", "note")

        assert during == [True]
        assert store.state.submitting is False

    @pytest.mark.asyncio
    async def test_works_without_sync_callback(
        self, fake_api: AsyncMock, store: AppStateStore, notifications: NotificationQueue
    ) -> None:
        submitter = IngestionSubmitter(fake_api, store, notifications)
        result = await submitter.submit("", "ProjectA", "note")
        assert result.succeeded is True


class TestFailedSubmission:
    @pytest.mark.asyncio
    async def test_http_error_uses_server_detail(
        self,
        submitter: IngestionSubmitter,
        fake_api: AsyncMock,
        notifications: NotificationQueue,
        on_ingested: MagicMock,
        store: AppStateStore,
    ) -> None:
        fake_api.ingest.side_effect = HttpError(status_code=400, detail="too long")
        pushed = _record_toasts(notifications)

        result = await submitter.submit("", "ProjectA", "note")

        assert result.outcome is SubmissionOutcome.HTTP_ERROR
        assert result.status_code == 400
        assert len(pushed) == 1
        assert pushed[0].kind is ToastKind.ERROR
        assert pushed[0].message == "too long"
        on_ingested.assert_not_called()
        assert store.state.submitting is False

    @pytest.mark.asyncio
    async def test_http_error_without_detail(
        self, submitter: IngestionSubmitter, fake_api: AsyncMock, notifications: NotificationQueue
    ) -> None:
        fake_api.ingest.side_effect = HttpError(status_code=500)

        result = await submitter.submit("", "ProjectA", "note")

        assert result.message == INGESTION_FAILED_MESSAGE
        assert notifications.current is not None
        assert notifications.current.message == INGESTION_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_failure_keeps_drafts(
        self, fake_api: AsyncMock, notifications: NotificationQueue
    ) -> None:
        store = AppStateStore(AppState(draft_new_namespace="ProjectB", draft_text="note"))
        submitter = IngestionSubmitter(fake_api, store, notifications)
        fake_api.ingest.side_effect = HttpError(status_code=400, detail="too long")

        await submitter.submit("ProjectB", "", "note")

        assert store.state.draft_text == "note"
        assert store.state.draft_new_namespace == "ProjectB"

    @pytest.mark.asyncio
    async def test_network_error_uses_generic_message(
        self,
        submitter: IngestionSubmitter,
        fake_api: AsyncMock,
        notifications: NotificationQueue,
        on_ingested: MagicMock,
        store: AppStateStore,
    ) -> None:
        fake_api.ingest.side_effect = NetworkError("connection refused")
        pushed = _record_toasts(notifications)

        result = await submitter.submit("", "ProjectA", "note")

        assert result.outcome is SubmissionOutcome.NETWORK_ERROR
        assert [t.message for t in pushed] == [NETWORK_ERROR_MESSAGE]
        on_ingested.assert_not_called()
        assert store.state.submitting is False

    @pytest.mark.asyncio
    async def test_unexpected_error_ends_in_one_error_toast(
        self,
        submitter: IngestionSubmitter,
        fake_api: AsyncMock,
        notifications: NotificationQueue,
        on_ingested: MagicMock,
        store: AppStateStore,
    ) -> None:
        fake_api.ingest.side_effect = httpx.InvalidURL("Invalid port: ':1'")
        pushed = _record_toasts(notifications)

        result = await submitter.submit("", "ProjectA", "note")

        assert result.outcome is SubmissionOutcome.NETWORK_ERROR
        assert len(pushed) == 1
        assert pushed[0].kind is ToastKind.ERROR
        assert pushed[0].message == NETWORK_ERROR_MESSAGE
        on_ingested.assert_not_called()
        assert store.state.submitting is False

    @pytest.mark.asyncio
    async def test_cancellation_releases_flag(
        self, submitter: IngestionSubmitter, fake_api: AsyncMock, store: AppStateStore
    ) -> None:
        started = asyncio.Event()

        async def hang(namespace: str, text: str) -> None:
            started.set()
            await asyncio.sleep(10)

        fake_api.ingest.side_effect = hang
        task = asyncio.get_running_loop().create_task(submitter.submit("", "ProjectA", "note"))
        await started.wait()
        assert store.state.submitting is True

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert store.state.submitting is False


class TestReentryGuard:
    @pytest.mark.asyncio
    async def test_second_submit_while_in_flight_is_refused(
        self,
        submitter: IngestionSubmitter,
        fake_api: AsyncMock,
        notifications: NotificationQueue,
    ) -> None:
        release = asyncio.Event()

        async def slow_ingest(namespace: str, text: str) -> None:
            await release.wait()

        fake_api.ingest.side_effect = slow_ingest
        pushed: list[Any] = _record_toasts(notifications)

        first = asyncio.get_running_loop().create_task(submitter.submit("", "ProjectA", "one"))
        await asyncio.sleep(0)
        second = await submitter.submit("", "ProjectA", "two")

        assert second.outcome is SubmissionOutcome.BUSY
        assert pushed == []

        release.set()
        assert (await first).succeeded is True
        fake_api.ingest.assert_awaited_once_with("ProjectA", "one")
        assert len(pushed) == 1
