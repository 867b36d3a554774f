"""Composition root for the dashboard engine.

Wires settings, the httpx-backed knowledge API, the state store, the toast
slot, the sync scheduler and the submitter together, and exposes the
operator-facing actions a view binds to:

    dashboard = Dashboard(settings)
    async with dashboard:                 # start(): first tick + polling
        dashboard.set_draft_text("...")
        await dashboard.submit()
    # stop(): polling, in-flight ticks and the toast timer are cancelled

The view reads ``dashboard.state`` and ``dashboard.notifications.current``
or subscribes to changes on ``dashboard.store`` / ``dashboard.notifications``.
"""

from __future__ import annotations

import asyncio

import httpx
import structlog

from dreamer_dashboard.config.settings import Settings
from dreamer_dashboard.interfaces.knowledge_api import IKnowledgeAPI
from dreamer_dashboard.models.submission import SubmissionResult
from dreamer_dashboard.providers.knowledge_api.http_knowledge_api import HttpKnowledgeAPI
from dreamer_dashboard.services.ingestion_submitter import IngestionSubmitter
from dreamer_dashboard.services.notification_queue import NotificationQueue
from dreamer_dashboard.services.sync_scheduler import DataSyncScheduler
from dreamer_dashboard.state.app_state import (
    AppState,
    toggle_filter,
    with_draft_new_namespace,
    with_draft_text,
    with_filter,
    with_selected_namespace,
)
from dreamer_dashboard.state.store import AppStateStore
from dreamer_dashboard.utils.logging import get_logger


class Dashboard:
    """One operator session against one backend.

    Parameters
    ----------
    settings:
        Runtime configuration; validated on construction.
    api:
        Backend port.  When omitted an :class:`HttpKnowledgeAPI` is built on
        *http_client*, or on a new client the dashboard owns and closes.
    http_client:
        Shared client for the default API adapter.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        api: IKnowledgeAPI | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._settings.validate_runtime()
        self._logger: structlog.BoundLogger = get_logger(__name__)

        self._owned_client: httpx.AsyncClient | None = None
        if api is None:
            if http_client is None:
                http_client = httpx.AsyncClient(timeout=self._settings.request_timeout_seconds)
                self._owned_client = http_client
            api = HttpKnowledgeAPI(http_client, self._settings.api_url)
        self._api = api

        self.store = AppStateStore()
        self.notifications = NotificationQueue(
            dismiss_after=self._settings.toast_duration_seconds,
        )
        self.scheduler = DataSyncScheduler(
            api=self._api,
            store=self.store,
            interval=self._settings.sync_interval_seconds,
            recent_limit=self._settings.recent_limit,
        )
        self.submitter = IngestionSubmitter(
            api=self._api,
            store=self.store,
            notifications=self.notifications,
            on_ingested=self.scheduler.trigger,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> AppState:
        return self.store.state

    @property
    def settings(self) -> Settings:
        return self._settings

    def start(self) -> None:
        self._logger.info("dashboard_started", api=self._api.get_provider_name())
        self.scheduler.start()

    async def stop(self) -> None:
        await self.scheduler.stop()
        self.notifications.clear()
        if self._owned_client is not None:
            await self._owned_client.aclose()
            self._owned_client = None
        self._logger.info("dashboard_stopped")

    async def __aenter__(self) -> Dashboard:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def refresh(self) -> bool:
        """Run one sync tick inline and report whether it was applied."""
        return await self.scheduler.sync()

    # ------------------------------------------------------------------
    # Operator input
    # ------------------------------------------------------------------

    def set_draft_text(self, text: str) -> AppState:
        return self.store.transition(with_draft_text, text)

    def set_draft_new_namespace(self, name: str) -> AppState:
        return self.store.transition(with_draft_new_namespace, name)

    def select_namespace(self, name: str) -> AppState:
        return self.store.transition(with_selected_namespace, name)

    def set_filter(self, name: str | None) -> asyncio.Task | None:
        """Scope recent documents to *name* (``None`` clears the filter).

        Raises :class:`UnknownNamespaceError` for names the last sync did not
        list.  Returns the triggered sync task, or ``None`` when the filter
        did not change.
        """
        return self._change_filter(with_filter, name)

    def toggle_filter(self, name: str | None) -> asyncio.Task | None:
        """Pick *name* as the filter, or clear it if it is already active."""
        return self._change_filter(toggle_filter, name)

    @property
    def can_submit(self) -> bool:
        return self.state.can_submit

    @property
    def character_count(self) -> str:
        return self.state.character_count

    async def submit(self) -> SubmissionResult:
        """Submit the current drafts."""
        state = self.state
        return await self.submitter.submit(
            state.draft_new_namespace,
            state.selected_namespace,
            state.draft_text,
        )

    def _change_filter(self, transition, name: str | None) -> asyncio.Task | None:  # noqa: ANN001
        previous = self.state.filter_namespace
        current = self.store.transition(transition, name).filter_namespace
        if current == previous:
            return None
        self._logger.info("filter_changed", filter_namespace=current)
        return self.scheduler.trigger()
