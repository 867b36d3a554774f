"""Periodic and on-demand reconciliation of local state with the backend.

A *sync tick* reads namespaces, stats and the most recent documents
concurrently and applies them to the :class:`AppStateStore` as one
snapshot swap.  If any of the three reads fails the whole tick is dropped:
the previous snapshot stays exactly as it was and the failure is logged.
Nothing is shown to the operator, and the next tick is the retry.

Scheduling
----------
``start()`` launches a background task that fires a tick immediately and
then every ``interval`` seconds until ``stop()``.  ``trigger()`` fires an
extra tick right away (filter change, successful ingestion).

Ticks are independent tasks and are *not* serialized.  When a tick is still
in flight as the next one fires, both run and whichever finishes last owns
the snapshot.  This race is accepted; it is reported as a ``sync_overlap``
warning rather than hidden.
"""

from __future__ import annotations

import asyncio
import contextlib

import structlog

from dreamer_dashboard.interfaces.knowledge_api import IKnowledgeAPI
from dreamer_dashboard.models.sync import SyncResult
from dreamer_dashboard.state.app_state import apply_sync_result
from dreamer_dashboard.state.store import AppStateStore
from dreamer_dashboard.utils.concurrency import join_all
from dreamer_dashboard.utils.errors import SyncError
from dreamer_dashboard.utils.logging import get_logger

# Sentinel so ``sync()`` can tell "use the store's filter" from "no filter".
_CURRENT_FILTER = object()


class DataSyncScheduler:
    """Owns the sync ticks for one dashboard.

    Parameters
    ----------
    api:
        Backend port used for the three reads.
    store:
        Receives each successful snapshot.
    interval:
        Seconds between scheduled ticks.
    recent_limit:
        How many recent documents each tick asks for.
    """

    def __init__(
        self,
        api: IKnowledgeAPI,
        store: AppStateStore,
        interval: float = 10.0,
        recent_limit: int = 10,
    ) -> None:
        self._api = api
        self._store = store
        self._interval = interval
        self._recent_limit = recent_limit
        self._loop_task: asyncio.Task | None = None
        self._tick_tasks: set[asyncio.Task] = set()
        self._in_flight = 0
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def in_flight(self) -> int:
        """Number of ticks currently awaiting the backend."""
        return self._in_flight

    # ------------------------------------------------------------------
    # One tick
    # ------------------------------------------------------------------

    async def fetch_snapshot(self, filter_namespace: str | None) -> SyncResult:
        """Run the three reads concurrently and return them together.

        Raises
        ------
        SyncError
            If any read failed.  No partial result is returned.
        """
        results = await join_all(
            {
                "namespaces": self._api.list_namespaces(),
                "stats": self._api.get_stats(),
                "recent": self._api.get_recent(self._recent_limit, filter_namespace),
            }
        )
        return SyncResult(
            namespaces=results["namespaces"],
            stats=results["stats"],
            recent_documents=results["recent"],
            filter_namespace=filter_namespace,
        )

    async def sync(self, filter_namespace: str | None | object = _CURRENT_FILTER) -> bool:
        """Run one tick and apply it if every read succeeded.

        Parameters
        ----------
        filter_namespace:
            Namespace to scope recent documents to.  Omitted means the
            store's current ``filter_namespace``; ``None`` means no filter.

        Returns
        -------
        bool
            ``True`` when the snapshot was replaced, ``False`` when the tick
            was discarded.
        """
        if filter_namespace is _CURRENT_FILTER:
            filter_namespace = self._store.state.filter_namespace

        self._in_flight += 1
        if self._in_flight > 1:
            self._logger.warning(
                "sync_overlap",
                in_flight=self._in_flight,
                filter_namespace=filter_namespace,
            )
        try:
            result = await self.fetch_snapshot(filter_namespace)
        except SyncError as exc:
            self._logger.warning(
                "sync_failed",
                failed=sorted(exc.failures),
                error=str(exc),
                filter_namespace=filter_namespace,
            )
            return False
        finally:
            self._in_flight -= 1

        state = self._store.transition(apply_sync_result, result)
        self._logger.debug(
            "sync_applied",
            namespaces=len(result.namespaces),
            total_documents=result.stats.total_documents,
            recent_documents=len(result.recent_documents),
            filter_namespace=filter_namespace,
            selected_namespace=state.selected_namespace,
        )
        return True

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def trigger(self) -> asyncio.Task:
        """Start a tick now without waiting for it; returns its task."""
        task = asyncio.get_running_loop().create_task(self.sync())
        self._tick_tasks.add(task)
        task.add_done_callback(self._tick_tasks.discard)
        return task

    def start(self) -> None:
        """Begin ticking: once now, then every ``interval`` seconds.

        Calling ``start`` on a running scheduler is a no-op.
        """
        if self.is_running:
            return
        self._loop_task = asyncio.get_running_loop().create_task(self._run())
        self._logger.info("sync_scheduler_started", interval=self._interval)

    async def stop(self) -> None:
        """Cancel the timer and every in-flight tick, then wait for them to end."""
        tasks = list(self._tick_tasks)
        if self._loop_task is not None:
            tasks.append(self._loop_task)
            self._loop_task = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._tick_tasks.clear()
        self._logger.info("sync_scheduler_stopped", cancelled=len(tasks))

    async def drain(self) -> None:
        """Wait until every tick started so far has finished."""
        while self._tick_tasks:
            await asyncio.gather(*list(self._tick_tasks), return_exceptions=True)

    async def _run(self) -> None:
        while True:
            self.trigger()
            await asyncio.sleep(self._interval)
