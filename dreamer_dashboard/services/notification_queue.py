"""Single-slot toast notifications with timed auto-dismiss.

At most one toast is live.  ``push`` replaces whatever is showing and
restarts the dismiss timer from zero; the previous toast's timer is
cancelled first, so an old timer can never erase a newer message early.
The timer is an ``asyncio.TimerHandle`` from ``loop.call_later`` on the
running loop, which is why ``push`` must be called from inside it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import structlog

from dreamer_dashboard.models.notification import ToastKind, ToastNotification
from dreamer_dashboard.utils.logging import get_logger

ToastListener = Callable[[ToastNotification | None], None]


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)  # noqa: UP017


class NotificationQueue:
    """Holds the current toast and its cancellable dismissal.

    Parameters
    ----------
    dismiss_after:
        Seconds a toast stays visible after its ``push``.
    clock:
        Returns "now" for ``expires_at``.  Defaults to UTC wall time.
    """

    def __init__(
        self,
        dismiss_after: float = 4.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._dismiss_after = dismiss_after
        self._clock = clock or _utcnow
        self._current: ToastNotification | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._listeners: list[ToastListener] = []
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def current(self) -> ToastNotification | None:
        return self._current

    @property
    def dismiss_after(self) -> float:
        return self._dismiss_after

    def push(self, message: str, kind: ToastKind = ToastKind.SUCCESS) -> ToastNotification:
        """Show *message*, replacing any current toast and restarting the timer."""
        loop = asyncio.get_running_loop()
        self._cancel_timer()

        toast = ToastNotification(
            message=message,
            kind=kind,
            expires_at=self._clock() + timedelta(seconds=self._dismiss_after),
        )
        self._current = toast
        self._timer = loop.call_later(self._dismiss_after, self._expire, toast)

        self._logger.info("toast_pushed", kind=kind.value, message=message)
        self._notify(toast)
        return toast

    def clear(self) -> None:
        """Dismiss the current toast now.  No-op when nothing is showing."""
        self._cancel_timer()
        if self._current is None:
            return
        self._current = None
        self._notify(None)

    def subscribe(self, listener: ToastListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ToastListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _expire(self, toast: ToastNotification) -> None:
        # Only the timer belonging to the live toast may dismiss it.
        if self._current is not toast:
            return
        self._timer = None
        self._current = None
        self._logger.debug("toast_expired", message=toast.message)
        self._notify(None)

    def _notify(self, toast: ToastNotification | None) -> None:
        for listener in list(self._listeners):
            try:
                listener(toast)
            except Exception as exc:
                self._logger.warning(
                    "toast_listener_error",
                    error=str(exc),
                    listener=getattr(listener, "__name__", repr(listener)),
                )
