"""Holder for the current :class:`AppState` snapshot.

The store is the only place a snapshot gets replaced.  Callers hand it a
pure transition function; the store computes the next snapshot from the
current one, swaps it in, and tells listeners.  Because everything runs on
one event loop and ``transition`` never awaits, a swap cannot interleave
with another.

Listeners are plain callables ``(previous, current) -> None``.  A listener
that raises is logged and skipped so a broken view cannot stop syncing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from dreamer_dashboard.state.app_state import AppState
from dreamer_dashboard.utils.logging import get_logger

StateListener = Callable[[AppState, AppState], None]


class AppStateStore:
    """Owns the current snapshot and notifies listeners when it changes."""

    def __init__(self, initial: AppState | None = None) -> None:
        self._state = initial or AppState()
        self._listeners: list[StateListener] = []
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def state(self) -> AppState:
        return self._state

    def transition(self, fn: Callable[..., AppState], *args: Any, **kwargs: Any) -> AppState:
        """Replace the snapshot with ``fn(current, *args, **kwargs)``.

        Exceptions raised by *fn* propagate and leave the snapshot untouched.
        Listeners only hear about snapshots that actually differ.
        """
        previous = self._state
        current = fn(previous, *args, **kwargs)
        self._state = current
        if current != previous:
            self._notify(previous, current)
        return current

    def subscribe(self, listener: StateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, previous: AppState, current: AppState) -> None:
        for listener in list(self._listeners):
            try:
                listener(previous, current)
            except Exception as exc:
                self._logger.warning(
                    "state_listener_error",
                    error=str(exc),
                    listener=getattr(listener, "__name__", repr(listener)),
                )
