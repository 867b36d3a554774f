"""Fan-out / join primitive for grouped backend reads.

A sync tick dispatches several independent reads at once and may only use
their results as a group.  ``join_all`` runs labelled awaitables
concurrently, waits until *every* one has settled, and then either returns
all results or raises a single :class:`SyncError` naming each failure.

``asyncio.gather`` is called with ``return_exceptions=True`` so that one
failing read does not leave its siblings running unobserved; the group is
only judged once all of them have finished.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable

import structlog

from dreamer_dashboard.utils.errors import SyncError
from dreamer_dashboard.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


async def join_all(operations: dict[str, Awaitable[Any]]) -> dict[str, Any]:
    """Run labelled awaitables concurrently with all-or-nothing results.

    Parameters
    ----------
    operations:
        Mapping of label to awaitable.  Labels are echoed back in the
        result mapping and in :attr:`SyncError.failures`.

    Returns
    -------
    dict[str, Any]
        Results keyed by label, only when every awaitable succeeded.

    Raises
    ------
    SyncError
        If at least one awaitable raised.  Successful results of the
        other awaitables are discarded.
    """
    labels = list(operations)
    raw_results = await asyncio.gather(
        *(operations[label] for label in labels),
        return_exceptions=True,
    )

    results: dict[str, Any] = {}
    failures: dict[str, BaseException] = {}
    for label, raw in zip(labels, raw_results):
        if isinstance(raw, BaseException):
            failures[label] = raw
        else:
            results[label] = raw

    if failures:
        _logger.debug(
            "join_discarded",
            failed=sorted(failures),
            succeeded=sorted(results),
        )
        summary = "; ".join(f"{label}: {exc}" for label, exc in failures.items())
        raise SyncError(message=f"Grouped read failed ({summary})", failures=failures)

    return results
