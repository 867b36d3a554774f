"""Default namespace selection.

The ingest form preselects the first namespace the backend lists, but only
once: after anything (this rule or the operator) has filled the selection,
later syncs leave it alone.  A selected namespace that disappears from the
backend stays selected; nothing re-validates it.
"""

from __future__ import annotations

from collections.abc import Sequence

from dreamer_dashboard.models.knowledge import Namespace


def derive_selection(previous_selection: str | None, fetched_namespaces: Sequence[Namespace]) -> str:
    """Return the namespace the ingest form should have selected.

    Parameters
    ----------
    previous_selection:
        Current selection; ``""`` or ``None`` means nothing is selected.
    fetched_namespaces:
        Namespaces from the latest sync, in backend order.

    Returns
    -------
    str
        ``fetched_namespaces[0].name`` when nothing was selected and the
        list is non-empty, otherwise *previous_selection* unchanged.
    """
    if not previous_selection and fetched_namespaces:
        return fetched_namespaces[0].name
    return previous_selection or ""
