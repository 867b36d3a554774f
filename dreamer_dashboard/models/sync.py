"""Result of one successful sync tick."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dreamer_dashboard.models.knowledge import Document, Namespace, Stats


class SyncResult(BaseModel):
    """The three reads of a sync tick, only ever built when all succeeded.

    ``filter_namespace`` records the filter the recent-documents read was
    scoped to, which is useful in logs when overlapping ticks race.
    """

    model_config = ConfigDict(frozen=True)

    namespaces: list[Namespace] = Field(default_factory=list)
    stats: Stats = Field(default_factory=Stats)
    recent_documents: list[Document] = Field(default_factory=list)
    filter_namespace: str | None = None
