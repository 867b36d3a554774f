"""Abstract base class for the ingestion backend's REST API.

The scheduler and submitter talk to the backend only through this contract,
so tests can hand them an ``AsyncMock`` and an alternative transport can be
dropped in without touching either service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from dreamer_dashboard.models.knowledge import Document, Namespace, Stats


class IKnowledgeAPI(ABC):
    """Contract for the knowledge ingestion backend.

    Read methods raise
    :class:`~dreamer_dashboard.utils.errors.KnowledgeAPIError` on any
    failure.  :meth:`ingest` distinguishes
    :class:`~dreamer_dashboard.utils.errors.HttpError` (the backend answered
    non-2xx) from :class:`~dreamer_dashboard.utils.errors.NetworkError` (no
    answer at all).
    """

    @abstractmethod
    async def list_namespaces(self) -> list[Namespace]:
        """Return every namespace with its document count, in backend order."""

    @abstractmethod
    async def get_stats(self) -> Stats:
        """Return the aggregate document counters."""

    @abstractmethod
    async def get_recent(self, limit: int, namespace: str | None = None) -> list[Document]:
        """Return up to *limit* documents, newest first.

        Parameters
        ----------
        limit:
            Maximum number of documents.
        namespace:
            Restrict to one namespace; ``None`` means all namespaces.
        """

    @abstractmethod
    async def ingest(self, namespace: str, text: str) -> None:
        """Submit *text* for vectorization under *namespace*.

        Returns normally on any 2xx response.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier used in logs and error prefixes."""
