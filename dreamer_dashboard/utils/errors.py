"""Exception hierarchy for the dashboard engine.

All dashboard exceptions inherit from :class:`DashboardError`, which carries
an optional ``provider_name`` so log lines can say which backend adapter
(e.g. "knowledge_api") produced the failure.

    DashboardError  (base)
    +-- ValidationError          (local, pre-network input checks)
    |   +-- UnknownNamespaceError  (filter set to a name the backend never listed)
    +-- HttpError                (ingestion answered with a non-2xx status)
    +-- NetworkError             (no response obtained at all)
    +-- KnowledgeAPIError        (a read endpoint failed or returned garbage)
    +-- SyncError                (a sync tick could not be applied)
    +-- ConfigurationError       (invalid settings at startup)

Submission errors (validation, HTTP, network) are always turned into an
error toast by the submitter.  Sync errors are only ever logged.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base exception for all dashboard errors.

    The ``__str__`` form prefixes the provider name in brackets, e.g.
    ``[knowledge_api] GET /stats returned 502``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Submission errors
# ---------------------------------------------------------------------------

class ValidationError(DashboardError):
    """Raised when user input is rejected before any request is made."""

    def __init__(
        self,
        message: str = "Namespace and text are required",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnknownNamespaceError(ValidationError):
    """Raised when a filter names a namespace missing from the last sync."""

    def __init__(self, namespace: str) -> None:
        self._namespace = namespace
        super().__init__(message=f"Unknown namespace: {namespace!r}")

    @property
    def namespace(self) -> str:
        return self._namespace


class HttpError(DashboardError):
    """Raised when the ingestion endpoint answers with a non-2xx status.

    ``detail`` holds the server's ``detail`` field when the body carried a
    usable one, otherwise ``None``.
    """

    def __init__(
        self,
        status_code: int,
        detail: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        self._status_code = status_code
        self._detail = detail
        super().__init__(
            message=detail or f"Ingestion failed with HTTP {status_code}",
            provider_name=provider_name,
        )

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def detail(self) -> str | None:
        return self._detail


class NetworkError(DashboardError):
    """Raised when a request could not complete and no response exists."""

    def __init__(
        self,
        message: str = "Network request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Read-side errors
# ---------------------------------------------------------------------------

class KnowledgeAPIError(DashboardError):
    """Raised when a read endpoint fails, answers non-2xx, or sends a bad payload."""

    def __init__(
        self,
        message: str = "Knowledge API request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class SyncError(DashboardError):
    """Raised when one or more reads of a sync tick failed.

    ``failures`` maps each failed read ("namespaces", "stats", "recent")
    to the exception it raised.
    """

    def __init__(
        self,
        message: str = "Sync failed",
        failures: dict[str, BaseException] | None = None,
        provider_name: str | None = None,
    ) -> None:
        self._failures = dict(failures or {})
        super().__init__(message=message, provider_name=provider_name)

    @property
    def failures(self) -> dict[str, BaseException]:
        return dict(self._failures)


class ConfigurationError(DashboardError):
    """Raised when configuration is invalid at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
