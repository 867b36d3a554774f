"""Outcome of one ingestion submission attempt."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SubmissionOutcome(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """How a submission attempt ended.

    INGESTED       -- backend answered 2xx
    INVALID        -- rejected locally, no request made
    HTTP_ERROR     -- backend answered non-2xx
    NETWORK_ERROR  -- no response obtained
    BUSY           -- another submission was still in flight
    """

    INGESTED = "INGESTED"
    INVALID = "INVALID"
    HTTP_ERROR = "HTTP_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    BUSY = "BUSY"


class SubmissionResult(BaseModel):
    """What :meth:`IngestionSubmitter.submit` reports back to its caller.

    ``message`` is the text shown in the toast (empty for BUSY, which shows
    none).  ``namespace`` is the resolved target, empty when it could not be
    resolved.
    """

    model_config = ConfigDict(frozen=True)

    outcome: SubmissionOutcome
    namespace: str = ""
    message: str = ""
    status_code: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is SubmissionOutcome.INGESTED
