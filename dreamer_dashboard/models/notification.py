"""Toast notification model."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ToastKind(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Visual flavour of a toast."""

    SUCCESS = "success"
    ERROR = "error"


class ToastNotification(BaseModel):
    """A transient, auto-expiring status message.

    Only one is ever live; see
    :class:`dreamer_dashboard.services.notification_queue.NotificationQueue`.
    """

    model_config = ConfigDict(frozen=True)

    message: str
    kind: ToastKind = ToastKind.SUCCESS
    expires_at: datetime
