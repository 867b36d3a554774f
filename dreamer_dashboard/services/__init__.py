"""Dashboard services: sync ticks, submission, and toasts."""

from dreamer_dashboard.services.ingestion_submitter import IngestionSubmitter
from dreamer_dashboard.services.notification_queue import NotificationQueue
from dreamer_dashboard.services.sync_scheduler import DataSyncScheduler

__all__ = ["DataSyncScheduler", "IngestionSubmitter", "NotificationQueue"]
