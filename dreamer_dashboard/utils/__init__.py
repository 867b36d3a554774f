"""Utility modules for the dashboard engine.

- **concurrency** -- ``join_all``, the all-or-nothing fan-out/join used by
  each sync tick.
- **errors** -- exception hierarchy rooted at DashboardError.
- **logging** -- structlog setup with console output in development and
  JSON in production.
- **time_format** -- relative "Nm ago" timestamps for recent documents.
"""

from dreamer_dashboard.utils.concurrency import join_all
from dreamer_dashboard.utils.errors import (
    ConfigurationError,
    DashboardError,
    HttpError,
    KnowledgeAPIError,
    NetworkError,
    SyncError,
    UnknownNamespaceError,
    ValidationError,
)
from dreamer_dashboard.utils.logging import configure_logging, get_logger
from dreamer_dashboard.utils.time_format import format_relative_time, parse_timestamp

__all__ = [
    "ConfigurationError",
    "DashboardError",
    "HttpError",
    "KnowledgeAPIError",
    "NetworkError",
    "SyncError",
    "UnknownNamespaceError",
    "ValidationError",
    "configure_logging",
    "format_relative_time",
    "get_logger",
    "join_all",
    "parse_timestamp",
]
