"""structlog setup for the dashboard engine and its terminal front end.

# ─── HOW DASHBOARD LOGGING IS WIRED ───────────────────────────────────
#
# Every module asks for a logger with ``get_logger(__name__)`` and emits
# snake_case events with keyword context:
#
#     self._logger.warning("sync_failed", failed=["stats"], error="...")
#
# Two renderers share ONE processor chain (contextvars, level, stack info,
# exc_info, ISO timestamp):
#
#   * ConsoleRenderer  colourised key=value lines for an operator terminal
#   * JSONRenderer     one JSON object per line for log shippers
#
# Which one is used is decided by the caller from Settings (``app_env`` of
# "production" means JSON), never from the process environment here.
#
# Output goes to a stream, stderr by default, because the CLI prints its
# rendered dashboard on stdout and the two must not interleave.  httpx and
# other stdlib-``logging`` users are routed through the same renderer.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

_STDLIB_NOISY = ("httpx", "httpcore")


def _shared_processors() -> list[structlog.types.Processor]:
    # contextvars must run before anything that reads the event dict.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _renderer(json_output: bool, colors: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=colors)


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Install the structlog and stdlib logging configuration.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
        json_output: Render JSON lines instead of console lines.  Callers
                     derive this from ``Settings.use_json_logs``.
        stream: Destination for every log line.  Defaults to ``sys.stderr``.
    """
    target = stream if stream is not None else sys.stderr
    level = logging.getLevelName(log_level.upper())
    processors = _shared_processors()
    # Colours only make sense on a real terminal.
    renderer = _renderer(json_output, colors=not json_output and target.isatty())

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=target),
        # Not cached: reconfiguring (tests, CLI entry) must reach every logger.
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    # httpx logs every request at INFO; keep that out of the operator's view.
    for name in _STDLIB_NOISY:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger bound to *name*, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)
