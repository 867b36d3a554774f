# =============================================================================
# dreamer_dashboard/cli/console.py - Terminal front end for the dashboard
# =============================================================================
#
# Subcommands:
#
#   status  - one sync tick, print stats, namespaces and recent documents
#   watch   - keep syncing on the configured interval, re-print on change
#   ingest  - submit text to a namespace and print the resulting toast
#
# Usage examples:
#   python -m dreamer_dashboard.cli status
#   python -m dreamer_dashboard.cli watch --namespace Project_Gamma --duration 60
#   python -m dreamer_dashboard.cli ingest --new-namespace Project_Gamma \
#       --text "The staging cluster moved to eu-west-2."
#   python -m dreamer_dashboard.cli ingest --namespace ProjectA --file notes.txt
#
# The backend URL comes from DREAMER_API_URL (default http://localhost:8000).
# Logs go to stderr so stdout only carries the rendered views.
# =============================================================================

"""Terminal front end for the dashboard engine."""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime, timezone
from pathlib import Path

from dreamer_dashboard.cli.render import render_dashboard, render_toast
from dreamer_dashboard.config.settings import Settings
from dreamer_dashboard.dashboard import Dashboard
from dreamer_dashboard.models.notification import ToastNotification
from dreamer_dashboard.state.app_state import MAX_TEXT_LENGTH, AppState
from dreamer_dashboard.utils.errors import DashboardError, UnknownNamespaceError
from dreamer_dashboard.utils.logging import configure_logging


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)  # noqa: UP017


async def _handle_status(dashboard: Dashboard) -> int:
    try:
        applied = await dashboard.refresh()
    finally:
        await dashboard.stop()
    if not applied:
        print(f"Error: could not reach the backend at {dashboard.settings.api_url}", file=sys.stderr)
        return 1
    print(render_dashboard(dashboard.state, _now()))
    return 0


async def _handle_watch(args: argparse.Namespace, dashboard: Dashboard) -> int:
    def _print_state(previous: AppState, current: AppState) -> None:
        print(render_dashboard(current, _now()))
        print("-" * 60)

    def _print_toast(toast: ToastNotification | None) -> None:
        if toast is not None:
            print(render_toast(toast))

    if args.namespace:
        # A filter has to name a namespace the backend has listed.
        if not await dashboard.refresh():
            await dashboard.stop()
            print(f"Error: could not reach the backend at {dashboard.settings.api_url}", file=sys.stderr)
            return 1
        try:
            dashboard.set_filter(args.namespace)
        except UnknownNamespaceError as exc:
            await dashboard.stop()
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    dashboard.store.subscribe(_print_state)
    dashboard.notifications.subscribe(_print_toast)
    async with dashboard:
        if args.duration is not None:
            await asyncio.sleep(args.duration)
        else:
            await asyncio.Event().wait()
    return 0


async def _handle_ingest(args: argparse.Namespace, dashboard: Dashboard) -> int:
    text = args.text if args.text is not None else Path(args.file).read_text(encoding="utf-8")
    if len(text) > MAX_TEXT_LENGTH:
        print(
            f"Warning: text truncated from {len(text)} to {MAX_TEXT_LENGTH} characters",
            file=sys.stderr,
        )

    try:
        if not args.namespace and not args.new_namespace:
            # Seed the default selection (first listed namespace).
            await dashboard.refresh()
        if args.namespace:
            dashboard.select_namespace(args.namespace)
        dashboard.set_draft_new_namespace(args.new_namespace or "")
        dashboard.set_draft_text(text)

        result = await dashboard.submit()
        print(result.message or "Another submission is still in progress")
        if result.succeeded:
            await dashboard.scheduler.drain()
            print(render_dashboard(dashboard.state, _now()))
    finally:
        await dashboard.stop()

    return 0 if result.succeeded else 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dreamer_dashboard",
        description="Ingest knowledge into namespaces and watch the corpus refresh.",
    )
    parser.add_argument("--api-url", help="Backend base URL (overrides DREAMER_API_URL)")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("status", help="Sync once and print the dashboard")

    watch_parser = subparsers.add_parser("watch", help="Keep syncing and print every change")
    watch_parser.add_argument("--namespace", help="Only list recent documents from this namespace")
    watch_parser.add_argument("--duration", type=float, help="Stop after this many seconds")

    ingest_parser = subparsers.add_parser("ingest", help="Submit text to a namespace")
    target = ingest_parser.add_argument_group("target namespace")
    target.add_argument("--namespace", help="Existing namespace to ingest into")
    target.add_argument("--new-namespace", help="Create/use this namespace instead")
    source = ingest_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Knowledge to ingest")
    source.add_argument("--file", help="Read the knowledge from this UTF-8 file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.  Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    overrides = {"api_url": args.api_url} if args.api_url else {}
    try:
        app_settings = Settings(**overrides)
        configure_logging(app_settings.log_level, json_output=app_settings.use_json_logs)
        dashboard = Dashboard(app_settings)
    except DashboardError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        if args.command == "status":
            return asyncio.run(_handle_status(dashboard))
        if args.command == "watch":
            return asyncio.run(_handle_watch(args, dashboard))
        return asyncio.run(_handle_ingest(args, dashboard))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
