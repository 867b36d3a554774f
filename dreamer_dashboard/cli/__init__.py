"""Terminal front end for the dashboard engine.

- ``python -m dreamer_dashboard.cli status``: sync once and print.
- ``python -m dreamer_dashboard.cli watch``: keep syncing, print changes.
- ``python -m dreamer_dashboard.cli ingest``: submit text to a namespace.
"""
