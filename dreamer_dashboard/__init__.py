"""Dreamer dashboard: client-side sync and submission engine for the
knowledge ingestion backend."""

__version__ = "0.1.0"
