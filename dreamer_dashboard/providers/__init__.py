"""Concrete adapters for the interfaces in ``dreamer_dashboard.interfaces``."""
