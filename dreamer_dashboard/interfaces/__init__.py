"""Interfaces for external services.

The dashboard reaches the ingestion backend exclusively through
:class:`IKnowledgeAPI`.  The concrete adapter lives in
``dreamer_dashboard/providers/knowledge_api/`` and is chosen in
``dreamer_dashboard/dashboard.py``.

    Interface        →  Concrete implementations
    ─────────────────────────────────────────────
    IKnowledgeAPI    →  HttpKnowledgeAPI
"""

from dreamer_dashboard.interfaces.knowledge_api import IKnowledgeAPI

__all__ = ["IKnowledgeAPI"]
