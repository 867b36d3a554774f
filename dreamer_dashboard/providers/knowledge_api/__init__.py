"""Knowledge API adapters."""

from dreamer_dashboard.providers.knowledge_api.http_knowledge_api import HttpKnowledgeAPI

__all__ = ["HttpKnowledgeAPI"]
