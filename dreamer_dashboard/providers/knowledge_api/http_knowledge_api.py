"""httpx adapter implementing :class:`IKnowledgeAPI`.

Talks JSON to the ingestion backend:

    GET  /namespaces                      -> {"namespaces": [{name, count}]}
    GET  /stats                           -> {"total_documents", "vectorized"}
    GET  /recent?limit=N[&namespace=NS]   -> {"documents": [...]}
    POST /ingest {namespace, text}        -> 2xx, or non-2xx {"detail"?: str}

The ``httpx.AsyncClient`` is injected so one connection pool (and its
timeout) is shared by every request the dashboard makes.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from dreamer_dashboard.interfaces.knowledge_api import IKnowledgeAPI
from dreamer_dashboard.models.knowledge import (
    DOCUMENT_LIST,
    NAMESPACE_LIST,
    Document,
    Namespace,
    Stats,
)
from dreamer_dashboard.utils.errors import HttpError, KnowledgeAPIError, NetworkError

logger = structlog.get_logger(logger_name=__name__)


class HttpKnowledgeAPI(IKnowledgeAPI):
    """REST client for the knowledge ingestion backend.

    Parameters
    ----------
    http_client:
        Shared async client.  Its timeout applies to every call.
    base_url:
        Backend root, e.g. ``http://localhost:8000``.  A trailing slash is
        ignored.
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str) -> None:
        self._client = http_client
        self._base_url = base_url.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # IKnowledgeAPI implementation
    # ------------------------------------------------------------------

    async def list_namespaces(self) -> list[Namespace]:
        payload = await self._get_json("/namespaces")
        try:
            return NAMESPACE_LIST.validate_python(payload.get("namespaces") or [])
        except PydanticValidationError as exc:
            raise self._bad_payload("/namespaces", exc) from exc

    async def get_stats(self) -> Stats:
        payload = await self._get_json("/stats")
        try:
            return Stats.model_validate(payload)
        except PydanticValidationError as exc:
            raise self._bad_payload("/stats", exc) from exc

    async def get_recent(self, limit: int, namespace: str | None = None) -> list[Document]:
        params: dict[str, Any] = {"limit": limit}
        if namespace:
            params["namespace"] = namespace
        payload = await self._get_json("/recent", params=params)
        try:
            return DOCUMENT_LIST.validate_python(payload.get("documents") or [])
        except PydanticValidationError as exc:
            raise self._bad_payload("/recent", exc) from exc

    async def ingest(self, namespace: str, text: str) -> None:
        """POST the text; 2xx is success whatever the body looks like."""
        try:
            response = await self._client.post(
                f"{self._base_url}/ingest",
                json={"namespace": namespace, "text": text},
            )
        except httpx.RequestError as exc:
            raise NetworkError(
                message=f"POST /ingest failed: {exc!r}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.is_success:
            raise HttpError(
                status_code=response.status_code,
                detail=_extract_detail(response),
                provider_name=self.get_provider_name(),
            )

        logger.debug(
            "knowledge_api_ingest",
            namespace=namespace,
            status_code=response.status_code,
            chars=len(text),
        )

    def get_provider_name(self) -> str:
        return "knowledge_api"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET *path* and return the decoded JSON object, or raise KnowledgeAPIError."""
        try:
            response = await self._client.get(f"{self._base_url}{path}", params=params)
        except httpx.HTTPError as exc:
            raise KnowledgeAPIError(
                message=f"GET {path} failed: {exc!r}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.is_success:
            raise KnowledgeAPIError(
                message=f"GET {path} returned HTTP {response.status_code}",
                provider_name=self.get_provider_name(),
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise self._bad_payload(path, exc) from exc

        if not isinstance(payload, dict):
            raise KnowledgeAPIError(
                message=f"GET {path} returned {type(payload).__name__}, expected an object",
                provider_name=self.get_provider_name(),
            )
        return payload

    def _bad_payload(self, path: str, exc: Exception) -> KnowledgeAPIError:
        return KnowledgeAPIError(
            message=f"GET {path} returned an unreadable payload: {exc}",
            provider_name=self.get_provider_name(),
        )


def _extract_detail(response: httpx.Response) -> str | None:
    """Pull a usable ``detail`` string out of an error body, if there is one.

    FastAPI validation errors put a list under ``detail``; only plain
    non-empty strings are shown to the operator.
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail
    return None
