"""Document API wrappers for the Vaiz API.

Provides :class:`DocumentAPI` (sync) and :class:`AsyncDocumentAPI`
(async), thin wrappers around the document endpoints.  Both delegate all
HTTP concerns (auth, retries, error mapping) to the transport and return
the response body unchanged, except :meth:`DocumentAPI.get_json_document`
which unwraps the stored node list.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from vaizify.models import Kind
from vaizify.observability import get_logger, log_fields

from .transport import AsyncVaizTransport, VaizTransport

log = get_logger("vaizify.api.documents")


def _kind(kind: Kind | str) -> str:
    return kind.value if isinstance(kind, Kind) else kind


def _drop_none(body: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in body.items() if value is not None}


def extract_json_content(response: dict[str, Any], document_id: str = "") -> list[Any]:
    """Pull the node list out of a ``getJSONDocument`` response.

    The service returns the document as a JSON *string* in
    ``payload.json`` whose ``default.content`` holds the nodes.  A string
    that does not parse yields ``[]`` (and a warning).  Responses without
    ``payload.json`` fall back to ``payload.content``, then ``content``.
    """
    payload = response.get("payload") or {}
    raw = payload.get("json")
    if raw:
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError) as exc:
            log.warning(
                "Failed to parse document JSON",
                extra=log_fields(op="get_json_document", document_id=document_id, error=str(exc)),
            )
            return []
        default = parsed.get("default") if isinstance(parsed, dict) else None
        return (default or {}).get("content") or []
    return payload.get("content") or response.get("content") or []


def _history_body(document_id: str, limit: int | None, offset: int | None) -> dict[str, Any]:
    return _drop_none({
        "kind": Kind.DOCUMENT.value,
        "kindId": document_id,
        "limit": limit,
        "offset": offset,
    })


class DocumentAPI:
    """Synchronous wrapper for the Vaiz document endpoints.

    Parameters
    ----------
    transport:
        A configured :class:`VaizTransport` instance.
    """

    def __init__(self, transport: VaizTransport) -> None:
        self._transport = transport

    def get_document(self, document_id: str) -> dict[str, Any]:
        """Fetch one document's metadata (``{"document": {...}}``)."""
        return self._transport.request("getDocument", {"documentId": document_id})

    def get_documents(self, kind: Kind | str, kind_id: str) -> dict[str, Any]:
        """List the documents attached to a space, project or member.

        Parameters
        ----------
        kind:
            Container kind, e.g. :attr:`Kind.PROJECT`.
        kind_id:
            Id of the container.
        """
        return self._transport.request("getDocuments", {"kind": _kind(kind), "kindId": kind_id})

    def create_document(
        self,
        kind: Kind | str,
        kind_id: str,
        title: str,
        index: int = 0,
        parent_document_id: str | None = None,
    ) -> dict[str, Any]:
        """Create an empty document inside a container."""
        body = _drop_none({
            "kind": _kind(kind),
            "kindId": kind_id,
            "title": title,
            "index": index,
            "parentDocumentId": parent_document_id,
        })
        return self._transport.request("createDocument", body)

    def edit_document(
        self,
        document_id: str,
        name: str | None = None,
        description: str | None = None,
        project_id: str | None = None,
        parent_id: str | None = None,
    ) -> dict[str, Any]:
        """Edit document metadata; ``None`` leaves a property unchanged."""
        body = _drop_none({
            "documentId": document_id,
            "name": name,
            "description": description,
            "projectId": project_id,
            "parentId": parent_id,
        })
        return self._transport.request("editDocument", body)

    def replace_document(self, document_id: str, description: str) -> dict[str, Any]:
        """Replace the body with an HTML string."""
        return self._transport.request(
            "replaceDocument", {"documentId": document_id, "description": description},
        )

    def replace_json_document(self, document_id: str, content: Sequence[Any]) -> dict[str, Any]:
        """Replace the body with a list of document nodes."""
        return self._transport.request(
            "replaceJSONDocument", {"documentId": document_id, "content": list(content)},
        )

    def append_document(self, document_id: str, content: str) -> dict[str, Any]:
        """Append an HTML string to the end of the body."""
        return self._transport.request(
            "appendDocument", {"documentId": document_id, "content": content},
        )

    def append_json_document(self, document_id: str, content: Sequence[Any]) -> dict[str, Any]:
        """Append document nodes to the end of the body."""
        return self._transport.request(
            "appendJSONDocument", {"documentId": document_id, "content": list(content)},
        )

    def get_json_document(self, document_id: str) -> list[Any]:
        """Return the body of a document, task description included, as nodes."""
        response = self._transport.request("getJSONDocument", {"documentId": document_id})
        return extract_json_content(response, document_id)

    def get_history(
        self,
        document_id: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """Page through a document's change history."""
        return self._transport.request("getHistory", _history_body(document_id, limit, offset))


class AsyncDocumentAPI:
    """Asynchronous wrapper for the Vaiz document endpoints.

    Mirrors :class:`DocumentAPI` but all methods are coroutines.
    """

    def __init__(self, transport: AsyncVaizTransport) -> None:
        self._transport = transport

    async def get_document(self, document_id: str) -> dict[str, Any]:
        return await self._transport.request("getDocument", {"documentId": document_id})

    async def get_documents(self, kind: Kind | str, kind_id: str) -> dict[str, Any]:
        return await self._transport.request(
            "getDocuments", {"kind": _kind(kind), "kindId": kind_id},
        )

    async def create_document(
        self,
        kind: Kind | str,
        kind_id: str,
        title: str,
        index: int = 0,
        parent_document_id: str | None = None,
    ) -> dict[str, Any]:
        body = _drop_none({
            "kind": _kind(kind),
            "kindId": kind_id,
            "title": title,
            "index": index,
            "parentDocumentId": parent_document_id,
        })
        return await self._transport.request("createDocument", body)

    async def edit_document(
        self,
        document_id: str,
        name: str | None = None,
        description: str | None = None,
        project_id: str | None = None,
        parent_id: str | None = None,
    ) -> dict[str, Any]:
        body = _drop_none({
            "documentId": document_id,
            "name": name,
            "description": description,
            "projectId": project_id,
            "parentId": parent_id,
        })
        return await self._transport.request("editDocument", body)

    async def replace_document(self, document_id: str, description: str) -> dict[str, Any]:
        return await self._transport.request(
            "replaceDocument", {"documentId": document_id, "description": description},
        )

    async def replace_json_document(
        self, document_id: str, content: Sequence[Any],
    ) -> dict[str, Any]:
        return await self._transport.request(
            "replaceJSONDocument", {"documentId": document_id, "content": list(content)},
        )

    async def append_document(self, document_id: str, content: str) -> dict[str, Any]:
        return await self._transport.request(
            "appendDocument", {"documentId": document_id, "content": content},
        )

    async def append_json_document(
        self, document_id: str, content: Sequence[Any],
    ) -> dict[str, Any]:
        return await self._transport.request(
            "appendJSONDocument", {"documentId": document_id, "content": list(content)},
        )

    async def get_json_document(self, document_id: str) -> list[Any]:
        response = await self._transport.request("getJSONDocument", {"documentId": document_id})
        return extract_json_content(response, document_id)

    async def get_history(
        self,
        document_id: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "getHistory", _history_body(document_id, limit, offset),
        )
