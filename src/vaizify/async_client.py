"""Asynchronous Vaiz SDK client.

:class:`AsyncVaizifyClient` mirrors :class:`~vaizify.client.VaizifyClient`
but every I/O method is an ``async def`` coroutine.

Usage::

    import asyncio
    from vaizify import AsyncVaizifyClient
    from vaizify.document import paragraph

    async def main():
        async with AsyncVaizifyClient(api_key="vz_xxx", space_id="<space_id>") as client:
            await client.append_json_document("<document_id>", [paragraph("Done.")])

    asyncio.run(main())
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from vaizify.api.documents import AsyncDocumentAPI
from vaizify.api.transport import AsyncVaizTransport
from vaizify.client import _write_result
from vaizify.config import VaizifyConfig
from vaizify.models import DocumentWriteResult, Kind
from vaizify.observability import NoopMetricsHook, get_logger, log_fields

log = get_logger("vaizify.async_client")


class AsyncVaizifyClient:
    """Asynchronous Vaiz SDK client.

    Parameters
    ----------
    api_key:
        Vaiz API key.  **Required** unless *config* is given.
    space_id:
        Space every request acts on.  **Required** unless *config* is given.
    config:
        A prebuilt :class:`VaizifyConfig`.
    **kwargs:
        Forwarded to :class:`VaizifyConfig`.
    """

    def __init__(
        self,
        api_key: str = "",
        space_id: str = "",
        config: VaizifyConfig | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = config or VaizifyConfig(api_key=api_key, space_id=space_id, **kwargs)
        self._metrics = self._config.metrics or NoopMetricsHook()
        self._transport = AsyncVaizTransport(self._config)
        self._documents = AsyncDocumentAPI(self._transport)

    @classmethod
    def from_env(cls, **overrides: Any) -> AsyncVaizifyClient:
        return cls(config=VaizifyConfig.from_env(**overrides))

    @property
    def documents(self) -> AsyncDocumentAPI:
        return self._documents

    async def get_document(self, document_id: str) -> dict[str, Any]:
        response = await self._documents.get_document(document_id)
        return response.get("document") or {}

    async def get_documents(self, kind: Kind | str, kind_id: str) -> list[dict[str, Any]]:
        response = await self._documents.get_documents(kind, kind_id)
        return response.get("documents") or []

    async def get_json_document(self, document_id: str) -> list[Any]:
        return await self._documents.get_json_document(document_id)

    async def get_document_history(
        self,
        document_id: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        return await self._documents.get_history(document_id, limit=limit, offset=offset)

    async def create_document(
        self,
        kind: Kind | str,
        kind_id: str,
        title: str,
        index: int = 0,
        parent_document_id: str | None = None,
    ) -> dict[str, Any]:
        response = await self._documents.create_document(
            kind, kind_id, title, index=index, parent_document_id=parent_document_id,
        )
        document = response.get("document") or {}
        log.info(
            "create_document complete",
            extra=log_fields(op="create_document", document_id=document.get("_id"), title=title),
        )
        return document

    async def edit_document(self, document_id: str, **changes: Any) -> dict[str, Any]:
        response = await self._documents.edit_document(document_id, **changes)
        return response.get("document") or {}

    async def replace_document(self, document_id: str, html: str) -> dict[str, Any]:
        return await self._documents.replace_document(document_id, html)

    async def append_document(self, document_id: str, html: str) -> dict[str, Any]:
        return await self._documents.append_document(document_id, html)

    async def replace_json_document(
        self, document_id: str, content: Sequence[Any],
    ) -> DocumentWriteResult:
        response = await self._documents.replace_json_document(document_id, content)
        return _write_result("replace_json_document", document_id, content, response, self._metrics)

    async def append_json_document(
        self, document_id: str, content: Sequence[Any],
    ) -> DocumentWriteResult:
        response = await self._documents.append_json_document(document_id, content)
        return _write_result("append_json_document", document_id, content, response, self._metrics)

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> AsyncVaizifyClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
