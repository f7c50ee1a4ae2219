"""Synchronous Vaiz SDK client.

:class:`VaizifyClient` owns a transport and the document API wrapper and
exposes the document operations directly.  Content for the JSON write
operations is built with :mod:`vaizify.document`.

Usage::

    from vaizify import VaizifyClient
    from vaizify.document import heading, paragraph, task_list

    with VaizifyClient(api_key="vz_xxx", space_id="<space_id>") as client:
        result = client.replace_json_document(
            "<document_id>",
            [heading(1, "Launch plan"), paragraph("Owners below."),
             task_list("draft brief", "book venue")],
        )
        print(result.nodes_sent)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from vaizify.api.documents import DocumentAPI
from vaizify.api.transport import VaizTransport
from vaizify.config import VaizifyConfig
from vaizify.models import DocumentWriteResult, Kind
from vaizify.observability import NoopMetricsHook, get_logger, log_fields

log = get_logger("vaizify.client")


def _write_result(
    op: str,
    document_id: str,
    content: Sequence[Any],
    response: dict[str, Any],
    metrics: Any,
) -> DocumentWriteResult:
    metrics.increment("vaizify.nodes_written_total", value=len(content), tags={"op": op})
    log.info(
        f"{op} complete",
        extra=log_fields(op=op, document_id=document_id, nodes=len(content)),
    )
    return DocumentWriteResult(
        document_id=document_id,
        nodes_sent=len(content),
        document=response.get("document") or {},
    )


class VaizifyClient:
    """Synchronous Vaiz SDK client.

    Parameters
    ----------
    api_key:
        Vaiz API key.  **Required** unless *config* is given.
    space_id:
        Space every request acts on.  **Required** unless *config* is given.
    config:
        A prebuilt :class:`VaizifyConfig`; when given, *api_key*,
        *space_id* and *kwargs* are ignored.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`VaizifyConfig`.
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
        self._transport = VaizTransport(self._config)
        self._documents = DocumentAPI(self._transport)

    @classmethod
    def from_env(cls, **overrides: Any) -> VaizifyClient:
        """Create a client configured from ``VAIZ_*`` environment variables."""
        return cls(config=VaizifyConfig.from_env(**overrides))

    @property
    def documents(self) -> DocumentAPI:
        """The raw document endpoint wrapper."""
        return self._documents

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_document(self, document_id: str) -> dict[str, Any]:
        return self._documents.get_document(document_id).get("document") or {}

    def get_documents(self, kind: Kind | str, kind_id: str) -> list[dict[str, Any]]:
        return self._documents.get_documents(kind, kind_id).get("documents") or []

    def get_json_document(self, document_id: str) -> list[Any]:
        """Return the document body as a list of nodes."""
        return self._documents.get_json_document(document_id)

    def get_document_history(
        self,
        document_id: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        return self._documents.get_history(document_id, limit=limit, offset=offset)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def create_document(
        self,
        kind: Kind | str,
        kind_id: str,
        title: str,
        index: int = 0,
        parent_document_id: str | None = None,
    ) -> dict[str, Any]:
        """Create an empty document and return it."""
        response = self._documents.create_document(
            kind, kind_id, title, index=index, parent_document_id=parent_document_id,
        )
        document = response.get("document") or {}
        log.info(
            "create_document complete",
            extra=log_fields(op="create_document", document_id=document.get("_id"), title=title),
        )
        return document

    def edit_document(self, document_id: str, **changes: Any) -> dict[str, Any]:
        """Edit metadata; accepts ``name``, ``description``, ``project_id``, ``parent_id``."""
        return self._documents.edit_document(document_id, **changes).get("document") or {}

    def replace_document(self, document_id: str, html: str) -> dict[str, Any]:
        """Replace the body with HTML."""
        return self._documents.replace_document(document_id, html)

    def append_document(self, document_id: str, html: str) -> dict[str, Any]:
        """Append HTML to the body."""
        return self._documents.append_document(document_id, html)

    def replace_json_document(
        self, document_id: str, content: Sequence[Any],
    ) -> DocumentWriteResult:
        """Replace the body with *content*, a list of builder nodes.

        Returns
        -------
        DocumentWriteResult
        """
        response = self._documents.replace_json_document(document_id, content)
        return _write_result("replace_json_document", document_id, content, response, self._metrics)

    def append_json_document(
        self, document_id: str, content: Sequence[Any],
    ) -> DocumentWriteResult:
        """Append *content*, a list of builder nodes, to the body.

        Returns
        -------
        DocumentWriteResult
        """
        response = self._documents.append_json_document(document_id, content)
        return _write_result("append_json_document", document_id, content, response, self._metrics)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._transport.close()

    def __enter__(self) -> VaizifyClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
