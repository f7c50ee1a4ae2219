"""Tests for VaizifyClient (sync) and AsyncVaizifyClient (async).

All Vaiz API calls are mocked so that these tests run entirely offline.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from vaizify import AsyncVaizifyClient, VaizifyClient, VaizifyConfig
from vaizify.api.documents import AsyncDocumentAPI, DocumentAPI
from vaizify.document import heading, paragraph, task_list
from vaizify.models import DocumentWriteResult, Kind


class RecordingMetricsHook:
    def __init__(self) -> None:
        self.increments: list[tuple[str, int, dict | None]] = []

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.increments.append((name, value, tags))

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        pass


def _content() -> list[dict]:
    return [heading(1, "Launch plan"), paragraph("Owners below."), task_list("brief", "venue")]


# ===========================================================================
# Sync client tests
# ===========================================================================

class TestVaizifyClientInit:
    def test_creates_components(self):
        client = VaizifyClient(api_key="test-key", space_id="space-1")
        assert client._config.api_key == "test-key"
        assert client._config.space_id == "space-1"
        assert isinstance(client.documents, DocumentAPI)
        client.close()

    def test_forwards_kwargs_to_config(self):
        client = VaizifyClient(api_key="k", space_id="s", retry_max_attempts=7, verbose=True)
        assert client._config.retry_max_attempts == 7
        assert client._config.verbose is True
        client.close()

    def test_prebuilt_config_wins(self, config):
        client = VaizifyClient(api_key="ignored", config=config)
        assert client._config is config
        client.close()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("VAIZ_API_KEY", "env-key")
        monkeypatch.setenv("VAIZ_SPACE_ID", "env-space")
        client = VaizifyClient.from_env(timeout_seconds=3)
        assert client._config.api_key == "env-key"
        assert client._config.timeout_seconds == 3
        client.close()

    def test_context_manager(self, config):
        client = VaizifyClient(config=config)
        with patch.object(client._transport, "close") as mock_close, client:
            pass
        mock_close.assert_called_once()


class TestVaizifyClientReads:
    def test_get_document_unwraps(self, config):
        client = VaizifyClient(config=config)
        with patch.object(client._transport, "request", return_value={"document": {"_id": "d1"}}):
            assert client.get_document("d1") == {"_id": "d1"}

    def test_get_document_missing_key(self, config):
        client = VaizifyClient(config=config)
        with patch.object(client._transport, "request", return_value={}):
            assert client.get_document("d1") == {}

    def test_get_documents(self, config):
        client = VaizifyClient(config=config)
        docs = [{"_id": "a"}, {"_id": "b"}]
        with patch.object(client._transport, "request", return_value={"documents": docs}) as mock_req:
            assert client.get_documents(Kind.PROJECT, "p1") == docs
        mock_req.assert_called_once_with("getDocuments", {"kind": "Project", "kindId": "p1"})

    def test_get_json_document(self, config):
        client = VaizifyClient(config=config)
        response = {"payload": {"json": '{"default":{"content":[{"type":"paragraph"}]}}'}}
        with patch.object(client._transport, "request", return_value=response):
            assert client.get_json_document("d1") == [{"type": "paragraph"}]

    def test_get_document_history(self, config):
        client = VaizifyClient(config=config)
        with patch.object(client._transport, "request", return_value={"history": []}) as mock_req:
            assert client.get_document_history("d1", limit=3) == {"history": []}
        mock_req.assert_called_once_with("getHistory", {"kind": "Document", "kindId": "d1", "limit": 3})


class TestVaizifyClientWrites:
    def test_create_document(self, config):
        client = VaizifyClient(config=config)
        with patch.object(
            client._transport, "request", return_value={"document": {"_id": "new", "title": "Plan"}},
        ) as mock_req:
            document = client.create_document(Kind.SPACE, "space-1", "Plan")
        assert document == {"_id": "new", "title": "Plan"}
        assert mock_req.call_args.args[0] == "createDocument"

    def test_edit_document(self, config):
        client = VaizifyClient(config=config)
        with patch.object(
            client._transport, "request", return_value={"document": {"_id": "d1", "name": "New"}},
        ) as mock_req:
            assert client.edit_document("d1", name="New")["name"] == "New"
        mock_req.assert_called_once_with("editDocument", {"documentId": "d1", "name": "New"})

    def test_html_writes(self, config):
        client = VaizifyClient(config=config)
        with patch.object(client._transport, "request", return_value={}) as mock_req:
            client.replace_document("d1", "<p>a</p>")
            client.append_document("d1", "<p>b</p>")
        assert [c.args[0] for c in mock_req.call_args_list] == ["replaceDocument", "appendDocument"]

    def test_replace_json_document(self, config):
        client = VaizifyClient(config=config)
        content = _content()
        with patch.object(
            client._transport, "request", return_value={"document": {"_id": "d1"}},
        ) as mock_req:
            result = client.replace_json_document("d1", content)

        assert result == DocumentWriteResult(document_id="d1", nodes_sent=3, document={"_id": "d1"})
        endpoint, body = mock_req.call_args.args
        assert endpoint == "replaceJSONDocument"
        assert body["content"] == content

    def test_append_json_document_without_echo(self, config):
        client = VaizifyClient(config=config)
        with patch.object(client._transport, "request", return_value={}):
            result = client.append_json_document("d1", [paragraph("tail")])
        assert result.nodes_sent == 1
        assert result.document == {}

    def test_nodes_written_metric(self):
        metrics = RecordingMetricsHook()
        client = VaizifyClient(api_key="k", space_id="s", metrics=metrics)
        with patch.object(client._transport, "request", return_value={}):
            client.append_json_document("d1", _content())
        assert metrics.increments == [
            ("vaizify.nodes_written_total", 3, {"op": "append_json_document"}),
        ]


# ===========================================================================
# Async client tests
# ===========================================================================

class TestAsyncVaizifyClient:
    async def test_creates_components(self, config):
        client = AsyncVaizifyClient(config=config)
        assert isinstance(client.documents, AsyncDocumentAPI)
        await client.close()

    async def test_get_document(self, config):
        client = AsyncVaizifyClient(config=config)
        with patch.object(
            client._transport, "request", new=AsyncMock(return_value={"document": {"_id": "d1"}}),
        ):
            assert await client.get_document("d1") == {"_id": "d1"}
        await client.close()

    async def test_get_documents(self, config):
        client = AsyncVaizifyClient(config=config)
        with patch.object(
            client._transport, "request", new=AsyncMock(return_value={"documents": [{"_id": "a"}]}),
        ):
            assert await client.get_documents("Space", "s1") == [{"_id": "a"}]
        await client.close()

    async def test_create_and_edit(self, config):
        client = AsyncVaizifyClient(config=config)
        mock_req = AsyncMock(return_value={"document": {"_id": "d1"}})
        with patch.object(client._transport, "request", new=mock_req):
            assert await client.create_document(Kind.PROJECT, "p1", "Spec") == {"_id": "d1"}
            assert await client.edit_document("d1", description="x") == {"_id": "d1"}
        assert [c.args[0] for c in mock_req.await_args_list] == ["createDocument", "editDocument"]
        await client.close()

    async def test_replace_json_document(self, config):
        client = AsyncVaizifyClient(config=config)
        with patch.object(
            client._transport, "request", new=AsyncMock(return_value={"document": {"_id": "d1"}}),
        ):
            result = await client.replace_json_document("d1", _content())
        assert result.nodes_sent == 3
        assert result.document == {"_id": "d1"}
        await client.close()

    async def test_append_json_and_history(self, config):
        client = AsyncVaizifyClient(config=config)
        mock_req = AsyncMock(return_value={})
        with patch.object(client._transport, "request", new=mock_req):
            result = await client.append_json_document("d1", [paragraph("x")])
            await client.get_document_history("d1", offset=5)
            await client.get_json_document("d1")
        assert result.nodes_sent == 1
        assert mock_req.await_args_list[1].args == (
            "getHistory", {"kind": "Document", "kindId": "d1", "offset": 5},
        )
        await client.close()

    async def test_async_context_manager(self, config):
        async with AsyncVaizifyClient(config=config) as client:
            assert client._config is config


@pytest.mark.parametrize("cls", [VaizifyClient, AsyncVaizifyClient])
def test_config_validation_surfaces(cls):
    with pytest.raises(ValueError):
        cls(api_key="k", space_id="s", base_url="http://api.vaiz.com/v4")
