"""Tests for mentions, image/files/siblings blocks and embeds."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from vaizify.document.blocks import (
    anchors_block,
    files_block,
    image_block,
    mention,
    mention_document,
    mention_milestone,
    mention_task,
    mention_user,
    siblings_block,
    toc_block,
)
from vaizify.document.embed import embed_block, extract_embed_url
from vaizify.errors import VaizifyBuildError
from vaizify.models import EmbedSize, EmbedType, Kind, UploadedFile


def _payload(node: dict) -> dict:
    assert len(node["content"]) == 1
    return json.loads(node["content"][0]["text"])


# ---------------------------------------------------------------------------
# Mentions
# ---------------------------------------------------------------------------

class TestMention:
    def test_shape(self):
        node = mention("u-1", Kind.USER)
        assert node["type"] == "custom-mention"
        assert node["attrs"]["custom"] == 1
        assert node["attrs"]["inline"] is True
        assert node["attrs"]["data"] == {"item": {"id": "u-1", "kind": "User"}}
        assert node["content"] == [{"type": "text", "text": " "}]

    @pytest.mark.parametrize(
        ("builder", "kind"),
        [
            (mention_user, "User"),
            (mention_document, "Document"),
            (mention_task, "Task"),
            (mention_milestone, "Milestone"),
        ],
    )
    def test_wrappers_fix_kind(self, builder, kind):
        assert builder("id-9")["attrs"]["data"]["item"] == {"id": "id-9", "kind": kind}

    def test_string_kind_accepted(self):
        assert mention("t-1", "Task")["attrs"]["data"]["item"]["kind"] == "Task"

    def test_unknown_kind_raises(self):
        with pytest.raises(VaizifyBuildError, match="mention kind"):
            mention("x", "Board")


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------

class TestImageBlock:
    def test_payload_fields(self, image_file):
        node = image_block(image_file, width_percent=60, caption="Funnel")
        assert node["type"] == "image-block"
        assert node["attrs"]["widthPercent"] == 60
        assert node["attrs"]["contenteditable"] == "false"

        payload = _payload(node)
        assert list(payload) == [
            "id", "src", "fileName", "fileType", "extension", "title", "fileSize",
            "fileId", "dimensions", "aspectRatio", "caption", "dominantColor",
        ]
        assert payload["src"] == image_file.url
        assert payload["fileId"] == "file-1"
        assert payload["extension"] == "png"
        assert payload["title"] == payload["fileName"] == "chart.png"
        assert payload["caption"] == "Funnel"

    def test_aspect_ratio(self, image_file):
        payload = _payload(image_block(image_file))
        assert payload["aspectRatio"] == pytest.approx(1.7778, abs=1e-4)

    def test_fresh_ids(self, image_file):
        node = image_block(image_file)
        payload = _payload(node)
        assert payload["id"] != image_file.id
        assert payload["id"] != node["attrs"]["uid"]
        assert len(payload["id"]) == 12

    def test_mapping_input_and_defaults(self):
        node = image_block({"id": "f", "url": "https://x/y.jpg", "name": "y.jpg", "ext": "jpg"})
        payload = _payload(node)
        assert payload["fileType"] == "image/png"
        assert "caption" not in payload
        assert "aspectRatio" not in payload
        assert "dimensions" not in payload
        assert node["attrs"]["widthPercent"] == 100

    def test_zero_height_has_no_aspect_ratio(self):
        source = UploadedFile(id="f", url="u", dimension=[100, 0])
        payload = _payload(image_block(source))
        assert payload["dimensions"] == [100, 0]
        assert "aspectRatio" not in payload

    @pytest.mark.parametrize("width", ["50", True, None])
    def test_width_must_be_number(self, image_file, width):
        with pytest.raises(VaizifyBuildError):
            image_block(image_file, width_percent=width)

    @pytest.mark.parametrize("width", [0, 150, 33.5])
    def test_any_number_width_passed_through(self, image_file, width):
        assert image_block(image_file, width_percent=width)["attrs"]["widthPercent"] == width

    def test_rejects_other_file_types(self):
        with pytest.raises(VaizifyBuildError, match="image_block"):
            image_block("https://x/y.png")


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

class TestFilesBlock:
    def test_entries(self, image_file):
        other = {"id": "file-2", "url": "https://x/report.pdf", "name": "report.pdf",
                 "ext": "pdf", "type": "Pdf", "size": 99}
        with patch("vaizify.document.blocks.time.time", return_value=1700000000.5):
            node = files_block(image_file, other)

        assert node["type"] == "files"
        files = _payload(node)["files"]
        assert len(files) == 2
        assert [f["fileId"] for f in files] == ["file-1", "file-2"]
        assert {f["createAt"] for f in files} == {1700000000500}
        assert files[0]["id"] != files[1]["id"]
        assert files[0]["id"] not in ("file-1", "file-2")
        assert files[0]["dominantColor"] == {"color": "#112233", "isDark": True}
        assert "dominantColor" not in files[1]
        assert files[1]["extension"] == "pdf"
        assert files[1]["type"] == "Pdf"

    def test_entry_shaped_mapping(self):
        item = {"fileId": "file-9", "extension": "pdf", "url": "https://x/spec.pdf",
                "name": "spec.pdf", "size": 512, "type": "Pdf",
                "dominantColor": {"color": "#000000", "isDark": True}}
        entry = _payload(files_block(item))["files"][0]
        assert entry["fileId"] == "file-9"
        assert entry["extension"] == "pdf"
        assert entry["url"] == "https://x/spec.pdf"
        assert entry["size"] == 512
        assert entry["dominantColor"] == {"color": "#000000", "isDark": True}

    def test_entry_keys_win_over_upload_keys(self):
        item = {"id": "entry-1", "fileId": "file-9", "ext": "bin", "extension": "pdf", "url": "u"}
        entry = _payload(files_block(item))["files"][0]
        assert entry["fileId"] == "file-9"
        assert entry["extension"] == "pdf"

    def test_timestamp_captured_once(self, image_file):
        with patch("vaizify.document.blocks.time.time", side_effect=[1.0, 2.0, 3.0]) as clock:
            node = files_block(image_file, image_file)
        assert clock.call_count == 1
        assert {f["createAt"] for f in _payload(node)["files"]} == {1000}


class TestSiblings:
    @pytest.mark.parametrize(
        ("builder", "flavour"),
        [(toc_block, "toc"), (anchors_block, "anchors"), (siblings_block, "siblings")],
    )
    def test_flavours(self, builder, flavour):
        node = builder()
        assert node["type"] == "doc-siblings"
        assert node["attrs"]["custom"] == 1
        assert _payload(node) == {"type": flavour}


# ---------------------------------------------------------------------------
# Embeds
# ---------------------------------------------------------------------------

class TestExtractEmbedUrl:
    def test_youtube_watch(self):
        url = extract_embed_url("https://youtube.com/watch?v=abc123", EmbedType.YOUTUBE)
        assert url == "https://www.youtube.com/embed/abc123"

    def test_youtube_short(self):
        url = extract_embed_url("https://youtu.be/dQw4w9WgXcQ?t=1", EmbedType.YOUTUBE)
        assert url == "https://www.youtube.com/embed/dQw4w9WgXcQ"

    def test_youtube_without_id_unchanged(self):
        url = "https://youtube.com/@channel"
        assert extract_embed_url(url, EmbedType.YOUTUBE) == url

    def test_figma_rewrites_first_design_segment(self):
        url = "https://www.figma.com/design/KEY/design/x"
        assert extract_embed_url(url, "Figma") == (
            "https://www.figma.com/embed?embed_host=share&url="
            "https://www.figma.com/file/KEY/design/x"
        )

    def test_gist_inline_document(self):
        result = extract_embed_url("https://gist.github.com/u/abc", EmbedType.GITHUB_GIST)
        assert result == (
            "data:text/html;charset=utf-8,\n"
            "      <head><base target='_blank'/></head>\n"
            "      <body><script src='https://gist.github.com/u/abc.js'></script>\n"
            "      </body>"
        )

    @pytest.mark.parametrize("provider", [EmbedType.IFRAME, EmbedType.MIRO, EmbedType.VIMEO])
    def test_others_unchanged(self, provider):
        assert extract_embed_url("https://example.com/e", provider) == "https://example.com/e"

    def test_unknown_provider_raises(self):
        with pytest.raises(VaizifyBuildError):
            extract_embed_url("https://x", "Loom")


class TestEmbedBlock:
    def test_youtube_payload(self):
        node = embed_block("https://youtube.com/watch?v=abc123", EmbedType.YOUTUBE)
        payload = _payload(node)
        assert payload == {
            "type": "YouTube",
            "url": "https://youtube.com/watch?v=abc123",
            "extractedUrl": "https://www.youtube.com/embed/abc123",
        }
        assert node["attrs"]["size"] == "medium"
        assert node["attrs"]["isContentHidden"] is False

    def test_figma_always_hidden_in_payload(self):
        node = embed_block("https://figma.com/design/k", EmbedType.FIGMA, "large", False)
        assert _payload(node)["isContentHidden"] is True
        assert node["attrs"]["isContentHidden"] is False
        assert node["attrs"]["size"] == "large"

    def test_miro_hidden_only_on_request(self):
        assert "isContentHidden" not in _payload(embed_block("https://miro.com/b", EmbedType.MIRO))
        hidden = embed_block("https://miro.com/b", EmbedType.MIRO, EmbedSize.SMALL, True)
        assert _payload(hidden)["isContentHidden"] is True

    def test_iframe_ignores_hidden_flag_in_payload(self):
        node = embed_block("https://example.com", is_content_hidden=True)
        assert "isContentHidden" not in _payload(node)
        assert node["attrs"]["isContentHidden"] is True

    def test_payload_is_compact_json(self):
        text = embed_block("https://example.com")["content"][0]["text"]
        assert ", " not in text and ": " not in text

    def test_bad_size_raises(self):
        with pytest.raises(VaizifyBuildError, match="size"):
            embed_block("https://example.com", size="huge")
