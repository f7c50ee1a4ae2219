"""Tests for the payload encode/decode boundary."""

from __future__ import annotations

import pytest

from vaizify.document.blocks import files_block, image_block, toc_block
from vaizify.document.embed import embed_block
from vaizify.document.payloads import (
    EmbedPayload,
    FilesPayload,
    ImagePayload,
    SiblingsPayload,
    decode_payload,
    encode_payload,
)
from vaizify.document.text import paragraph
from vaizify.errors import ErrorCode, VaizifyPayloadError
from vaizify.models import EmbedType


class TestEncodePayload:
    def test_dataclass(self):
        node = encode_payload(SiblingsPayload(type="toc"))
        assert node == {"type": "text", "text": '{"type":"toc"}'}

    def test_mapping_keeps_unicode(self):
        node = encode_payload({"caption": "Überblick"})
        assert node["text"] == '{"caption":"Überblick"}'

    def test_none_fields_omitted(self):
        text = encode_payload(EmbedPayload(type="Iframe", url="u", extracted_url="u"))["text"]
        assert "isContentHidden" not in text


class TestDecodePayload:
    def test_image(self, image_file):
        payload = decode_payload(image_block(image_file, caption="c"))
        assert isinstance(payload, ImagePayload)
        assert payload.file_id == "file-1"
        assert payload.dimensions == [1920, 1080]
        assert payload.caption == "c"

    def test_files(self, image_file):
        payload = decode_payload(files_block(image_file))
        assert isinstance(payload, FilesPayload)
        assert payload.files[0].file_id == "file-1"
        assert payload.files[0].extension == "png"

    def test_embed(self):
        payload = decode_payload(embed_block("https://figma.com/design/k", EmbedType.FIGMA))
        assert isinstance(payload, EmbedPayload)
        assert payload.is_content_hidden is True
        assert payload.extracted_url.startswith("https://www.figma.com/embed?")

    def test_siblings(self):
        assert decode_payload(toc_block()) == SiblingsPayload(type="toc")

    def test_reencoding_is_stable(self):
        node = embed_block("https://youtu.be/abc", EmbedType.YOUTUBE)
        assert encode_payload(decode_payload(node)) == node["content"][0]

    def test_non_payload_node(self):
        with pytest.raises(VaizifyPayloadError) as exc_info:
            decode_payload(paragraph("x"))
        assert exc_info.value.code == ErrorCode.PAYLOAD_ERROR
        assert exc_info.value.context["reason"] == "unsupported_type"

    def test_missing_text(self):
        with pytest.raises(VaizifyPayloadError) as exc_info:
            decode_payload({"type": "embed", "attrs": {}, "content": []})
        assert exc_info.value.context["reason"] == "missing_text"

    def test_invalid_json(self):
        node = {"type": "files", "content": [{"type": "text", "text": "{not json"}]}
        with pytest.raises(VaizifyPayloadError) as exc_info:
            decode_payload(node)
        assert exc_info.value.context["reason"] == "invalid_json"
        assert exc_info.value.cause is not None

    def test_non_object_json(self):
        node = {"type": "doc-siblings", "content": [{"type": "text", "text": "[1, 2]"}]}
        with pytest.raises(VaizifyPayloadError, match="JSON object"):
            decode_payload(node)
