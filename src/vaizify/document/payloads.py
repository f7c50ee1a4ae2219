"""Typed payloads of the image, files, embed and doc-siblings blocks.

The document schema has no attribute slot for rich block metadata, so
these four block kinds store it as JSON inside the ``text`` of a single
synthetic text child::

    {"type": "embed", "attrs": {...},
     "content": [{"type": "text",
                  "text": "{\\"type\\":\\"YouTube\\",\\"url\\":\\"...\\",...}"}]}

Builders work with the dataclasses below and call :func:`encode_payload`
to produce that child.  :func:`decode_payload` is the reverse boundary for
nodes read back from the service.  JSON is written compactly, matching
what the service itself stores.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from vaizify.document.nodes import PAYLOAD_NODE_TYPES, NodeType, TextNode
from vaizify.errors import VaizifyPayloadError


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is ``None``."""
    return {key: value for key, value in data.items() if value is not None}


# ---------------------------------------------------------------------------
# Payload types
# ---------------------------------------------------------------------------

@dataclass
class ImagePayload:
    """Metadata of an ``image-block``.

    ``id`` is minted per block and is unrelated to ``file_id``, the id of
    the uploaded file the image points at.
    """

    id: str
    src: str
    file_name: str
    file_type: str
    extension: str
    title: str
    file_size: int
    file_id: str
    dimensions: list[float] | None = None
    aspect_ratio: float | None = None
    caption: str | None = None
    dominant_color: Any | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id": self.id,
            "src": self.src,
            "fileName": self.file_name,
            "fileType": self.file_type,
            "extension": self.extension,
            "title": self.title,
            "fileSize": self.file_size,
            "fileId": self.file_id,
            "dimensions": self.dimensions,
            "aspectRatio": self.aspect_ratio,
            "caption": self.caption or None,
            "dominantColor": self.dominant_color,
        })

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ImagePayload:
        return cls(
            id=data.get("id", ""),
            src=data.get("src", ""),
            file_name=data.get("fileName", ""),
            file_type=data.get("fileType", ""),
            extension=data.get("extension", ""),
            title=data.get("title", ""),
            file_size=data.get("fileSize", 0),
            file_id=data.get("fileId", ""),
            dimensions=data.get("dimensions"),
            aspect_ratio=data.get("aspectRatio"),
            caption=data.get("caption"),
            dominant_color=data.get("dominantColor"),
        )


@dataclass
class FileEntry:
    """One attachment listed in a ``files`` block."""

    id: str
    file_id: str
    create_at: int
    url: str
    extension: str
    name: str
    size: int
    type: str
    dominant_color: Any | None = None

    def to_dict(self) -> dict[str, Any]:
        entry = {
            "id": self.id,
            "fileId": self.file_id,
            "createAt": self.create_at,
            "url": self.url,
            "extension": self.extension,
            "name": self.name,
            "size": self.size,
            "type": self.type,
        }
        if self.dominant_color:
            entry["dominantColor"] = self.dominant_color
        return entry

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FileEntry:
        return cls(
            id=data.get("id", ""),
            file_id=data.get("fileId", ""),
            create_at=data.get("createAt", 0),
            url=data.get("url", ""),
            extension=data.get("extension", ""),
            name=data.get("name", ""),
            size=data.get("size", 0),
            type=data.get("type", ""),
            dominant_color=data.get("dominantColor"),
        )


@dataclass
class FilesPayload:
    """Metadata of a ``files`` block."""

    files: list[FileEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"files": [entry.to_dict() for entry in self.files]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FilesPayload:
        return cls(files=[FileEntry.from_dict(f) for f in data.get("files", [])])


@dataclass
class EmbedPayload:
    """Metadata of an ``embed`` block.

    ``url`` is what the caller supplied; ``extracted_url`` is the
    provider-normalised URL (or inline document) the editor renders.
    ``is_content_hidden`` is only written when set.
    """

    type: str
    url: str
    extracted_url: str
    is_content_hidden: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "type": self.type,
            "url": self.url,
            "extractedUrl": self.extracted_url,
            "isContentHidden": self.is_content_hidden,
        })

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EmbedPayload:
        return cls(
            type=data.get("type", ""),
            url=data.get("url", ""),
            extracted_url=data.get("extractedUrl", ""),
            is_content_hidden=data.get("isContentHidden"),
        )


@dataclass
class SiblingsPayload:
    """Metadata of a ``doc-siblings`` block: just its flavour."""

    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SiblingsPayload:
        return cls(type=data.get("type", ""))


BlockPayload = Union[ImagePayload, FilesPayload, EmbedPayload, SiblingsPayload]

_PAYLOAD_TYPES: dict[str, type] = {
    NodeType.IMAGE_BLOCK.value: ImagePayload,
    NodeType.FILES_BLOCK.value: FilesPayload,
    NodeType.EMBED.value: EmbedPayload,
    NodeType.DOC_SIBLINGS.value: SiblingsPayload,
}


# ---------------------------------------------------------------------------
# Encode / decode boundary
# ---------------------------------------------------------------------------

def encode_payload(payload: BlockPayload | Mapping[str, Any]) -> TextNode:
    """Serialise *payload* into the synthetic text child of a block."""
    data = payload if isinstance(payload, Mapping) else payload.to_dict()
    return {
        "type": "text",
        "text": json.dumps(dict(data), separators=(",", ":"), ensure_ascii=False),
    }


def decode_payload(node: Mapping[str, Any]) -> BlockPayload:
    """Parse the JSON payload carried by a payload-bearing block.

    Parameters
    ----------
    node:
        An ``image-block``, ``files``, ``embed`` or ``doc-siblings`` node.

    Returns
    -------
    BlockPayload
        The payload dataclass matching the node kind.

    Raises
    ------
    VaizifyPayloadError
        If the node kind carries no payload, the text child is missing, or
        the text is not a JSON object.
    """
    node_type = node.get("type")
    if node_type not in PAYLOAD_NODE_TYPES:
        raise VaizifyPayloadError(
            message=f"Node type {node_type!r} does not carry a payload",
            context={"node_type": node_type, "reason": "unsupported_type"},
        )

    content = node.get("content") or []
    raw = content[0].get("text") if content and isinstance(content[0], Mapping) else None
    if not isinstance(raw, str):
        raise VaizifyPayloadError(
            message=f"{node_type} node has no payload text child",
            context={"node_type": node_type, "reason": "missing_text"},
        )

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise VaizifyPayloadError(
            message=f"{node_type} payload is not valid JSON: {exc.msg}",
            context={"node_type": node_type, "reason": "invalid_json"},
            cause=exc,
        ) from exc

    if not isinstance(data, dict):
        raise VaizifyPayloadError(
            message=f"{node_type} payload must be a JSON object, got {type(data).__name__}",
            context={"node_type": node_type, "reason": "not_an_object"},
        )

    return _PAYLOAD_TYPES[node_type].from_dict(data)
