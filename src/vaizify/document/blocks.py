"""Mentions and the payload-carrying rich blocks.

Image, files and doc-siblings blocks keep their metadata in a JSON text
child (see :mod:`vaizify.document.payloads`); the builders here fill the
typed payload and hand it to :func:`encode_payload`.

Usage::

    from vaizify.document import image_block, mention_user, paragraph

    nodes = [
        paragraph("Owner: ", mention_user(member_id)),
        image_block(uploaded, width_percent=60, caption="Q3 funnel"),
        toc_block(),
    ]
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

from vaizify.document.ids import new_id
from vaizify.document.nodes import (
    DocSiblingsNode,
    FilesBlockNode,
    ImageBlockNode,
    MentionNode,
    NodeType,
    is_number,
)
from vaizify.document.payloads import (
    FileEntry,
    FilesPayload,
    ImagePayload,
    SiblingsPayload,
    encode_payload,
)
from vaizify.errors import VaizifyBuildError
from vaizify.models import Kind, SiblingsType, UploadedFile

DEFAULT_IMAGE_MIME = "image/png"

_MENTION_KINDS = frozenset(kind.value for kind in Kind)


def _custom_attrs() -> dict[str, Any]:
    return {"uid": new_id(), "custom": 1, "contenteditable": "false"}


def _file_fields(file: UploadedFile | Mapping[str, Any], builder: str) -> UploadedFile:
    """Normalise *file* to an :class:`UploadedFile`.

    Mappings may use the upload response keys (``id``, ``ext``) or the
    files-block entry keys (``fileId``, ``extension``); the entry keys win
    when both are present.
    """
    if isinstance(file, UploadedFile):
        return file
    if isinstance(file, Mapping):
        data = dict(file)
        if "fileId" in file:
            data["id"] = file["fileId"]
        if "extension" in file:
            data["ext"] = file["extension"]
        return UploadedFile.from_dict(data)
    raise VaizifyBuildError(
        message=f"{builder}() expects an UploadedFile or a mapping, got {type(file).__name__}",
        context={"builder": builder, "value": repr(file)[:200]},
    )


# ---------------------------------------------------------------------------
# Mentions
# ---------------------------------------------------------------------------

def mention(item_id: str, kind: Kind | str) -> MentionNode:
    """Create an inline mention of a user, document, task or milestone.

    The editor renders the mention from ``attrs.data``; the text child is
    a fixed single space.
    """
    kind_value = kind.value if isinstance(kind, Kind) else kind
    if kind_value not in _MENTION_KINDS:
        raise VaizifyBuildError(
            message=f"Unknown mention kind {kind!r}",
            context={"builder": "mention", "value": kind_value},
        )
    return {
        "type": "custom-mention",
        "attrs": {
            "uid": new_id(),
            "custom": 1,
            "inline": True,
            "data": {"item": {"id": item_id, "kind": kind_value}},
        },
        "content": [{"type": "text", "text": " "}],
    }


def mention_user(member_id: str) -> MentionNode:
    return mention(member_id, Kind.USER)


def mention_document(document_id: str) -> MentionNode:
    return mention(document_id, Kind.DOCUMENT)


def mention_task(task_id: str) -> MentionNode:
    return mention(task_id, Kind.TASK)


def mention_milestone(milestone_id: str) -> MentionNode:
    return mention(milestone_id, Kind.MILESTONE)


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------

def image_block(
    file: UploadedFile | Mapping[str, Any],
    width_percent: float = 100,
    caption: str = "",
) -> ImageBlockNode:
    """Create an image block from an uploaded file.

    Parameters
    ----------
    file:
        The :class:`~vaizify.models.UploadedFile` (or its raw dict) the
        image points at.
    width_percent:
        Rendered width as a percentage of the page; passed through as given.
    caption:
        Optional caption; omitted from the payload when empty.

    The payload gets its own fresh id, distinct from both the block uid
    and the uploaded file's id.  ``aspectRatio`` is only computed for a
    ``[width, height]`` dimension with a positive height, and
    ``fileType`` falls back to ``image/png``.
    """
    if not is_number(width_percent):
        raise VaizifyBuildError(
            message=f"width_percent must be a number, got {width_percent!r}",
            context={"builder": "image_block", "value": width_percent},
        )
    source = _file_fields(file, "image_block")

    dimensions = list(source.dimension) if source.dimension else None
    aspect_ratio = None
    if dimensions is not None and len(dimensions) == 2 and dimensions[1] > 0:
        aspect_ratio = dimensions[0] / dimensions[1]

    payload = ImagePayload(
        id=new_id(),
        src=source.url,
        file_name=source.name,
        file_type=source.mime or DEFAULT_IMAGE_MIME,
        extension=source.ext,
        title=source.name,
        file_size=source.size,
        file_id=source.id,
        dimensions=dimensions,
        aspect_ratio=aspect_ratio,
        caption=caption or None,
        dominant_color=source.dominant_color,
    )

    attrs = _custom_attrs()
    attrs["widthPercent"] = width_percent
    return {
        "type": "image-block",
        "attrs": attrs,  # type: ignore[typeddict-item]
        "content": [encode_payload(payload)],
    }


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def files_block(*items: UploadedFile | Mapping[str, Any]) -> FilesBlockNode:
    """Create an attachment list.

    Each entry gets a new synthetic id of its own (the upstream file id is
    kept as ``fileId``), and every entry shares one ``createAt`` stamp in
    epoch milliseconds.
    """
    created_at = int(time.time() * 1000)
    entries = []
    for item in items:
        source = _file_fields(item, "files_block")
        entries.append(FileEntry(
            id=new_id(),
            file_id=source.id,
            create_at=created_at,
            url=source.url,
            extension=source.ext,
            name=source.name,
            size=source.size,
            type=source.type,
            dominant_color=source.dominant_color,
        ))

    return {
        "type": "files",
        "attrs": _custom_attrs(),  # type: ignore[typeddict-item]
        "content": [encode_payload(FilesPayload(files=entries))],
    }


# ---------------------------------------------------------------------------
# Document navigation
# ---------------------------------------------------------------------------

def _siblings(flavour: SiblingsType) -> DocSiblingsNode:
    return {
        "type": NodeType.DOC_SIBLINGS.value,  # type: ignore[typeddict-item]
        "attrs": _custom_attrs(),  # type: ignore[typeddict-item]
        "content": [encode_payload(SiblingsPayload(type=flavour.value))],
    }


def toc_block() -> DocSiblingsNode:
    """Table of contents of the current document."""
    return _siblings(SiblingsType.TOC)


def anchors_block() -> DocSiblingsNode:
    """Anchor links to the headings of the current document."""
    return _siblings(SiblingsType.ANCHORS)


def siblings_block() -> DocSiblingsNode:
    """Previous / next links between sibling documents."""
    return _siblings(SiblingsType.SIBLINGS)
