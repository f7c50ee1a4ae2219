"""Public data models for the vaizify SDK.

This module contains every enum, result type, and supporting dataclass
referenced by the public API surface.  All types are plain dataclasses
with no behaviour beyond what is needed for structural equality and for
reading the service's camelCase responses.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Kind(str, Enum):
    """Entity kinds addressable by mentions and document containers."""

    USER = "User"
    MEMBER = "Member"
    DOCUMENT = "Document"
    TASK = "Task"
    MILESTONE = "Milestone"
    PROJECT = "Project"
    SPACE = "Space"


class EmbedType(str, Enum):
    """Providers understood by the ``embed`` block."""

    YOUTUBE = "YouTube"
    FIGMA = "Figma"
    VIMEO = "Vimeo"
    CODESANDBOX = "CodeSandbox"
    GITHUB_GIST = "GitHub Gist"
    MIRO = "Miro"
    IFRAME = "Iframe"


class EmbedSize(str, Enum):
    """Rendered size of an ``embed`` block."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class SiblingsType(str, Enum):
    """Discriminator stored in a ``doc-siblings`` block payload."""

    TOC = "toc"
    """Table of contents of the current document."""

    ANCHORS = "anchors"
    """Anchor links to the headings of the current document."""

    SIBLINGS = "siblings"
    """Previous / next navigation between sibling documents."""


# ---------------------------------------------------------------------------
# Upload models
# ---------------------------------------------------------------------------

@dataclass
class UploadedFile:
    """A file stored by the service, as returned by ``uploadFile``.

    Attributes
    ----------
    id:
        Server-side file id.
    url:
        Download URL of the stored file.
    name:
        Original file name.
    ext:
        File extension without the dot.
    type:
        Upload category reported by the service (e.g. ``"Image"``).
    size:
        Size in bytes.
    dimension:
        ``[width, height]`` in pixels for images, when known.
    mime:
        MIME type, when known.
    dominant_color:
        Dominant colour descriptor computed by the service for images.
    """

    id: str
    url: str
    name: str = ""
    ext: str = ""
    type: str = ""
    size: int = 0
    dimension: list[float] | None = None
    mime: str | None = None
    dominant_color: Any | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UploadedFile:
        """Build from an upload response ``file`` object (camelCase keys)."""
        return cls(
            id=data.get("id", ""),
            url=data.get("url", ""),
            name=data.get("name", ""),
            ext=data.get("ext", ""),
            type=data.get("type", ""),
            size=data.get("size", 0),
            dimension=data.get("dimension"),
            mime=data.get("mime"),
            dominant_color=data.get("dominantColor", data.get("dominant_color")),
        )


# ---------------------------------------------------------------------------
# Client results
# ---------------------------------------------------------------------------

@dataclass
class DocumentWriteResult:
    """Result of a JSON replace or append on a document.

    Attributes
    ----------
    document_id:
        The document that was written.
    nodes_sent:
        Number of top-level nodes submitted.
    document:
        The ``document`` object echoed by the service, if any.
    """

    document_id: str
    nodes_sent: int
    document: dict = field(default_factory=dict)
