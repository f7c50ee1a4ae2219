"""vaizify: Vaiz document SDK with typed rich-document builders.

Public re-exports
-----------------

* **Clients:** :class:`VaizifyClient`, :class:`AsyncVaizifyClient`
* **Configuration:** :class:`VaizifyConfig`
* **Errors:** Every :class:`VaizifyError` subclass and :class:`ErrorCode`
* **Models:** Result dataclasses and enums

Document builders live in :mod:`vaizify.document` and custom-field helpers
in :mod:`vaizify.custom_fields`.

Usage::

    from vaizify import VaizifyClient
    from vaizify.document import heading, paragraph

    client = VaizifyClient(api_key="vz_xxx", space_id="<space_id>")
    client.replace_json_document("<document_id>", [heading(1, "Hello"), paragraph("World")])
"""

from __future__ import annotations

from vaizify._version import __version__
from vaizify.async_client import AsyncVaizifyClient

# ── Clients ────────────────────────────────────────────────────────────
from vaizify.client import VaizifyClient

# ── Configuration ───────────────────────────────────────────────────────
from vaizify.config import DEFAULT_BASE_URL, VaizifyConfig

# ── Errors ──────────────────────────────────────────────────────────────
from vaizify.errors import (
    ErrorCode,
    VaizifyAuthError,
    VaizifyBuildError,
    VaizifyError,
    VaizifyHTTPError,
    VaizifyNetworkError,
    VaizifyNotFoundError,
    VaizifyPayloadError,
    VaizifyPermissionError,
    VaizifyRateLimitError,
    VaizifyRetryExhaustedError,
    VaizifyValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from vaizify.models import (
    DocumentWriteResult,
    EmbedSize,
    EmbedType,
    Kind,
    SiblingsType,
    UploadedFile,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    "__version__",
    # Clients
    "VaizifyClient",
    "AsyncVaizifyClient",
    # Configuration
    "VaizifyConfig",
    "DEFAULT_BASE_URL",
    # Error base + code enum
    "VaizifyError",
    "ErrorCode",
    # API / transport errors
    "VaizifyValidationError",
    "VaizifyAuthError",
    "VaizifyPermissionError",
    "VaizifyNotFoundError",
    "VaizifyRateLimitError",
    "VaizifyRetryExhaustedError",
    "VaizifyNetworkError",
    "VaizifyHTTPError",
    # Document errors
    "VaizifyBuildError",
    "VaizifyPayloadError",
    # Models
    "DocumentWriteResult",
    "UploadedFile",
    "Kind",
    "EmbedType",
    "EmbedSize",
    "SiblingsType",
]
