"""vaizify.api -- Vaiz API transport and endpoint wrappers.

This sub-package provides:

* :mod:`.retries` -- Retry decision logic and exponential backoff.
* :mod:`.transport` -- HTTP transport with auth, envelope mapping and retries.
* :mod:`.documents` -- Document API wrappers.
"""

from __future__ import annotations

from .documents import AsyncDocumentAPI, DocumentAPI, extract_json_content
from .retries import compute_backoff, should_retry
from .transport import AsyncVaizTransport, VaizTransport

__all__ = [
    "AsyncDocumentAPI",
    "AsyncVaizTransport",
    "DocumentAPI",
    "VaizTransport",
    "compute_backoff",
    "extract_json_content",
    "should_retry",
]
