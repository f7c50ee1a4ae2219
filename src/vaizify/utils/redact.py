"""Credential scrubbing for verbose request dumps.

With ``VaizifyConfig.verbose`` enabled the transport prints every request
and response to stderr.  Those dumps pass through :func:`redact` first:

* values under credential-like keys (``authorization``, ``api_key``,
  ``token``, ...) are masked;
* ``Bearer <key>`` fragments are masked wherever they appear;
* the configured API key is scrubbed from every string in the tree;
* base64 data URIs are collapsed to ``<data_uri:N_bytes>``.

The input is never mutated.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Any

_BASE64_URI_RE = re.compile(r"data:[\w.+-]+/[\w.+-]+;base64,[A-Za-z0-9+/=]+")
_BEARER_RE = re.compile(r"(Bearer\s+)\S+")

_SENSITIVE_KEYS: tuple[str, ...] = (
    "authorization",
    "api_key",
    "api-key",
    "apikey",
    "token",
    "secret",
    "password",
    "cookie",
)


def _placeholder(api_key: str | None) -> str:
    if api_key and len(api_key) >= 4:
        return f"<redacted:...{api_key[-4:]}>"
    return "<redacted>"


def _decoded_size(uri: str) -> int:
    encoded = uri.split(";base64,", 1)[1]
    try:
        return len(base64.b64decode(encoded, validate=True))
    except (binascii.Error, ValueError):
        return len(encoded) * 3 // 4


def _scrub(value: str, api_key: str | None) -> str:
    if api_key and api_key in value:
        value = value.replace(api_key, _placeholder(api_key))
    value = _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)
    return _BASE64_URI_RE.sub(lambda m: f"<data_uri:{_decoded_size(m.group(0))}_bytes>", value)


def _is_sensitive(key: Any) -> bool:
    return isinstance(key, str) and any(part in key.lower() for part in _SENSITIVE_KEYS)


def _walk(value: Any, api_key: str | None) -> Any:
    if isinstance(value, dict):
        return {
            key: (_placeholder(api_key) if _is_sensitive(key) else _walk(item, api_key))
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_walk(item, api_key) for item in value]
    if isinstance(value, str):
        return _scrub(value, api_key)
    if isinstance(value, (bytes, bytearray)):
        return f"<binary:{len(value)}_bytes>"
    return value


def redact(payload: Any, api_key: str | None = None) -> Any:
    """Return a copy of *payload* that is safe to print.

    Parameters
    ----------
    payload:
        A request body, response body or header mapping; nested dicts and
        lists are walked.
    api_key:
        The configured API key.  Every occurrence is replaced by a marker
        keeping only its last four characters.

    Examples
    --------
    >>> redact({"Authorization": "Bearer vz_live_1234"}, "vz_live_1234")
    {'Authorization': '<redacted:...1234>'}
    """
    return _walk(payload, api_key)
