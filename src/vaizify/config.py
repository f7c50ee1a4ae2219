"""SDK configuration for vaizify.

:class:`VaizifyConfig` is a frozen-friendly dataclass that captures every
tuneable knob exposed by the SDK.  Instances are passed to both
:class:`VaizifyClient` and :class:`AsyncVaizifyClient`.

The document builders in :mod:`vaizify.document` are pure functions and
take no configuration.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any

from vaizify._version import __version__

DEFAULT_BASE_URL = "https://api.vaiz.com/v4"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in _TRUTHY


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class VaizifyConfig:
    """Complete configuration for a vaizify client.

    Every parameter has a sensible default so that the only *required*
    values are ``api_key`` and ``space_id``.

    Parameters
    ----------
    api_key:
        Vaiz API key, sent as a bearer token.  **Required.**  Never logged.
    space_id:
        Identifier of the space every request acts on, sent in the
        ``current-space-id`` header.  **Required.**
    base_url:
        API root URL.  Override for proxy or testing environments.
    verify_ssl:
        Verify TLS certificates.  Disable only for self-signed test hosts.
    verbose:
        Write the (redacted) request payload and response body of every
        call to *stderr*.
    timeout_seconds:
        HTTP request timeout in seconds.
    retry_max_attempts:
        Maximum number of attempts per request for retryable failures.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Add random jitter to backoff intervals.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    app_version:
        Value of the ``app-version`` header.
    metrics:
        Optional :class:`~vaizify.observability.MetricsHook` backend.
    """

    # ── Core ────────────────────────────────────────────────────────────
    api_key: str = ""

    space_id: str = ""

    base_url: str = DEFAULT_BASE_URL

    verify_ssl: bool = True

    # ── Retry ───────────────────────────────────────────────────────────
    retry_max_attempts: int = 3

    retry_base_delay: float = 1.0

    retry_max_delay: float = 30.0

    retry_jitter: bool = True

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    app_version: str = f"python-sdk-{__version__}"

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API key, or target localhost for testing."
            )

        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    @classmethod
    def from_env(cls, **overrides: Any) -> VaizifyConfig:
        """Build a config from ``VAIZ_*`` environment variables.

        Reads ``VAIZ_API_KEY``, ``VAIZ_SPACE_ID``, ``VAIZ_BASE_URL``,
        ``VAIZ_VERIFY_SSL`` and ``VAIZ_VERBOSE``.  Keyword *overrides*
        take precedence over the environment.
        """
        values: dict[str, Any] = {
            "api_key": os.environ.get("VAIZ_API_KEY", ""),
            "space_id": os.environ.get("VAIZ_SPACE_ID", ""),
            "base_url": os.environ.get("VAIZ_BASE_URL") or DEFAULT_BASE_URL,
            "verify_ssl": _env_flag(os.environ.get("VAIZ_VERIFY_SSL"), True),
            "verbose": _env_flag(os.environ.get("VAIZ_VERBOSE"), False),
        }
        values.update(overrides)
        return cls(**values)

    def __repr__(self) -> str:
        """Mask the API key to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "api_key":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"api_key='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"VaizifyConfig({', '.join(parts)})"
