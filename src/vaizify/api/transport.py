"""Sync and async HTTP transports for the Vaiz API.

Every Vaiz endpoint is ``POST {base_url}/{endpoint}`` with a JSON body.
A request goes through these steps:

1. Send the body with the bearer key, ``current-space-id`` and
   ``app-version`` headers.
2. If the body carries an ``{"error": {...}}`` envelope, map it with
   :func:`~vaizify.errors.error_from_envelope`.  ``RateLimitExceeded`` is
   retried; every other envelope is raised immediately.
3. On ``2xx`` return the parsed JSON body.
4. On ``429`` / ``5xx`` / network errors back off exponentially and retry.
5. Any other status raises :class:`~vaizify.errors.VaizifyHTTPError`.
6. When attempts run out raise
   :class:`~vaizify.errors.VaizifyRetryExhaustedError` (or
   :class:`~vaizify.errors.VaizifyNetworkError` if the last attempt never
   got a response).
"""

from __future__ import annotations

import asyncio
import json
import sys
import time
from dataclasses import dataclass
from typing import Any

import httpx

from vaizify.config import VaizifyConfig
from vaizify.errors import (
    VaizifyError,
    VaizifyHTTPError,
    VaizifyNetworkError,
    VaizifyRateLimitError,
    VaizifyRetryExhaustedError,
    error_from_envelope,
)
from vaizify.observability import NoopMetricsHook, get_logger, log_fields
from vaizify.utils.redact import redact

from .retries import RETRYABLE_EXCEPTIONS, RETRYABLE_STATUSES, compute_backoff, should_retry

log = get_logger("vaizify.transport")


@dataclass
class _RetrySignal:
    """A response that failed in a retryable way."""

    reason: str
    status_code: int
    api_code: str | None = None
    retry_after: float | None = None
    error: VaizifyError | None = None


def _parse_retry_after(response: httpx.Response) -> float | None:
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class _TransportBase:
    """State and response handling shared by both transports."""

    def __init__(self, config: VaizifyConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    def _client_options(self) -> dict[str, Any]:
        config = self._config
        return {
            "base_url": config.base_url,
            "headers": {
                "Authorization": f"Bearer {config.api_key}",
                "current-space-id": config.space_id,
                "app-version": config.app_version,
                "Content-Type": "application/json",
            },
            "timeout": httpx.Timeout(config.timeout_seconds),
            "verify": config.verify_ssl,
            "proxy": config.http_proxy,
        }

    # -- response handling -------------------------------------------------

    def _handle_response(
        self,
        endpoint: str,
        payload: dict[str, Any],
        response: httpx.Response,
        elapsed_ms: float,
    ) -> dict[str, Any] | _RetrySignal:
        """Return the parsed body, a retry signal, or raise a typed error."""
        status = response.status_code
        tags = {"endpoint": endpoint, "status": str(status)}
        self._metrics.increment("vaizify.requests_total", tags=tags)
        self._metrics.timing("vaizify.request_duration_ms", elapsed_ms, tags=tags)

        body = _decode_body(response)
        if self._config.verbose:
            self._dump(endpoint, payload, status, body if body is not None else response.text)

        envelope = body.get("error") if isinstance(body, dict) else None
        if isinstance(envelope, dict) and envelope:
            error = error_from_envelope(envelope, endpoint=endpoint)
            if isinstance(error, VaizifyRateLimitError):
                return _RetrySignal(
                    reason="rate_limited",
                    status_code=status,
                    api_code=error.context.get("api_code"),
                    retry_after=_parse_retry_after(response),
                    error=error,
                )
            log.warning(
                "Vaiz API returned an error",
                extra=log_fields(
                    op="request",
                    endpoint=endpoint,
                    status_code=status,
                    api_code=error.context.get("api_code"),
                ),
            )
            raise error

        if 200 <= status < 300:
            if body is None:
                return {}
            if not isinstance(body, dict):
                raise VaizifyHTTPError(
                    message=f"Expected a JSON object from {endpoint}, got {type(body).__name__}",
                    context={"status_code": status, "url": str(response.url),
                             "response_text": response.text[:500]},
                )
            return body

        if status in RETRYABLE_STATUSES:
            return _RetrySignal(
                reason="rate_limited" if status == 429 else "server_error",
                status_code=status,
                retry_after=_parse_retry_after(response) if status == 429 else None,
            )

        raise VaizifyHTTPError(
            message=f"HTTP {status} from {endpoint}",
            context={"status_code": status, "url": str(response.url),
                     "response_text": response.text[:500]},
        )

    def _retry_delay(self, endpoint: str, signal: _RetrySignal, attempt: int) -> float | None:
        """Delay before the next attempt, or ``None`` once attempts are used up."""
        if not should_retry(
            attempt,
            self._config.retry_max_attempts,
            status_code=signal.status_code,
            api_code=signal.api_code,
        ):
            return None
        log.warning(
            "Retrying Vaiz API request",
            extra=log_fields(
                op="request",
                endpoint=endpoint,
                reason=signal.reason,
                status_code=signal.status_code,
                retry_after=signal.retry_after,
                attempt=attempt + 1,
            ),
        )
        self._metrics.increment(
            "vaizify.retries_total",
            tags={"endpoint": endpoint, "reason": signal.reason},
        )
        return self._backoff(attempt, signal.retry_after)

    def _network_delay(self, endpoint: str, exc: Exception, attempt: int) -> float:
        """Delay before retrying after *exc*; raises once attempts are used up."""
        self._metrics.increment(
            "vaizify.requests_total",
            tags={"endpoint": endpoint, "status": "error"},
        )
        log.warning(
            "Vaiz API network error",
            extra=log_fields(op="request", endpoint=endpoint, attempt=attempt + 1, error=str(exc)),
        )
        if not should_retry(attempt, self._config.retry_max_attempts, exception=exc):
            raise VaizifyNetworkError(
                message=f"Network error for {endpoint}: {exc}",
                context={"url": f"{self._config.base_url}/{endpoint}", "attempt": attempt + 1},
                cause=exc,
            ) from exc
        self._metrics.increment(
            "vaizify.retries_total",
            tags={"endpoint": endpoint, "reason": "network_error"},
        )
        return self._backoff(attempt, None)

    def _backoff(self, attempt: int, retry_after: float | None) -> float:
        return compute_backoff(
            attempt,
            base=self._config.retry_base_delay,
            maximum=self._config.retry_max_delay,
            jitter=self._config.retry_jitter,
            retry_after=retry_after,
        )

    def _exhausted(
        self, endpoint: str, signal: _RetrySignal | None,
    ) -> VaizifyRetryExhaustedError:
        """Build the error for a request loop that ended without a result.

        *signal* is the last retryable failure, or ``None`` if no attempt
        produced a response.
        """
        attempts = self._config.retry_max_attempts
        last_status = signal.status_code if signal is not None else None
        last_api_code = signal.api_code if signal is not None else None
        reason = signal.reason if signal is not None else "no_response"
        log.warning(
            "Vaiz API retries exhausted",
            extra=log_fields(
                op="request",
                endpoint=endpoint,
                attempts=attempts,
                status_code=last_status,
                api_code=last_api_code,
            ),
        )
        return VaizifyRetryExhaustedError(
            message=(
                f"All {attempts} attempts exhausted for {endpoint} "
                f"(last status: {last_status}, reason: {reason})"
            ),
            context={
                "attempts": attempts,
                "last_status_code": last_status,
                "last_api_code": last_api_code,
            },
            cause=signal.error if signal is not None else None,
        )

    def _dump(self, endpoint: str, payload: dict[str, Any], status: int, body: Any) -> None:
        dump = {
            "endpoint": endpoint,
            "url": f"{self._config.base_url}/{endpoint}",
            "request_body": payload,
            "response_status": status,
            "response_body": body,
        }
        print(
            json.dumps(redact(dump, self._config.api_key), indent=2, default=str, ensure_ascii=False),
            file=sys.stderr,
        )


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class VaizTransport(_TransportBase):
    """Synchronous transport backed by :class:`httpx.Client`.

    Parameters
    ----------
    config:
        Connection, retry and observability settings.
    """

    def __init__(self, config: VaizifyConfig) -> None:
        super().__init__(config)
        self._client = httpx.Client(**self._client_options())

    def request(self, endpoint: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Call *endpoint* with the JSON *payload* and return the response body.

        Raises
        ------
        VaizifyAuthError, VaizifyValidationError, VaizifyNotFoundError, VaizifyPermissionError
            For the matching error envelopes.
        VaizifyError
            For envelopes with any other code.
        VaizifyHTTPError
            For non-retryable statuses without an envelope.
        VaizifyRetryExhaustedError
            When every attempt hit a retryable failure.
        VaizifyNetworkError
            When the final attempt failed at the network level.
        """
        body = payload or {}
        signal: _RetrySignal | None = None

        for attempt in range(self._config.retry_max_attempts):
            started = time.monotonic()
            try:
                response = self._client.post(f"/{endpoint}", json=body)
            except RETRYABLE_EXCEPTIONS as exc:
                time.sleep(self._network_delay(endpoint, exc, attempt))
                continue

            outcome = self._handle_response(
                endpoint, body, response, (time.monotonic() - started) * 1000,
            )
            if not isinstance(outcome, _RetrySignal):
                return outcome

            signal = outcome
            delay = self._retry_delay(endpoint, signal, attempt)
            if delay is None:
                break
            time.sleep(delay)

        raise self._exhausted(endpoint, signal)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> VaizTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncVaizTransport(_TransportBase):
    """Asynchronous counterpart of :class:`VaizTransport`."""

    def __init__(self, config: VaizifyConfig) -> None:
        super().__init__(config)
        self._client = httpx.AsyncClient(**self._client_options())

    async def request(self, endpoint: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Async version of :meth:`VaizTransport.request`."""
        body = payload or {}
        signal: _RetrySignal | None = None

        for attempt in range(self._config.retry_max_attempts):
            started = time.monotonic()
            try:
                response = await self._client.post(f"/{endpoint}", json=body)
            except RETRYABLE_EXCEPTIONS as exc:
                await asyncio.sleep(self._network_delay(endpoint, exc, attempt))
                continue

            outcome = self._handle_response(
                endpoint, body, response, (time.monotonic() - started) * 1000,
            )
            if not isinstance(outcome, _RetrySignal):
                return outcome

            signal = outcome
            delay = self._retry_delay(endpoint, signal, attempt)
            if delay is None:
                break
            await asyncio.sleep(delay)

        raise self._exhausted(endpoint, signal)

    async def close(self) -> None:
        """Close the underlying async HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncVaizTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
