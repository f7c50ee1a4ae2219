"""Full error hierarchy for the vaizify SDK.

Every public error class inherits from VaizifyError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Error codes are defined as a :class:`str` enum so that they serialise
naturally to JSON and can be matched with simple ``==`` comparisons.

The Vaiz API reports failures inside the response body as an *envelope*::

    {"error": {"code": "NotFound", "fields": [], "originalType": "...",
               "meta": {"description": "Document not found"}}}

:func:`error_from_envelope` maps such an envelope onto the hierarchy.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the SDK can raise."""

    API_ERROR = "API_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    NETWORK_ERROR = "NETWORK_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    BUILD_ERROR = "BUILD_ERROR"
    PAYLOAD_ERROR = "PAYLOAD_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class VaizifyError(Exception):
    """Base exception for all vaizify errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# API / transport errors
# ---------------------------------------------------------------------------

class VaizifyValidationError(VaizifyError):
    """The request payload or a helper argument was invalid.

    Context keys: ``api_code``, ``fields``, ``original_type`` (API
    envelopes) or ``value`` (local helpers).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class VaizifyAuthError(VaizifyError):
    """The API key was rejected (``JwtIncorrect`` / ``JwtExpired``).

    Context keys: ``api_code``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.AUTH_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class VaizifyPermissionError(VaizifyError):
    """The key lacks access to the resource (``PermissionDenied``).

    Context keys: ``api_code``, ``endpoint``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PERMISSION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class VaizifyNotFoundError(VaizifyError):
    """A referenced resource or entry does not exist.

    Raised for ``NotFound`` API envelopes and, locally, by the custom-field
    option helpers when an option id is absent from the supplied list.

    Context keys: ``resource_type``, ``resource_id``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=message,
            context=context,
            cause=cause,
        )


class VaizifyRateLimitError(VaizifyError):
    """The API reported ``RateLimitExceeded``.

    Context keys: ``api_code``, ``attempt``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.RATE_LIMITED,
            message=message,
            context=context,
            cause=cause,
        )


class VaizifyRetryExhaustedError(VaizifyError):
    """All retry attempts have been exhausted for a retryable request.

    Context keys: ``attempts``, ``last_status_code``, ``last_api_code``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.RETRY_EXHAUSTED,
            message=message,
            context=context,
            cause=cause,
        )


class VaizifyNetworkError(VaizifyError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``url``, ``attempt``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class VaizifyHTTPError(VaizifyError):
    """A non-success HTTP status arrived without an error envelope.

    Context keys: ``status_code``, ``url``, ``response_text``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.HTTP_ERROR,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")


# ---------------------------------------------------------------------------
# Document builder errors
# ---------------------------------------------------------------------------

class VaizifyBuildError(VaizifyError):
    """A document builder received an argument of the wrong shape.

    Context keys: ``builder``, ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.BUILD_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class VaizifyPayloadError(VaizifyError):
    """A block's embedded JSON payload could not be decoded.

    Context keys: ``node_type``, ``reason``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PAYLOAD_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# API envelope mapping
# ---------------------------------------------------------------------------

_ENVELOPE_ERRORS: dict[str, type[VaizifyError]] = {
    "JwtIncorrect": VaizifyAuthError,
    "JwtExpired": VaizifyAuthError,
    "ValidationError": VaizifyValidationError,
    "NotFound": VaizifyNotFoundError,
    "PermissionDenied": VaizifyPermissionError,
    "RateLimitExceeded": VaizifyRateLimitError,
}


def _field_name(field: Any) -> str:
    if isinstance(field, dict) and "name" in field:
        return str(field["name"])
    return str(field)


def error_from_envelope(
    envelope: dict[str, Any],
    endpoint: str | None = None,
) -> VaizifyError:
    """Build the matching :class:`VaizifyError` for an API error envelope.

    Parameters
    ----------
    envelope:
        The value of the ``"error"`` key of a response body.
    endpoint:
        The endpoint that produced the envelope, recorded in the context.

    Returns
    -------
    VaizifyError
        An instance of the mapped subclass, or a base :class:`VaizifyError`
        carrying the service code when the code is not recognised.
    """
    api_code = envelope.get("code") or "UnknownError"
    meta = envelope.get("meta") or {}
    fields = [_field_name(f) for f in envelope.get("fields") or []]

    message = meta.get("description") or api_code
    if fields:
        message = f"{message} (fields: {', '.join(fields)})"

    context: dict[str, Any] = {
        "api_code": api_code,
        "fields": fields,
        "original_type": envelope.get("originalType", ""),
    }
    if endpoint is not None:
        context["endpoint"] = endpoint

    error_cls = _ENVELOPE_ERRORS.get(api_code)
    if error_cls is None:
        return VaizifyError(code=ErrorCode.API_ERROR, message=message, context=context)
    return error_cls(message=message, context=context)
