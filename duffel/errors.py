"""Exception hierarchy and the decoder for ``{"errors": [...]}`` bodies."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError as PydanticValidationError,
    ValidationInfo,
    field_validator,
)

from duffel.ratelimit import RateLimit


class ErrorType(str, Enum):
    """Coarse error classes the API reports in ``errors[].type``."""

    AIRLINE_ERROR = "airline_error"
    API_ERROR = "api_error"
    AUTHENTICATION_ERROR = "authentication_error"
    INVALID_REQUEST_ERROR = "invalid_request_error"
    INVALID_STATE_ERROR = "invalid_state_error"
    RATE_LIMIT_ERROR = "rate_limit_error"
    VALIDATION_ERROR = "validation_error"


class ErrorCode(str, Enum):
    """Commonly branched-on values of ``errors[].code``; the API sends many more."""

    AIRLINE_INTERNAL = "airline_internal"
    AIRLINE_UNKNOWN = "airline_unknown"
    ALREADY_CANCELLED = "already_cancelled"
    BAD_REQUEST = "bad_request"
    DUPLICATE_BOOKING = "duplicate_booking"
    EXPIRED_ACCESS_TOKEN = "expired_access_token"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    INVALID_AUTHORIZATION_HEADER = "invalid_authorization_header"
    INVALID_DATA_PARAM = "invalid_data_param"
    INVALID_TOKEN = "invalid_token"
    INVALID_VERSION_HEADER = "invalid_version_header"
    MISSING_AUTHORIZATION_HEADER = "missing_authorization_header"
    NOT_FOUND = "not_found"
    OFFER_NO_LONGER_AVAILABLE = "offer_no_longer_available"
    PRICE_CHANGED = "price_changed"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    UNSUPPORTED_VERSION = "unsupported_version"
    VALIDATION_REQUIRED = "validation_required"
    UNKNOWN = "unknown"


class ErrorCategory(str, Enum):
    """Client-side taxonomy every failure maps onto."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RATE_LIMIT = "rate_limit"
    AIRLINE = "airline"
    SERVER = "server"
    NETWORK = "network"
    DECODE = "decode"


UNKNOWN_ERROR_TITLE = "Unknown error"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"

# Type assumed for a non-2xx response that carries no usable errors array.
_STATUS_TYPES: dict[int, ErrorType] = {
    400: ErrorType.INVALID_REQUEST_ERROR,
    401: ErrorType.AUTHENTICATION_ERROR,
    403: ErrorType.AUTHENTICATION_ERROR,
    404: ErrorType.INVALID_REQUEST_ERROR,
    422: ErrorType.VALIDATION_ERROR,
    429: ErrorType.RATE_LIMIT_ERROR,
}


class ErrorSource(BaseModel):
    """Where in the request a validation error points."""

    model_config = ConfigDict(frozen=True)

    field: str | None = None
    pointer: str | None = None
    parameter: str | None = None


class ErrorDetail(BaseModel):
    """One entry of the ``errors`` array."""

    model_config = ConfigDict(frozen=True)

    type: str = ErrorType.API_ERROR.value
    code: str = ErrorCode.UNKNOWN.value
    title: str = ""
    message: str = ""
    documentation_url: str | None = None
    source: ErrorSource | None = None

    @field_validator("type", "code", "title", "message", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class ErrorMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: int | None = None
    request_id: str | None = None


class _ErrorEnvelope(BaseModel):
    errors: list[ErrorDetail] = []
    meta: ErrorMeta | None = None


class DuffelError(Exception):
    """Base exception for everything this library raises."""

    category: ErrorCategory = ErrorCategory.SERVER


class APIError(DuffelError):
    """An error reported by the Duffel API.

    The first entry of :attr:`errors` is the primary one; its ``type`` and
    ``code`` are what :meth:`is_type` and :meth:`is_code` check.
    """

    def __init__(
        self,
        status_code: int,
        errors: list[ErrorDetail],
        request_id: str | None = None,
    ) -> None:
        if not errors:
            errors = [synthesize_error(status_code)]
        self.status_code = status_code
        self.errors = errors
        self.request_id = request_id
        super().__init__(self._render())

    @property
    def primary(self) -> ErrorDetail:
        return self.errors[0]

    @property
    def type(self) -> str:
        return self.primary.type

    @property
    def code(self) -> str:
        return self.primary.code

    @property
    def title(self) -> str:
        return self.primary.title

    @property
    def message(self) -> str:
        return self.primary.message

    @property
    def source(self) -> ErrorSource | None:
        return self.primary.source

    @property
    def retryable(self) -> bool:
        return self.status_code == 429 or self.status_code >= 500

    def is_type(self, error_type: ErrorType | str) -> bool:
        return self.type == _value(error_type)

    def is_code(self, code: ErrorCode | str) -> bool:
        return self.code == _value(code)

    def _render(self) -> str:
        return f"duffel: {self.message or self.title}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code}, "
            f"type={self.type!r}, code={self.code!r})"
        )


class ValidationError(APIError):
    """The request was rejected as invalid (bad params, invalid state)."""

    category = ErrorCategory.VALIDATION


class AuthenticationError(APIError):
    """The access token is missing, malformed or expired."""

    category = ErrorCategory.AUTHENTICATION


class AuthorizationError(APIError):
    """The token is valid but may not perform this action (403)."""

    category = ErrorCategory.AUTHORIZATION


class RateLimitError(APIError):
    """Raised on ``rate_limit_error``; carries the window the server reported."""

    category = ErrorCategory.RATE_LIMIT

    def __init__(
        self,
        status_code: int,
        errors: list[ErrorDetail],
        request_id: str | None = None,
        rate_limit: RateLimit | None = None,
    ) -> None:
        super().__init__(status_code, errors, request_id)
        self.rate_limit = rate_limit


class AirlineError(APIError):
    """The airline behind the request failed or refused it."""

    category = ErrorCategory.AIRLINE


class ServerError(APIError):
    """Duffel itself failed, or the error type is not one we recognise."""

    category = ErrorCategory.SERVER


class NetworkError(DuffelError):
    """The request never produced an HTTP response (connect error, timeout)."""

    category = ErrorCategory.NETWORK

    def __init__(self, message: str, *, method: str = "", url: str = "") -> None:
        self.method = method
        self.url = url
        super().__init__(f"duffel: network error: {message}")


class DecodeError(DuffelError):
    """A response whose body could not be read or did not match the expected shape.

    ``status_code`` is ``None`` when the body failed to decompress before a
    status could be recorded.
    """

    category = ErrorCategory.DECODE

    def __init__(self, message: str, *, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"duffel: could not decode response: {message}")


_TYPE_CLASSES: dict[str, type[APIError]] = {
    ErrorType.VALIDATION_ERROR.value: ValidationError,
    ErrorType.INVALID_REQUEST_ERROR.value: ValidationError,
    ErrorType.INVALID_STATE_ERROR.value: ValidationError,
    ErrorType.AUTHENTICATION_ERROR.value: AuthenticationError,
    ErrorType.RATE_LIMIT_ERROR.value: RateLimitError,
    ErrorType.AIRLINE_ERROR.value: AirlineError,
    ErrorType.API_ERROR.value: ServerError,
}


def _value(item: Enum | str) -> str:
    return item.value if isinstance(item, Enum) else item


def synthesize_error(status_code: int) -> ErrorDetail:
    """The stand-in used when a non-2xx body carries no usable ``errors``."""
    return ErrorDetail(
        type=_STATUS_TYPES.get(status_code, ErrorType.API_ERROR).value,
        code=ErrorCode.UNKNOWN.value,
        title=UNKNOWN_ERROR_TITLE,
        message=UNKNOWN_ERROR_MESSAGE,
    )


def _error_class(error_type: str, status_code: int) -> type[APIError]:
    exc_cls = _TYPE_CLASSES.get(error_type, ServerError)
    if exc_cls is AuthenticationError and status_code == 403:
        return AuthorizationError
    return exc_cls


def _parse_envelope(body: bytes | str | Mapping[str, Any]) -> _ErrorEnvelope:
    if isinstance(body, (bytes, str)):
        try:
            body = json.loads(body)
        except (ValueError, UnicodeDecodeError):
            return _ErrorEnvelope()
    if not isinstance(body, Mapping):
        return _ErrorEnvelope()

    # Entries are validated one by one; a malformed entry is dropped alone.
    errors: list[ErrorDetail] = []
    raw_errors = body.get("errors")
    if isinstance(raw_errors, list):
        for entry in raw_errors:
            try:
                errors.append(ErrorDetail.model_validate(entry))
            except PydanticValidationError:
                continue

    meta = None
    try:
        meta = ErrorMeta.model_validate(body.get("meta") or {})
    except PydanticValidationError:
        pass
    return _ErrorEnvelope(errors=errors, meta=meta)


def decode_error(
    status_code: int,
    body: bytes | str | Mapping[str, Any],
    *,
    request_id: str | None = None,
    rate_limit: RateLimit | None = None,
) -> APIError:
    """Turn an error response body into an :class:`APIError` subclass.

    Never fails: a body that is empty, not JSON, or lacks ``errors`` yields
    a synthesised error typed after *status_code*.
    """
    envelope = _parse_envelope(body)
    errors = envelope.errors or [synthesize_error(status_code)]
    if envelope.meta is not None and envelope.meta.request_id:
        request_id = envelope.meta.request_id

    exc_cls = _error_class(errors[0].type, status_code)
    if exc_cls is RateLimitError:
        return RateLimitError(status_code, errors, request_id, rate_limit)
    return exc_cls(status_code, errors, request_id)
