"""
Error Taxonomy and Translation

Every failure of a dispatched call is normalized into a single `ApiError` value:

    ErrorKind.TRANSPORT           - no response received (DNS, connection refused, timeout)
    ErrorKind.REMOTE              - non-2xx status, with or without a structured error body
    ErrorKind.MALFORMED_RESPONSE  - 2xx status but the body does not match the declared shape
    ErrorKind.INVALID_REQUEST     - caller misuse detected before any network call
    ErrorKind.CANCELLED           - the in-flight call was cancelled

The `translate_*` functions are the only place `ApiError` values are built, and
they never raise: whatever the failure looks like, the caller gets an ApiError.

Calls return an `ApiResult` holding either the decoded payload or the error.
Callers that prefer exceptions use `ApiResult.unwrap()`, which raises
`IntrinioAPIException` carrying the same ApiError.

Example error body (ServiceStack layout):
    {
      "ResponseStatus": {
        "ErrorCode": "ArgumentNullException",
        "Message": "Value cannot be null. Parameter name: Name",
        "Errors": [{"FieldName": "Name", "Message": "...", "ErrorCode": "NotEmpty"}]
      }
    }
"""

import asyncio
import json
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

import aiohttp
from pydantic import BaseModel, ConfigDict, Field, ValidationError


TRANSPORT_TIMEOUT = "TransportTimeout"
TRANSPORT_CONNECTION_ERROR = "TransportConnectionError"
TRANSPORT_ERROR = "TransportError"
MALFORMED_RESPONSE = "MalformedResponse"
REQUEST_CANCELLED = "RequestCancelled"
INVALID_REQUEST = "InvalidRequest"

# Sentinel status code for failures that never produced an HTTP response
NO_STATUS = 0


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    REMOTE = "remote"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_REQUEST = "invalid_request"
    CANCELLED = "cancelled"


class FieldError(BaseModel):
    """Validation error attributed to one named request parameter."""

    field: str
    message: str
    error_code: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ApiError(BaseModel):
    """
    Structured failure of a single call.

    Attributes:
        kind: Failure class (transport, remote, malformed response, invalid request, cancelled)
        status_code: HTTP status, or 0 when no response was received
        status_description: HTTP reason phrase (empty when no response was received)
        error_code: Machine-readable error code
        error_message: Human-readable message
        field_errors: Per-parameter validation errors (possibly empty)
        raw_body: Response body text, kept for diagnostics
    """

    kind: ErrorKind
    status_code: int = NO_STATUS
    status_description: str = ""
    error_code: str
    error_message: str
    field_errors: List[FieldError] = Field(default_factory=list)
    raw_body: str = ""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        status = f"HTTP {self.status_code} " if self.status_code else ""
        return f"{status}{self.error_code}: {self.error_message}"


class IntrinioAPIException(Exception):
    """Raised by `ApiResult.unwrap()` when the call failed."""

    def __init__(self, error: ApiError):
        super().__init__(str(error))
        self.error = error


class DecodeError(ValueError):
    """Response body could not be mapped onto the declared response shape."""


T = TypeVar("T")


class ApiResult(BaseModel, Generic[T]):
    """
    Outcome of a dispatched call: exactly one of `data` or `error` is set.

    Example:
        >>> result = await client.get_prices(identifier="AAPL")
        >>> if result.ok:
        ...     print(result.data.close)
        ... else:
        ...     print(result.error.error_code, result.error.error_message)
    """

    data: Optional[T] = None
    error: Optional[ApiError] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """
        Return the decoded payload.

        Raises:
            IntrinioAPIException: If the call failed
        """
        if self.error is not None:
            raise IntrinioAPIException(self.error)
        return self.data


# ============================================
# Body Text Helpers
# ============================================

def _body_text(body: Any) -> str:
    if body is None:
        return ""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8", errors="replace")
    return str(body)


def _first(mapping: Dict[str, Any], *keys: str) -> Optional[Any]:
    for key in keys:
        value = mapping.get(key)
        if value not in (None, ""):
            return value
    return None


def _field_errors(items: Any) -> List[FieldError]:
    if not isinstance(items, list):
        return []

    errors = []
    for item in items:
        if not isinstance(item, dict):
            continue
        field = _first(item, "field", "FieldName", "fieldName", "field_name", "parameter")
        message = _first(item, "message", "Message", "human", "error")
        if field is None:
            continue
        code = _first(item, "error_code", "ErrorCode", "errorCode", "code")
        errors.append(FieldError(
            field=str(field),
            message=str(message or ""),
            error_code=str(code) if code is not None else None
        ))
    return errors


def _parse_error_body(text: str) -> Optional[Dict[str, Any]]:
    """
    Extract error_code / message / field_errors from a structured error body.

    Returns None when the body is not a recognizable error document.
    """
    try:
        doc = json.loads(text)
    except (TypeError, ValueError):
        return None

    if not isinstance(doc, dict):
        return None

    # ServiceStack layout
    status = _first(doc, "ResponseStatus", "responseStatus", "response_status")
    if isinstance(status, dict):
        return {
            "error_code": _first(status, "ErrorCode", "errorCode", "error_code"),
            "message": _first(status, "Message", "message"),
            "field_errors": _field_errors(_first(status, "Errors", "errors")),
        }

    code = _first(doc, "error_code", "errorCode", "ErrorCode", "code")
    message = _first(doc, "message", "Message", "error_message", "errorMessage")
    field_errors = _field_errors(_first(doc, "field_errors", "fieldErrors", "errors"))

    # Intrinio layout: {"errors": [{"human": "...", "message": "..."}]}
    errors = doc.get("errors")
    if message is None and isinstance(errors, list):
        for item in errors:
            if isinstance(item, dict):
                message = _first(item, "human", "message")
                if message is not None:
                    break

    if message is None and isinstance(doc.get("error"), str):
        message = doc["error"]

    if code is None and message is None and not field_errors:
        return None

    return {"error_code": code, "message": message, "field_errors": field_errors}


# ============================================
# Translators
# ============================================

def translate_http_error(status: int, reason: Optional[str], body: Any) -> ApiError:
    """
    Translate a non-2xx response.

    Args:
        status: HTTP status code
        reason: HTTP reason phrase (e.g. "Bad Request")
        body: Raw response body (bytes or text)

    Returns:
        ApiError of kind REMOTE

    Example:
        >>> err = translate_http_error(400, "Bad Request", b'{"status": 400, '
        ...     b'"error_code": "ArgumentNullException", '
        ...     b'"message": "Value cannot be null. Parameter name: Name"}')
        >>> err.error_code, err.field_errors
        ('ArgumentNullException', [])
    """
    text = _body_text(body)
    description = reason or ""
    parsed = _parse_error_body(text) if text else None

    if parsed is not None:
        error_code = parsed["error_code"] or description or f"HTTP{status}"
        error_message = parsed["message"] or text
        field_errors = parsed["field_errors"]
    else:
        error_code = description or f"HTTP{status}"
        error_message = text or description
        field_errors = []

    return ApiError(
        kind=ErrorKind.REMOTE,
        status_code=status,
        status_description=description,
        error_code=str(error_code),
        error_message=str(error_message),
        field_errors=field_errors,
        raw_body=text
    )


def translate_transport_error(exc: BaseException) -> ApiError:
    """
    Translate a failure where no HTTP response was received.

    Timeouts map to TransportTimeout, DNS/connection failures to
    TransportConnectionError, anything else to TransportError.
    """
    if isinstance(exc, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        error_code = TRANSPORT_TIMEOUT
    elif isinstance(exc, (aiohttp.ClientConnectionError, ConnectionError, OSError)):
        error_code = TRANSPORT_CONNECTION_ERROR
    else:
        error_code = TRANSPORT_ERROR

    message = str(exc) or type(exc).__name__

    return ApiError(
        kind=ErrorKind.TRANSPORT,
        status_code=NO_STATUS,
        status_description=type(exc).__name__,
        error_code=error_code,
        error_message=message
    )


def translate_decode_error(exc: BaseException, body: Any, status: int = 200, reason: Optional[str] = None) -> ApiError:
    """Translate a 2xx response whose body does not match the declared shape."""
    return ApiError(
        kind=ErrorKind.MALFORMED_RESPONSE,
        status_code=status,
        status_description=reason or "",
        error_code=MALFORMED_RESPONSE,
        error_message=str(exc) or "Response body could not be decoded",
        raw_body=_body_text(body)
    )


def translate_cancelled() -> ApiError:
    return ApiError(
        kind=ErrorKind.CANCELLED,
        error_code=REQUEST_CANCELLED,
        error_message="Request was cancelled before a response was received"
    )


def translate_invalid_request(exc: BaseException) -> ApiError:
    """
    Translate caller misuse detected before any network call.

    Pydantic validation errors are mapped to one FieldError per failing field.
    """
    field_errors: List[FieldError] = []
    if isinstance(exc, ValidationError):
        for item in exc.errors():
            loc = ".".join(str(part) for part in item.get("loc", ())) or "__root__"
            field_errors.append(FieldError(
                field=loc,
                message=item.get("msg", ""),
                error_code=item.get("type")
            ))

    return ApiError(
        kind=ErrorKind.INVALID_REQUEST,
        error_code=INVALID_REQUEST,
        error_message=str(exc) or type(exc).__name__,
        field_errors=field_errors
    )
