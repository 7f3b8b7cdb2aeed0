"""
Intrinio REST API Client

This module provides the generic async dispatcher for the Intrinio API.
It handles:
- HTTP Basic Authentication on every request
- Parameter encoding (query string for GET, form body for POST)
- Decoding 2xx bodies into the endpoint's declared response shape
- Normalizing every failure into an ApiError

API Documentation:
    http://docs.intrinio.com/#introduction

Behavior:
    - Exactly one network round trip per call; nothing is retried
    - No timeout is imposed unless one is configured; callers needing bounded
      latency wrap calls in asyncio.wait_for / asyncio.timeout
    - The client keeps no per-call state, so concurrent calls need no locking

Usage:
    async with IntrinioAPIClient("user", "secret") as client:
        result = await client.call("prices", GetPrices(identifier="AAPL"))
        if result.ok:
            print(result.data.close)
"""

import asyncio
import base64
import time
from typing import Any, Dict, Optional, Tuple

import aiohttp
from pydantic import BaseModel

from core.config import Credentials, settings
from core.logging import get_logger, log_api_request, log_api_response
from intrinio.catalog import EndpointBinding, HttpMethod, binding_for_request, get_binding
from intrinio.decoder import decode
from intrinio.encoder import Params, encode
from intrinio.errors import (
    ApiResult,
    DecodeError,
    translate_cancelled,
    translate_decode_error,
    translate_http_error,
    translate_invalid_request,
    translate_transport_error,
)


def encode_basic_auth(username: str, password: str, encoding: str = "latin1") -> str:
    """
    Build the value of an HTTP Basic `Authorization` header.

    Raises:
        ValueError: If the username contains ':' or a character outside `encoding`
    """
    if ":" in username:
        raise ValueError("Basic Auth username cannot contain ':'")
    token = base64.b64encode(f"{username}:{password}".encode(encoding)).decode("ascii")
    return f"Basic {token}"


class IntrinioAPIClient:
    """
    Async HTTP dispatcher for the Intrinio REST API

    Attributes:
        BASE_URL: Default Intrinio API origin
        base_url: Origin every request path is appended to
        timeout: Optional total timeout per request in seconds
        session: aiohttp ClientSession for HTTP requests
        logger: Logger instance for debugging

    Example:
        >>> async with IntrinioAPIClient("user", "secret") as client:
        ...     result = await client.dispatch(get_binding("prices"), GetPrices(identifier="AAPL"))
        ...     price = result.unwrap()

    Notes:
        - Uses context manager for automatic session cleanup
        - Credentials are immutable and never logged
        - Failures are returned as ApiResult.error, not raised
    """

    BASE_URL = "https://api.intrinio.com"

    def __init__(
        self,
        username: str,
        password: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize the Intrinio API client.

        Args:
            username: Intrinio API username
            password: Intrinio API password
            base_url: API origin (defaults to BASE_URL)
            timeout: Total timeout per request in seconds (None = transport default)

        Raises:
            ValueError: If the username contains ':' (not representable in Basic Auth)
        """
        self._credentials = Credentials(username=username, password=password)
        self._authorization = encode_basic_auth(
            self._credentials.username,
            self._credentials.password.get_secret_value()
        )

        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.logger = get_logger(__name__)
        self.session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def from_settings(cls, config=None):
        """
        Build a client from pydantic settings (.env / environment).

        Raises:
            ValueError: If credentials are not configured
        """
        config = config or settings
        credentials = config.get_credentials()
        return cls(
            username=credentials.username,
            password=credentials.password.get_secret_value(),
            base_url=config.intrinio_base_url,
            timeout=config.request_timeout
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, username={self._credentials.username!r})"

    # ============================================
    # Context Manager for Session Management
    # ============================================

    async def __aenter__(self):
        """
        Enter async context - creates HTTP session.

        Returns:
            Self for use in async with statement
        """
        self.session = aiohttp.ClientSession()
        self.logger.debug(f"{type(self).__name__} session created")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """
        Exit async context - closes HTTP session.
        """
        if self.session:
            await self.session.close()
            self.session = None
            self.logger.debug(f"{type(self).__name__} session closed")

    # ============================================
    # Transport
    # ============================================

    def _headers(self) -> Dict[str, str]:
        """Headers sent on every request, Authorization included."""
        return {
            "Accept": "application/json",
            "Authorization": self._authorization,
        }

    async def _send(self, method: HttpMethod, url: str, params: Params) -> Tuple[int, str, bytes]:
        """
        Perform one HTTP exchange.

        Returns:
            (status, reason, body) of the response

        Raises:
            aiohttp.ClientError, asyncio.TimeoutError: If no response was received
            RuntimeError: If the session was not opened with 'async with'
        """
        if not self.session:
            raise RuntimeError("Client session not initialized. Use 'async with' statement.")

        kwargs: Dict[str, Any] = {"headers": self._headers()}
        if self.timeout:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout)

        if method == HttpMethod.GET:
            request_ctx = self.session.get(url, params=params, **kwargs)
        else:
            request_ctx = self.session.post(url, data=params, **kwargs)

        async with request_ctx as resp:
            body = await resp.read()
            return resp.status, resp.reason or "", body

    # ============================================
    # Dispatch
    # ============================================

    async def dispatch(self, binding: EndpointBinding, request: BaseModel) -> ApiResult:
        """
        Send one request and return the decoded payload or an ApiError.

        Args:
            binding: Endpoint metadata (path, method, request/response types)
            request: Request descriptor of type binding.request_type

        Returns:
            ApiResult with `data` on success, `error` otherwise

        Raises:
            RuntimeError: If the session was not opened with 'async with'
            asyncio.CancelledError: If the calling task itself is cancelled

        Error Mapping:
            - Wrong descriptor type / unencodable value -> INVALID_REQUEST (no network call)
            - Connection, DNS, timeout                  -> TRANSPORT (status 0)
            - Non-2xx status                            -> REMOTE
            - 2xx with body not matching binding.shape  -> MALFORMED_RESPONSE
            - Transport cancelled, task not cancelling  -> CANCELLED
        """
        if not self.session:
            raise RuntimeError("Client session not initialized. Use 'async with' statement.")

        if not isinstance(request, binding.request_type):
            return ApiResult(error=translate_invalid_request(TypeError(
                f"Endpoint '{binding.name}' expects {binding.request_type.__name__}, "
                f"got {type(request).__name__}"
            )))

        try:
            params = encode(request)
        except (TypeError, ValueError) as e:
            return ApiResult(error=translate_invalid_request(e))

        method = binding.method.value
        url = f"{self.base_url}{binding.path}"
        log_api_request(method, binding.path, params)

        started = time.monotonic()
        try:
            status, reason, body = await self._send(binding.method, url, params)
        except asyncio.CancelledError:
            self.logger.warning(f"{method} {binding.path} cancelled")
            task = asyncio.current_task()
            # A cancelled task must stay cancelled
            if task is not None and task.cancelling():
                raise
            return ApiResult(error=translate_cancelled())
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            self.logger.error(f"Request failed on {binding.path}: {type(e).__name__}: {e}")
            return ApiResult(error=translate_transport_error(e))

        log_api_response(method, binding.path, status, time.monotonic() - started)

        if 200 <= status < 300:
            try:
                data = decode(body, binding.response_type, binding.shape)
            except DecodeError as e:
                self.logger.warning(f"Malformed response on {binding.path}: {e}")
                return ApiResult(error=translate_decode_error(e, body, status, reason))
            return ApiResult(data=data)

        error = translate_http_error(status, reason, body)
        self.logger.warning(f"HTTP {status} on {binding.path}: {error.error_code}: {error.error_message}")
        return ApiResult(error=error)

    async def call(self, operation: str, request: BaseModel) -> ApiResult:
        """
        Dispatch a request to a named catalog operation.

        Raises:
            KeyError: If the operation is not in the catalog
        """
        return await self.dispatch(get_binding(operation), request)

    async def execute(self, request: BaseModel) -> ApiResult:
        """
        Dispatch a request to the endpoint that accepts its descriptor type.

        Raises:
            KeyError: If no endpoint accepts this descriptor type
        """
        return await self.dispatch(binding_for_request(request), request)
