"""Backend transport: one HTTP call in, one Result out.

``ApiClient.execute`` runs three steps, each callable on its own:

1. ``encode``   - RequestSpec -> httpx.Request (URL, headers, body encoding)
2. ``dispatch`` - send under a deadline; expiry cancels the in-flight request
3. ``decode``   - validate the JSON envelope and classify the status

Every failure (timeout, network fault, non-2xx status, undecodable body)
becomes ``Err(ErrorInfo)``; ``execute`` never raises.

Example:
    >>> client = ApiClient("https://mecha.example.com", "mak_...")
    >>> result = await client.get("agents")
    >>> result.ok() if result.is_ok() else result.unwrap_err().message
"""

from __future__ import annotations

import asyncio
import json
import os
import re
from typing import Any

import httpx
from pydantic import BaseModel, SecretStr, ValidationError

from mecha_mcp.foundation.config import MechaSettings, get_settings
from mecha_mcp.foundation.errors import Err, ErrorCode, Ok, classify_exception, error_info
from mecha_mcp.runtime.observability import get_logger

from .models import FetchResult, FormData, HttpMethod, RequestSpec, parse_envelope

API_PREFIX = "api"
DEFAULT_TIMEOUT_MS = 10_000
UNEXPECTED_ERROR = "Unexpected Error"
UNKNOWN_ERROR = "Unknown error occurred"

_BOUNDARY = re.compile(r'boundary="?([^";]+)"?', re.IGNORECASE)

_log = get_logger("mecha.http")


class ApiClient:
    """Client for the Mecha Agent REST API.

    Holds only read-only configuration; every call opens and closes its own
    connection pool, so concurrent calls share no mutable state.

    Args:
        base_url: Backend origin; requests go to ``{base_url}/api/{path}``
        api_key: Bearer token attached to every request
        default_timeout_ms: Deadline used when a call does not pass one
        transport: Optional httpx transport (tests inject ``httpx.MockTransport``)
    """

    __slots__ = ("_base_url", "_api_key", "_default_timeout_ms", "_transport")

    def __init__(
        self,
        base_url: str,
        api_key: str | SecretStr,
        *,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if default_timeout_ms <= 0:
            raise ValueError("default_timeout_ms must be positive")
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key if isinstance(api_key, SecretStr) else SecretStr(api_key)
        self._default_timeout_ms = default_timeout_ms
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: MechaSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ApiClient:
        """Build from environment settings (loaded and cached on first use)."""
        settings = settings or get_settings()
        return cls(
            settings.server_url,
            settings.api_key,
            default_timeout_ms=settings.timeout_ms,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_timeout_ms(self) -> int:
        return self._default_timeout_ms

    def __repr__(self) -> str:
        return f"ApiClient(base_url={self._base_url!r}, default_timeout_ms={self._default_timeout_ms})"

    # ─────────────────────────────────────────────────────────────────
    # Step 1: Encode
    # ─────────────────────────────────────────────────────────────────

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{API_PREFIX}/{path.lstrip('/')}"

    def build_headers(self, headers: dict[str, str] | None = None, *, form: bool = False) -> httpx.Headers:
        """Default headers with caller overrides applied (case-insensitive).

        Form bodies get no default Content-Type so the multipart boundary is
        derived from the encoded body; an explicit caller value still wins.
        """
        merged = httpx.Headers({"Authorization": f"Bearer {self._api_key.get_secret_value()}"})
        if not form:
            merged["Content-Type"] = "application/json"
        if headers:
            merged.update(headers)
        return merged

    def encode(self, spec: RequestSpec) -> httpx.Request:
        """Build the outbound request. Body policy, first match wins:

        1. ``str``/``bytes``: sent verbatim
        2. ``FormData``: multipart, parts passed through untouched; an empty
           form is still a multipart body (the closing delimiter alone)
        3. anything else: JSON
        """
        body = spec.body
        url = self.url_for(spec.path)
        headers = self.build_headers(spec.headers, form=isinstance(body, FormData))

        match body:
            case None:
                return httpx.Request(spec.method, url, headers=headers)
            case str() | bytes():
                return httpx.Request(spec.method, url, headers=headers, content=body)
            case FormData() if not body:
                return httpx.Request(spec.method, url, headers=headers, content=_empty_form(headers))
            case FormData():
                return httpx.Request(spec.method, url, headers=headers, files=body.to_multipart())
            case BaseModel():
                return httpx.Request(spec.method, url, headers=headers, content=body.model_dump_json(by_alias=True))
            case _:
                return httpx.Request(spec.method, url, headers=headers, content=json.dumps(body))

    # ─────────────────────────────────────────────────────────────────
    # Step 2: Dispatch
    # ─────────────────────────────────────────────────────────────────

    async def dispatch(self, request: httpx.Request, timeout_ms: int) -> httpx.Response:
        """Send ``request`` and read the full body within ``timeout_ms``.

        Raises:
            TimeoutError: deadline expired; the request was cancelled
            httpx.TransportError: connection-level failure
        """
        # httpx's own timeouts are disabled: the deadline is the only clock
        async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
            async with asyncio.timeout(timeout_ms / 1000):
                return await client.send(request)

    # ─────────────────────────────────────────────────────────────────
    # Step 3: Decode
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def decode(response: httpx.Response) -> FetchResult:
        """Classify a response. Decode failures win over status classification."""
        try:
            envelope = parse_envelope(response.content)
        except ValidationError as e:
            return Err(error_info(_decode_message(e), code=ErrorCode.PARSE_ERROR))

        if not response.is_success:
            return Err(error_info(
                envelope.error or UNEXPECTED_ERROR,
                status_code=response.status_code,
                code=ErrorCode.HTTP_ERROR,
            ))
        return Ok(envelope.result)

    # ─────────────────────────────────────────────────────────────────
    # Entry Points
    # ─────────────────────────────────────────────────────────────────

    async def execute(
        self,
        path: str,
        method: HttpMethod = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> FetchResult:
        """Perform exactly one request and resolve to a Result."""
        timeout = timeout_ms if timeout_ms is not None else self._default_timeout_ms
        log = _log.bind(method=method, path=path)

        try:
            spec = RequestSpec(path=path, method=method, body=body, headers=headers or {}, timeout_ms=timeout)
            request = self.encode(spec)
            log.debug("request dispatched", timeout_ms=timeout)
            response = await self.dispatch(request, timeout)
        except (TimeoutError, httpx.TimeoutException):
            result: FetchResult = Err(error_info(f"Request timeout after {timeout}ms", code=ErrorCode.TIMEOUT))
        except (httpx.TransportError, OSError) as e:
            result = Err(error_info(str(e) or UNKNOWN_ERROR, code=ErrorCode.NETWORK_ERROR))
        except Exception as e:
            result = Err(error_info(str(e) or UNKNOWN_ERROR, code=classify_exception(e)))
        else:
            result = self.decode(response)
            log = log.bind(status=response.status_code)

        if (err := result.err()) is not None:
            log.warning("request failed", code=err.code.value, status_code=err.status_code, error=err.message)
        else:
            log.debug("request succeeded")
        return result

    async def get(self, path: str, *, headers: dict[str, str] | None = None,
                  timeout_ms: int | None = None) -> FetchResult:
        return await self.execute(path, "GET", headers=headers, timeout_ms=timeout_ms)

    async def post(self, path: str, body: Any = None, *, headers: dict[str, str] | None = None,
                   timeout_ms: int | None = None) -> FetchResult:
        return await self.execute(path, "POST", body, headers, timeout_ms)

    async def put(self, path: str, body: Any = None, *, headers: dict[str, str] | None = None,
                  timeout_ms: int | None = None) -> FetchResult:
        return await self.execute(path, "PUT", body, headers, timeout_ms)

    async def patch(self, path: str, body: Any = None, *, headers: dict[str, str] | None = None,
                    timeout_ms: int | None = None) -> FetchResult:
        return await self.execute(path, "PATCH", body, headers, timeout_ms)

    async def delete(self, path: str, body: Any = None, *, headers: dict[str, str] | None = None,
                     timeout_ms: int | None = None) -> FetchResult:
        return await self.execute(path, "DELETE", body, headers, timeout_ms)


def _decode_message(exc: ValidationError) -> str:
    """First validation message, e.g. 'Invalid JSON: expected value at line 1 column 1'."""
    errors = exc.errors(include_url=False)
    return str(errors[0]["msg"]) if errors else str(exc)


def _empty_form(headers: httpx.Headers) -> bytes:
    """Multipart body with no parts. Reuses a boundary the caller declared."""
    declared = headers.get("Content-Type")
    match = _BOUNDARY.search(declared or "")
    boundary = match.group(1) if match else os.urandom(16).hex()
    if declared is None:
        headers["Content-Type"] = f"multipart/form-data; boundary={boundary}"
    return f"--{boundary}--\r\n".encode()
