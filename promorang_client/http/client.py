"""HTTP client for the Promorang API.

Wraps ``httpx`` behind four verb methods (plus ``patch``) with one contract:

- headers merge as ``Content-Type`` default -> auth headers -> caller
  overrides, the caller winning on conflicts;
- bodies are JSON-encoded unless they are already a string, binary buffer,
  ``httpx.QueryParams`` or ``FormData`` (multipart omits Content-Type);
- cookies are sent unless the caller passes ``credentials="omit"``, and
  cookies set by responses are kept for later calls under the same rule;
- redirects are followed;
- non-2xx responses raise ``ApiError`` built from the error envelope and
  transport failures raise ``ApiError`` with ``code="NETWORK_ERROR"``,
  ``status=0``.

The client never retries and enforces no timeout: a failed call is reported
to the caller, who decides whether to retry, and cancellation belongs to
the caller as well. Each call opens its own ``httpx.AsyncClient``; only the
cookie jar outlives a call.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, Literal

import httpx
from pydantic import BaseModel

from promorang_client.config.base_url import resolve_base_url
from promorang_client.config.settings import ClientSettings
from promorang_client.errors import ApiError
from promorang_client.http.bodies import (
    JSON_CONTENT_TYPE,
    is_multipart,
    merge_headers,
    prepare_body,
)
from promorang_client.http.response import ApiResponse
from promorang_client.logging_config import redact_headers

logger = logging.getLogger(__name__)

AuthHeaderBuilder = Callable[[], Mapping[str, str] | None]


class RequestOptions(BaseModel):
    """Per-call overrides, the analogue of fetch's ``RequestInit``."""

    headers: dict[str, str] = {}
    credentials: Literal["include", "same-origin", "omit"] = "include"
    params: dict[str, Any] | None = None


class ApiClient:
    """JSON-over-HTTP client bound to one base URL.

    Parameters
    ----------
    base_url:
        API origin without the ``/api`` suffix (see ``resolve_base_url``).
    auth_headers:
        Callable returning the session headers for each request, e.g.
        ``{"Authorization": "Bearer ..."}``. Called once per request.
    cookies:
        Session cookie jar sent with every request unless credentials are
        omitted. Cookies set by responses are added to it.
    transport:
        Optional ``httpx`` transport, used by tests to mock the network.
    logger:
        Logger for request logging; defaults to this module's logger.
    debug:
        Log each request and response at DEBUG level, headers redacted.
    """

    def __init__(
        self,
        base_url: str,
        auth_headers: AuthHeaderBuilder | None = None,
        *,
        cookies: httpx.Cookies | Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
        debug: bool = False,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth_headers = auth_headers
        self._cookies = httpx.Cookies(cookies) if cookies is not None else None
        self._transport = transport
        self._logger = logger or logging.getLogger(__name__)
        self._debug = debug

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        auth_headers: AuthHeaderBuilder | None = None,
        **kwargs: Any,
    ) -> ApiClient:
        """Build a client whose base URL is resolved once from settings."""
        kwargs.setdefault("debug", settings.debug_http)
        return cls(resolve_base_url(settings), auth_headers, **kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    async def get(self, path: str, options: RequestOptions | None = None) -> ApiResponse[Any]:
        return await self.request("GET", path, options=options)

    async def post(
        self, path: str, body: Any = None, options: RequestOptions | None = None
    ) -> ApiResponse[Any]:
        return await self.request("POST", path, body, options)

    async def put(
        self, path: str, body: Any = None, options: RequestOptions | None = None
    ) -> ApiResponse[Any]:
        return await self.request("PUT", path, body, options)

    async def patch(
        self, path: str, body: Any = None, options: RequestOptions | None = None
    ) -> ApiResponse[Any]:
        return await self.request("PATCH", path, body, options)

    async def delete(self, path: str, options: RequestOptions | None = None) -> ApiResponse[Any]:
        return await self.request("DELETE", path, options=options)

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    def build_url(self, path: str) -> str:
        if not path or not path.strip():
            raise ValueError("Request path must not be empty")
        path = path.strip()
        if not path.startswith("/"):
            path = "/" + path
        return f"{self._base_url}{path}"

    def build_headers(self, body: Any, options: RequestOptions) -> httpx.Headers:
        """Content-Type default, then auth headers, then caller overrides."""
        default = None if is_multipart(body) else {"Content-Type": JSON_CONTENT_TYPE}
        auth = self._auth_headers() if self._auth_headers is not None else None
        return merge_headers(default, auth, options.headers)

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[Any]:
        """Send one request and return its parsed result, raising ``ApiError`` on failure."""
        options = options or RequestOptions()
        url = self.build_url(path)
        headers = self.build_headers(body, options)
        prepared = prepare_body(body)
        cookies = None if options.credentials == "omit" else self._cookies

        if self._debug:
            self._logger.debug(
                "%s %s",
                method,
                url,
                extra={"method": method, "url": url, "headers": redact_headers(headers)},
            )

        started = time.monotonic()
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                cookies=cookies,
                timeout=None,
                follow_redirects=True,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    headers=headers,
                    params=options.params,
                    **prepared.as_request_kwargs(),
                )
        except (httpx.RequestError, OSError) as exc:
            self._logger.warning(
                "Network error on %s %s: %s",
                method,
                path,
                exc,
                extra={"method": method, "url": url, "status": 0, "code": "NETWORK_ERROR"},
            )
            raise ApiError.network(exc, url=url, endpoint=path, method=method) from exc

        duration_ms = round((time.monotonic() - started) * 1000, 2)
        if options.credentials != "omit":
            self._store_cookies(response)
        return self._handle_response(response, method, path, duration_ms)

    def _store_cookies(self, response: httpx.Response) -> None:
        """Keep Set-Cookie values from the response and any redirect hops."""
        if self._cookies is None:
            self._cookies = httpx.Cookies()
        for hop in (*response.history, response):
            self._cookies.extract_cookies(hop)

    def _handle_response(
        self,
        response: httpx.Response,
        method: str,
        path: str,
        duration_ms: float,
    ) -> ApiResponse[Any]:
        data = parse_json_body(response)

        if self._debug:
            self._logger.debug(
                "%s %s -> %d",
                method,
                path,
                response.status_code,
                extra={
                    "method": method,
                    "endpoint": path,
                    "status": response.status_code,
                    "duration_ms": duration_ms,
                },
            )

        if not response.is_success:
            error = ApiError.from_envelope(
                response.status_code,
                response.reason_phrase,
                data,
                endpoint=path,
                method=method,
            )
            self._logger.error(
                "API error [%d] on %s %s: %s",
                response.status_code,
                method,
                path,
                error.message,
                extra={
                    "method": method,
                    "endpoint": path,
                    "status": response.status_code,
                    "code": error.code,
                    "duration_ms": duration_ms,
                },
            )
            raise error

        return ApiResponse[Any](data=data, status=response.status_code)


def parse_json_body(response: httpx.Response) -> Any:
    """Parse a JSON body, treating empty or non-JSON bodies as absent."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.debug("Response body is not JSON (status %d)", response.status_code)
        return None
