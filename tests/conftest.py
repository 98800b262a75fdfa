"""Shared test fixtures for the client test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from promorang_client.http.client import ApiClient

BASE_URL = "https://api.test.promorang.co"
Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Keep settings independent of the developer's environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_client_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove PROMORANG_* variables so ClientSettings sees only test input."""
    for key in (
        "PROMORANG_ENVIRONMENT",
        "PROMORANG_API_URL",
        "PROMORANG_BROWSER_ORIGIN",
        "PROMORANG_PRODUCTION_API_URL",
        "PROMORANG_DEFAULT_API_URL",
        "PROMORANG_LOG_LEVEL",
        "PROMORANG_LOG_JSON",
        "PROMORANG_DEBUG_HTTP",
        "PROMORANG_FALLBACKS_PATH",
    ):
        monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Mock transport
# ---------------------------------------------------------------------------

class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def paths(self) -> list[tuple[str, str]]:
        return [(request.method, request.url.path) for request in self.requests]


@pytest.fixture
def routes() -> Callable[[dict[tuple[str, str], Any]], Handler]:
    """Build a handler answering by ``(method, path)``.

    Table values are an ``httpx.Response``, an exception to raise, or a
    ``(status, json_body)`` pair. Unknown routes get a 404 error envelope.
    """

    def _build(table: dict[tuple[str, str], Any]) -> Handler:
        def _handler(request: httpx.Request) -> httpx.Response:
            outcome = table.get((request.method, request.url.path))
            if outcome is None:
                return httpx.Response(
                    404, json={"error": {"code": "NOT_FOUND", "message": "No route"}}
                )
            if isinstance(outcome, Exception):
                raise outcome
            if isinstance(outcome, tuple):
                status, body = outcome
                return httpx.Response(status, json=body)
            return outcome

        return _handler

    return _build


@pytest.fixture
def make_client() -> Callable[..., tuple[ApiClient, RecordingTransport]]:
    """Factory building an ApiClient wired to a recording mock transport."""

    def _make(
        handler: Handler,
        auth_headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> tuple[ApiClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = ApiClient(
            BASE_URL,
            (lambda: auth_headers) if auth_headers is not None else None,
            transport=transport,
            **kwargs,
        )
        return client, transport

    return _make
