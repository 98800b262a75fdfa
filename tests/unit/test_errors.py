"""Unit tests for the ApiError taxonomy."""

from __future__ import annotations

import pytest

from promorang_client.errors import NETWORK_ERROR, UNKNOWN_ERROR, ApiError


class TestFromEnvelope:
    def test_full_envelope(self):
        body = {"error": {"code": "FORBIDDEN", "message": "Nope", "details": ["x"]}}
        err = ApiError.from_envelope(403, "Forbidden", body, endpoint="/api/x", method="GET")
        assert (err.code, err.message, err.status, err.details) == ("FORBIDDEN", "Nope", 403, ["x"])
        assert err.endpoint == "/api/x"
        assert err.method == "GET"

    def test_partial_envelope_keeps_server_fields(self):
        err = ApiError.from_envelope(422, "Unprocessable Entity", {"error": {"message": "Bad title"}})
        assert err.message == "Bad title"
        assert err.code == UNKNOWN_ERROR
        assert err.details == {"status": 422, "status_text": "Unprocessable Entity"}

    @pytest.mark.parametrize("body", [None, "text", [1, 2], {"error": "flat string"}, {"message": "x"}])
    def test_unusable_body_is_synthesized(self, body):
        err = ApiError.from_envelope(500, "Internal Server Error", body)
        assert err.code == UNKNOWN_ERROR
        assert err.message == "HTTP Error 500: Internal Server Error"
        assert err.status == 500
        assert err.is_server_error


class TestNetwork:
    def test_network_error_fields(self):
        err = ApiError.network(
            ConnectionResetError("reset by peer"),
            url="https://api.promorang.co/api/users/me",
            endpoint="/api/users/me",
            method="GET",
        )
        assert err.code == NETWORK_ERROR
        assert err.status == 0
        assert err.is_network_error
        assert err.details == {
            "url": "https://api.promorang.co/api/users/me",
            "method": "GET",
            "original_error": "reset by peer",
        }

    def test_exception_without_message_uses_type_name(self):
        err = ApiError.network(TimeoutError(), url="https://x")
        assert err.details["original_error"] == "TimeoutError"

    def test_status_zero_with_other_code_is_not_network(self):
        assert not ApiError("x", code="OTHER").is_network_error


class TestApiError:
    def test_class_defaults(self):
        err = ApiError()
        assert err.message == "API request failed"
        assert err.code == UNKNOWN_ERROR
        assert err.status == 0
        assert str(err) == "API request failed"

    def test_status_predicates(self):
        assert ApiError(status=401).is_unauthorized
        assert ApiError(status=404).is_not_found
        assert not ApiError(status=499).is_server_error
        assert ApiError(status=503).is_server_error

    def test_with_context_prefixes_message(self):
        original = ApiError("Not found", code="NOT_FOUND", status=404, endpoint="/api/content/1")
        wrapped = original.with_context("Failed to fetch content")
        assert wrapped.message == "Failed to fetch content: Not found"
        assert wrapped.code == "NOT_FOUND"
        assert wrapped.status == 404
        assert wrapped.endpoint == "/api/content/1"
        assert original.message == "Not found"

    def test_to_dict(self):
        data = ApiError("Boom", code="X", status=500, details={"a": 1}).to_dict()
        assert data["name"] == "ApiError"
        assert data["message"] == "Boom"
        assert data["code"] == "X"
        assert data["status"] == 500
        assert data["details"] == {"a": 1}
        assert data["timestamp"].endswith("+00:00")
