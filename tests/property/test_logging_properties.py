"""Property tests for structured logging and secret redaction."""

from __future__ import annotations

import json
import logging

from hypothesis import given, settings, strategies as st

from promorang_client.logging_config import REDACTED, JsonFormatter


# --- Strategies ---

messages = st.text(min_size=1, max_size=100, alphabet="abcdefghijklmnopqrstuvwxyz0123456789 ._-/")
levels = st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
# Prefixed so a secret can never coincide with other output text
secrets = st.text(
    alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    min_size=8,
    max_size=40,
).map(lambda s: f"sk_{s}")
secret_keys = st.sampled_from(["authorization", "Authorization", "cookie", "token", "password", "api_key"])
separators = st.sampled_from(["=", ": ", ":"])
sensitive_headers = st.sampled_from(
    ["Authorization", "Cookie", "Set-Cookie", "X-API-Key", "X-Session-Token", "x-auth-token"]
)


def _make_record(message: str, level: str = "INFO", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="promorang_client.http.client",
        level=getattr(logging, level),
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@settings(max_examples=100)
@given(message=messages, level=levels)
def test_structured_log_format(message: str, level: str) -> None:
    entry = json.loads(JsonFormatter().format(_make_record(message, level)))
    assert entry["level"] == level
    assert entry["logger"] == "promorang_client.http.client"
    assert entry["message"] == message
    assert "timestamp" in entry


@settings(max_examples=200)
@given(prefix=messages, key=secret_keys, sep=separators, secret=secrets)
def test_secrets_in_messages_are_redacted(prefix: str, key: str, sep: str, secret: str) -> None:
    output = JsonFormatter().format(_make_record(f"{prefix} {key}{sep}{secret}"))
    assert secret not in output
    assert REDACTED in output


@settings(max_examples=200)
@given(name=sensitive_headers, secret=secrets)
def test_sensitive_headers_are_redacted(name: str, secret: str) -> None:
    record = _make_record("GET /api/users/me", headers={name: secret, "Accept": "application/json"})
    entry = json.loads(JsonFormatter().format(record))
    assert entry["headers"][name] == REDACTED
    assert entry["headers"]["Accept"] == "application/json"
    assert secret not in json.dumps(entry)


@settings(max_examples=100)
@given(secret=secrets)
def test_bearer_tokens_are_redacted(secret: str) -> None:
    output = JsonFormatter().format(_make_record(f"authorization: Bearer {secret}"))
    assert secret not in output
