"""Header merging and request body preparation shared by every verb."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

JSON_CONTENT_TYPE = "application/json"

# Bodies sent exactly as given
_PASSTHROUGH_TYPES = (str, bytes, bytearray, memoryview, httpx.QueryParams)

HeaderSet = Mapping[str, str] | httpx.Headers | None


@dataclass
class FormData:
    """A multipart/form-data body.

    ``fields`` are plain form values; ``files`` map a field name to
    ``(filename, content, content_type)``. The transport generates the
    multipart boundary, so requests carrying a FormData never set
    Content-Type themselves.
    """

    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, tuple[str, bytes, str]] = field(default_factory=dict)

    def append(self, name: str, value: str) -> None:
        self.fields[name] = value

    def attach(self, name: str, filename: str, content: bytes, content_type: str) -> None:
        self.files[name] = (filename, content, content_type)

    def to_httpx_files(self) -> list[tuple[str, tuple[str | None, bytes | str] | tuple[str, bytes, str]]]:
        """Render as httpx ``files`` so plain fields are encoded as multipart too."""
        parts: list = [(name, (None, value)) for name, value in self.fields.items()]
        parts.extend(self.files.items())
        return parts


@dataclass
class PreparedBody:
    """Keyword arguments for ``httpx.AsyncClient.request``."""

    content: str | bytes | None = None
    files: list | None = None

    def as_request_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.files is not None:
            kwargs["files"] = self.files
        elif self.content is not None:
            kwargs["content"] = self.content
        return kwargs


def merge_headers(*header_sets: HeaderSet) -> httpx.Headers:
    """Merge header sets left to right; later sets win on conflicts.

    Keys compare case-insensitively, so ``content-type`` in a later set
    replaces ``Content-Type`` from an earlier one.
    """
    headers = httpx.Headers()
    for header_set in header_sets:
        if not header_set:
            continue
        for key, value in httpx.Headers(header_set).items():
            headers[key] = value
    return headers


def is_multipart(body: Any) -> bool:
    return isinstance(body, FormData)


def prepare_body(body: Any) -> PreparedBody:
    """Serialize a request body.

    Strings, binary buffers and ``httpx.QueryParams`` pass through untouched,
    ``FormData`` becomes a multipart upload, and anything else is JSON-encoded.
    """
    if body is None:
        return PreparedBody()

    if isinstance(body, FormData):
        return PreparedBody(files=body.to_httpx_files())

    if isinstance(body, _PASSTHROUGH_TYPES):
        if isinstance(body, httpx.QueryParams):
            return PreparedBody(content=str(body))
        if isinstance(body, (bytearray, memoryview)):
            return PreparedBody(content=bytes(body))
        return PreparedBody(content=body)

    return PreparedBody(content=json.dumps(body, default=str))
