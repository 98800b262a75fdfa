"""HTTP transport layer: client, header/body utilities and response envelopes."""

from promorang_client.http.bodies import FormData, merge_headers, prepare_body
from promorang_client.http.client import ApiClient, AuthHeaderBuilder, RequestOptions
from promorang_client.http.response import ApiResponse, ErrorInfo, unwrap_resource

__all__ = [
    "ApiClient",
    "ApiResponse",
    "AuthHeaderBuilder",
    "ErrorInfo",
    "FormData",
    "RequestOptions",
    "merge_headers",
    "prepare_body",
    "unwrap_resource",
]
