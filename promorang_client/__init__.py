"""Resilient HTTP client and response normalizers for the Promorang API."""

from promorang_client.config import ClientSettings, resolve_base_url
from promorang_client.errors import NETWORK_ERROR, UNKNOWN_ERROR, ApiError
from promorang_client.http import ApiClient, ApiResponse, FormData, RequestOptions
from promorang_client.main import PromorangClient, create_client
from promorang_client.services import ContentDetailLoader, ContentService, UserService

__all__ = [
    "NETWORK_ERROR",
    "UNKNOWN_ERROR",
    "ApiClient",
    "ApiError",
    "ApiResponse",
    "ClientSettings",
    "ContentDetailLoader",
    "ContentService",
    "FormData",
    "PromorangClient",
    "RequestOptions",
    "UserService",
    "create_client",
    "resolve_base_url",
]
