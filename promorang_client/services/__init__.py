"""Domain services over the HTTP client."""

from promorang_client.services.content_detail import ContentDetailLoader, ContentDetailState
from promorang_client.services.content_service import ContentService, ContentUserStatus
from promorang_client.services.user_service import PublicProfile, UserService, Wallet

__all__ = [
    "ContentDetailLoader",
    "ContentDetailState",
    "ContentService",
    "ContentUserStatus",
    "PublicProfile",
    "UserService",
    "Wallet",
]
