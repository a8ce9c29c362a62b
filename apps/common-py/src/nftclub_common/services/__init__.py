"""Common services package."""

from nftclub_common.services.password_hasher import PasswordHasher
from nftclub_common.services.static_response import StaticResponseProvider
from nftclub_common.services.user_service import UserAccessService
from nftclub_common.services.user_store import CosmosUserStore, InMemoryUserStore, UserStore

__all__ = [
    "CosmosUserStore",
    "InMemoryUserStore",
    "PasswordHasher",
    "StaticResponseProvider",
    "UserAccessService",
    "UserStore",
]
