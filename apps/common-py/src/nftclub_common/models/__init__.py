"""Common models package."""

from nftclub_common.models.user import User, UserCreate, UserRecord

__all__ = [
    "User",
    "UserCreate",
    "UserRecord",
]
