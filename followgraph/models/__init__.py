"""ORM models package."""
from .api_key import ApiKey, ApiScope
from .base import Base
from .follow import Follow, FollowStatus
from .user import AccountType, User

__all__ = [
    "AccountType",
    "ApiKey",
    "ApiScope",
    "Base",
    "Follow",
    "FollowStatus",
    "User",
]
