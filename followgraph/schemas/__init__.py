"""Schema package exports."""
from .follow import (
    DecisionResult,
    FollowAction,
    FollowActionIn,
    FollowActionResult,
    FollowDecision,
    FollowDecisionIn,
    FollowersPage,
    FollowingPage,
    PendingRequestRead,
    PendingRequestsRead,
    RelationshipCounts,
    RelationshipSummary,
    UserSummary,
)
from .user import UserCreate, UserDirectoryPage, UserProfileRead, UserRead

__all__ = [
    "DecisionResult",
    "FollowAction",
    "FollowActionIn",
    "FollowActionResult",
    "FollowDecision",
    "FollowDecisionIn",
    "FollowersPage",
    "FollowingPage",
    "PendingRequestRead",
    "PendingRequestsRead",
    "RelationshipCounts",
    "RelationshipSummary",
    "UserSummary",
    "UserCreate",
    "UserDirectoryPage",
    "UserProfileRead",
    "UserRead",
]
