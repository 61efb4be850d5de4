"""Follow graph schemas."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from followgraph.models.follow import FollowStatus


class FollowAction(str, Enum):
    """Caller-initiated action on an edge; any follow intent is ``FOLLOW``."""

    FOLLOW = "follow"
    UNFOLLOW = "unfollow"

    @classmethod
    def parse(cls, value: "str | FollowAction") -> "FollowAction":
        if isinstance(value, FollowAction):
            return value
        if not isinstance(value, str):
            raise ValueError(f"unknown follow action: {value!r}")
        normalized = value.strip().lower()
        if normalized == "unfollow":
            return cls.UNFOLLOW
        if normalized in {"follow", "request"}:
            return cls.FOLLOW
        raise ValueError(f"unknown follow action: {value!r}")


class FollowDecision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"

    @property
    def target_status(self) -> FollowStatus:
        return FollowStatus.ACCEPTED if self is FollowDecision.APPROVE else FollowStatus.REJECTED


class FollowActionIn(BaseModel):
    target_id: int
    action: str
    is_request: bool | None = None


class FollowActionResult(BaseModel):
    success: bool
    status: FollowStatus | None = None
    message: str


class FollowDecisionIn(BaseModel):
    action: str = Field(description="approve or reject")


class DecisionResult(BaseModel):
    message: str


class UserSummary(BaseModel):
    id: int
    username: str
    profile_pic: str | None = None


class PendingRequestRead(BaseModel):
    edge_id: int
    requester_id: int
    username: str
    profile_pic: str | None = None
    requested_at: datetime


class FollowingPage(BaseModel):
    page: int
    limit: int
    following: list[UserSummary]


class FollowersPage(BaseModel):
    page: int
    limit: int
    followers: list[UserSummary]


class PendingRequestsRead(BaseModel):
    pending_requests: list[PendingRequestRead]


class RelationshipSummary(BaseModel):
    following: list[int]
    pending_requests: list[int]


class RelationshipCounts(BaseModel):
    followers_count: int
    following_count: int
