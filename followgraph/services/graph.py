"""Read-only projections over the follow graph."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from followgraph.models.follow import Follow, FollowStatus
from followgraph.models.user import User
from followgraph.schemas.follow import (
    PendingRequestRead,
    RelationshipCounts,
    RelationshipSummary,
    UserSummary,
)
from followgraph.services import edge_store
from followgraph.utils.errors import require_id
from followgraph.utils.pagination import PageRequest


def _summaries(db: Session, stmt) -> list[UserSummary]:
    return [
        UserSummary(id=row.id, username=row.username, profile_pic=row.profile_pic)
        for row in db.execute(stmt)
    ]


def _accepted_neighbours(joined_on, owner_column, user_id: int, page: PageRequest):
    return (
        select(User.id, User.name.label("username"), User.profile_pic)
        .join(Follow, joined_on == User.id)
        .where(owner_column == user_id, Follow.status == FollowStatus.ACCEPTED)
        .order_by(User.id.asc())
        .limit(page.limit)
        .offset(page.offset)
    )


def list_following(db: Session, user_id: int, page: PageRequest) -> list[UserSummary]:
    """Users that ``user_id`` follows, by ascending user id."""

    user_id = require_id(user_id, "user_id")
    with edge_store.store_guard(db, "list_following"):
        return _summaries(db, _accepted_neighbours(Follow.target_id, Follow.user_id, user_id, page))


def list_followers(db: Session, user_id: int, page: PageRequest) -> list[UserSummary]:
    """Users following ``user_id``, by ascending user id."""

    user_id = require_id(user_id, "user_id")
    with edge_store.store_guard(db, "list_followers"):
        return _summaries(db, _accepted_neighbours(Follow.user_id, Follow.target_id, user_id, page))


def list_pending_requests(db: Session, user_id: int) -> list[PendingRequestRead]:
    """Requests awaiting ``user_id``'s decision, oldest first."""

    stmt = (
        select(
            Follow.id.label("edge_id"),
            Follow.user_id.label("requester_id"),
            Follow.created_at,
            User.name.label("username"),
            User.profile_pic,
        )
        .join(User, Follow.user_id == User.id)
        .where(Follow.target_id == user_id, Follow.status == FollowStatus.PENDING)
        .order_by(Follow.created_at.asc(), Follow.id.asc())
    )
    with edge_store.store_guard(db, "list_pending_requests"):
        rows = db.execute(stmt).all()
    return [
        PendingRequestRead(
            edge_id=row.edge_id,
            requester_id=row.requester_id,
            username=row.username,
            profile_pic=row.profile_pic,
            requested_at=row.created_at,
        )
        for row in rows
    ]


def relationship_summary(db: Session, user_id: int) -> RelationshipSummary:
    """Partition the outgoing edges of ``user_id`` into followed and requested targets."""

    user_id = require_id(user_id, "user_id")
    with edge_store.store_guard(db, "relationship_summary"):
        edges = edge_store.edges_from(db, user_id)
    return RelationshipSummary(
        following=[target for target, status in edges if status == FollowStatus.ACCEPTED],
        pending_requests=[target for target, status in edges if status == FollowStatus.PENDING],
    )


def relationship_counts(db: Session, user_id: int) -> RelationshipCounts:
    def _count(column) -> int:
        stmt = select(func.count(Follow.id)).where(column == user_id, Follow.status == FollowStatus.ACCEPTED)
        return int(db.execute(stmt).scalar_one())

    with edge_store.store_guard(db, "relationship_counts"):
        return RelationshipCounts(
            followers_count=_count(Follow.target_id),
            following_count=_count(Follow.user_id),
        )


__all__ = [
    "list_following",
    "list_followers",
    "list_pending_requests",
    "relationship_summary",
    "relationship_counts",
]
