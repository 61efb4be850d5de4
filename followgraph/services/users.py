"""User directory service."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from followgraph.models.user import User
from followgraph.schemas.follow import UserSummary
from followgraph.schemas.user import UserCreate, UserProfileRead
from followgraph.services import edge_store, graph
from followgraph.utils.errors import NotFoundError, ValidationError
from followgraph.utils.pagination import PageRequest

logger = logging.getLogger(__name__)


def create_user(db: Session, payload: UserCreate) -> User:
    """Create a new user."""

    user = User(**payload.model_dump())
    db.add(user)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise ValidationError("Could not create user.", code="USER_CREATE_FAILED") from exc
    db.commit()
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "account_type": user.account_type.value})
    return user


def get_user_profile(db: Session, user_id: int) -> UserProfileRead:
    """Return the public profile of ``user_id`` with relationship counts."""

    with edge_store.store_guard(db, "get_user_profile"):
        user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")

    counts = graph.relationship_counts(db, user.id)
    return UserProfileRead(
        id=user.id,
        username=user.name,
        profile_pic=user.profile_pic,
        account_type=user.account_type,
        followers_count=counts.followers_count,
        following_count=counts.following_count,
    )


def list_users(db: Session, *, exclude_user_id: int, page: PageRequest) -> list[UserSummary]:
    """Directory of every user except the caller, by ascending id."""

    stmt = (
        select(User)
        .where(User.id != exclude_user_id)
        .order_by(User.id.asc())
        .limit(page.limit)
        .offset(page.offset)
    )
    with edge_store.store_guard(db, "list_users"):
        users = db.scalars(stmt).all()
    return [UserSummary(id=user.id, username=user.name, profile_pic=user.profile_pic) for user in users]


__all__ = ["create_user", "get_user_profile", "list_users"]
