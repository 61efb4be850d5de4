"""User endpoints."""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from followgraph.config import get_settings
from followgraph.db import get_db
from followgraph.models.api_key import ApiKey, ApiScope
from followgraph.models.user import User
from followgraph.schemas.user import UserCreate, UserDirectoryPage, UserProfileRead, UserRead
from followgraph.security import Principal, require_principal, require_scope
from followgraph.services import users as users_service
from followgraph.utils.pagination import resolve_page

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_scope({ApiScope.admin})),
) -> User:
    """Create a new user."""

    return users_service.create_user(db, payload)


@router.get("", response_model=UserDirectoryPage)
def list_users(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
) -> UserDirectoryPage:
    """Browse other members, excluding the caller."""

    settings = get_settings()
    page_request = resolve_page(
        page, limit, default_limit=settings.USERS_PAGE_LIMIT, max_limit=settings.MAX_PAGE_LIMIT
    )
    users = users_service.list_users(db, exclude_user_id=principal.user_id, page=page_request)
    return UserDirectoryPage(page=page_request.page, limit=page_request.limit, users=users)


@router.get("/{user_id}", response_model=UserProfileRead)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
) -> UserProfileRead:
    """Retrieve a user with follower and following counts."""

    return users_service.get_user_profile(db, user_id)
