"""Follow graph endpoints."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from followgraph.config import get_settings
from followgraph.db import get_db
from followgraph.schemas.follow import (
    DecisionResult,
    FollowActionIn,
    FollowActionResult,
    FollowDecisionIn,
    FollowersPage,
    FollowingPage,
    PendingRequestsRead,
    RelationshipSummary,
)
from followgraph.security import Principal, require_principal
from followgraph.services import follows as follows_service
from followgraph.services import graph as graph_service
from followgraph.utils.errors import AuthorizationError
from followgraph.utils.pagination import PageRequest, resolve_page

router = APIRouter(prefix="", tags=["follows"])


def _page(page: str | None = Query(default=None), limit: str | None = Query(default=None)) -> PageRequest:
    settings = get_settings()
    return resolve_page(page, limit, default_limit=settings.DEFAULT_PAGE_LIMIT, max_limit=settings.MAX_PAGE_LIMIT)


@router.post("/follow", response_model=FollowActionResult)
def follow_action(
    payload: FollowActionIn,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
) -> FollowActionResult:
    """Follow, request or unfollow ``target_id`` as the authenticated user."""

    return follows_service.apply_action(
        db,
        principal.user_id,
        payload.target_id,
        payload.action,
        payload.is_request,
    )


@router.post("/followreq/handle/{request_id}", response_model=DecisionResult)
def handle_follow_request(
    request_id: int,
    payload: FollowDecisionIn,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
) -> DecisionResult:
    """Approve or reject a follow request addressed to the authenticated user."""

    return follows_service.decide(db, request_id, principal.user_id, payload.action)


@router.get("/following/{user_id}", response_model=RelationshipSummary)
def relationship_summary(
    user_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
) -> RelationshipSummary:
    return graph_service.relationship_summary(db, user_id)


@router.get("/following/list/{user_id}", response_model=FollowingPage)
def following_list(
    user_id: int,
    page: PageRequest = Depends(_page),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
) -> FollowingPage:
    following = graph_service.list_following(db, user_id, page)
    return FollowingPage(page=page.page, limit=page.limit, following=following)


@router.get("/followers/list/{user_id}", response_model=FollowersPage)
def followers_list(
    user_id: int,
    page: PageRequest = Depends(_page),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
) -> FollowersPage:
    followers = graph_service.list_followers(db, user_id, page)
    return FollowersPage(page=page.page, limit=page.limit, followers=followers)


@router.get("/followreq/{user_id}", response_model=PendingRequestsRead)
def pending_requests(
    user_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_principal),
) -> PendingRequestsRead:
    """List the authenticated user's incoming requests, oldest first."""

    if user_id != principal.user_id:
        raise AuthorizationError("Follow requests not found", code="FOLLOW_REQUEST_NOT_FOUND")
    return PendingRequestsRead(pending_requests=graph_service.list_pending_requests(db, user_id))
