"""Follow state machine: caller actions and target-side decisions."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from followgraph.config import get_settings
from followgraph.models.follow import Follow, FollowStatus
from followgraph.models.user import User
from followgraph.schemas.follow import (
    DecisionResult,
    FollowAction,
    FollowActionResult,
    FollowDecision,
)
from followgraph.services import edge_store
from followgraph.utils.errors import NotFoundError, ValidationError, require_id

logger = logging.getLogger(__name__)


def parse_action(value: str | FollowAction | None) -> FollowAction:
    if value is None:
        raise ValidationError("Missing or invalid fields", details={"field": "action"})
    try:
        return FollowAction.parse(value)
    except ValueError as exc:
        raise ValidationError("Missing or invalid fields", details={"field": "action"}) from exc


def parse_decision(value: str | FollowDecision | None) -> FollowDecision:
    if isinstance(value, FollowDecision):
        return value
    if not isinstance(value, str):
        raise ValidationError("Invalid request", code="INVALID_DECISION", details={"field": "action"})
    try:
        return FollowDecision(value.strip().lower())
    except ValueError as exc:
        raise ValidationError("Invalid request", code="INVALID_DECISION", details={"field": "action"}) from exc


def apply_action(
    db: Session,
    source_id: int,
    target_id: int,
    action: str | FollowAction,
    is_request: bool | None = None,
) -> FollowActionResult:
    """Apply a follow, request or unfollow from ``source_id`` towards ``target_id``.

    A previously rejected edge is always re-sent as a request first, whatever
    the action. Unfollow deletes the edge whatever its status and succeeds even
    when nothing existed. Otherwise the edge is inserted as ``pending`` for
    requests and ``accepted`` for direct follows; an existing edge is reported
    back without an error.
    """

    source_id = require_id(source_id, "user_id")
    target_id = require_id(target_id, "target_id")
    parsed_action = parse_action(action)
    if source_id == target_id and not get_settings().ALLOW_SELF_FOLLOW:
        raise ValidationError("Users cannot follow themselves.", code="SELF_FOLLOW_FORBIDDEN")

    with edge_store.store_guard(db, "apply_action"):
        rejected = edge_store.get_edge(db, source_id, target_id, status=FollowStatus.REJECTED)
        if rejected is not None:
            # Not conditioned on status: concurrent re-requests resolve last-writer-wins.
            edge_store.update_status(db, Follow.id == rejected.id, status=FollowStatus.PENDING)
            logger.info(
                "Follow request re-sent",
                extra={"edge_id": rejected.id, "user_id": source_id, "target_id": target_id},
            )
            return FollowActionResult(success=True, status=FollowStatus.PENDING, message="Follow request sent again")

        if parsed_action is FollowAction.UNFOLLOW:
            removed = edge_store.delete_edge(db, source_id, target_id)
            logger.info(
                "Follow edge removed",
                extra={"user_id": source_id, "target_id": target_id, "removed": removed},
            )
            return FollowActionResult(success=True, message="Unfollowed / Request cancelled")

        target = db.get(User, target_id)
        if target is None:
            raise NotFoundError("User not found", code="USER_NOT_FOUND")
        if is_request is None:
            is_request = target.requires_approval

        status = FollowStatus.PENDING if is_request else FollowStatus.ACCEPTED
        inserted = edge_store.upsert_new(db, source_id, target_id, status)

    if not inserted:
        return FollowActionResult(
            success=False,
            message="Request already sent" if is_request else "Already following",
        )

    logger.info(
        "Follow edge created",
        extra={"user_id": source_id, "target_id": target_id, "status": status.value},
    )
    return FollowActionResult(
        success=True,
        status=status,
        message="Follow request sent" if is_request else "Now following",
    )


def decide(
    db: Session,
    edge_id: int,
    acting_user_id: int,
    decision: str | FollowDecision,
) -> DecisionResult:
    """Approve or reject a pending request addressed to ``acting_user_id``.

    The update is scoped to the edge's target, so an unknown id, someone
    else's request and an already decided request all read as not found.
    """

    edge_id = require_id(edge_id, "request_id")
    acting_user_id = require_id(acting_user_id, "user_id")
    parsed = parse_decision(decision)

    with edge_store.store_guard(db, "decide"):
        updated = edge_store.update_status(
            db,
            Follow.id == edge_id,
            Follow.target_id == acting_user_id,
            Follow.status == FollowStatus.PENDING,
            status=parsed.target_status,
        )

    if not updated:
        raise NotFoundError("Follow request not found", code="FOLLOW_REQUEST_NOT_FOUND")

    logger.info(
        "Follow request decided",
        extra={"edge_id": edge_id, "target_id": acting_user_id, "decision": parsed.value},
    )
    return DecisionResult(message="Request approved" if parsed is FollowDecision.APPROVE else "Request rejected")


__all__ = ["apply_action", "decide", "parse_action", "parse_decision"]
