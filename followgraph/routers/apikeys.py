from __future__ import annotations

import logging
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from followgraph.db import get_db
from followgraph.models.api_key import ApiKey, ApiScope
from followgraph.models.user import User
from followgraph.security import require_scope
from followgraph.utils.apikey import gen_key
from followgraph.utils.errors import error_response
from followgraph.utils.time import utcnow

router = APIRouter(prefix="/apikeys", tags=["apikeys"])
logger = logging.getLogger(__name__)


# ------ Schemas ------

class CreateKeyIn(BaseModel):
    """Payload for issuing a key; user-scoped keys must name their user."""
    name: str
    scope: ApiScope = ApiScope.user
    user_id: int | None = None
    days_valid: int | None = 90

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("name cannot be blank")
        return value.strip()


class ApiKeyCreateOut(BaseModel):
    """Returned once by POST /apikeys; the raw key is never shown again."""
    id: int
    name: str
    scope: ApiScope
    user_id: int | None
    key: str
    expires_at: datetime | None


class ApiKeyRead(BaseModel):
    id: int
    name: str
    scope: ApiScope
    user_id: int | None
    is_active: bool
    created_at: datetime
    expires_at: datetime | None
    last_used_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


# ------ Routes ------

@router.post(
    "",
    response_model=ApiKeyCreateOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_scope({ApiScope.admin}))],
)
def create_api_key(payload: CreateKeyIn, db: Session = Depends(get_db)) -> ApiKeyCreateOut:
    """Issue a key server-side and return the raw value once."""
    if payload.scope == ApiScope.user and payload.user_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_response("APIKEY_USER_REQUIRED", "User-scoped keys need a user_id."),
        )
    if payload.user_id is not None and db.get(User, payload.user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error_response("USER_NOT_FOUND", "User not found."),
        )

    raw, prefix, key_hash = gen_key()
    now = utcnow()
    expires_at = now + timedelta(days=payload.days_valid) if payload.days_valid else None

    row = ApiKey(
        name=payload.name,
        prefix=prefix,
        key_hash=key_hash,
        scope=payload.scope,
        user_id=payload.user_id,
        expires_at=expires_at,
        is_active=True,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_response("APIKEY_EXISTS", "Key name already exists."),
        ) from exc
    db.refresh(row)
    logger.info("API key created", extra={"api_key_id": row.id, "scope": row.scope.value, "user_id": row.user_id})

    return ApiKeyCreateOut(
        id=row.id,
        name=row.name,
        scope=row.scope,
        user_id=row.user_id,
        key=raw,
        expires_at=row.expires_at,
    )


@router.get(
    "/{api_key_id}",
    response_model=ApiKeyRead,
    dependencies=[Depends(require_scope({ApiScope.admin}))],
)
def get_apikey(api_key_id: int, db: Session = Depends(get_db)) -> ApiKey:
    row = db.get(ApiKey, api_key_id)
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error_response("APIKEY_NOT_FOUND", "API key not found."),
        )
    return row


@router.delete(
    "/{api_key_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_scope({ApiScope.admin}))],
)
def revoke_apikey(api_key_id: int, db: Session = Depends(get_db)) -> Response:
    row = db.get(ApiKey, api_key_id)
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error_response("APIKEY_NOT_FOUND", "API key not found."),
        )

    if row.is_active:
        row.is_active = False
        db.commit()
        logger.info("API key revoked", extra={"api_key_id": api_key_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
