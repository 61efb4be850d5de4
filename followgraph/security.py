"""Security dependencies for API key validation, scopes and caller identity."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Set

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from followgraph.db import get_db
from followgraph.models.api_key import ApiKey, ApiScope
from followgraph.utils.apikey import find_valid_key
from followgraph.utils.errors import error_response
from followgraph.utils.time import utcnow


@dataclass(frozen=True)
class Principal:
    """Verified caller identity handed to every relationship operation."""

    user_id: int
    api_key_id: int
    scope: ApiScope


def _extract_key(
    authorization: str | None = Header(default=None),
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> str | None:
    """Read the key from ``Authorization: Bearer ...`` or ``X-API-Key``."""
    if x_api_key:
        return x_api_key.strip()
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1].strip()
    return None


def require_api_key(
    db: Session = Depends(get_db),
    token: str | None = Depends(_extract_key),
) -> ApiKey:
    """Validate API key tokens and return the corresponding row."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_response("NO_API_KEY", "API key required."),
        )

    key = find_valid_key(db, token)
    if key is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_response("UNAUTHORIZED", "Invalid or expired API key"),
        )

    key.last_used_at = utcnow()
    db.commit()
    return key


def require_scope(allowed: Set[ApiScope]) -> Callable:
    """Enforce that a key holds one of the allowed scopes."""

    if not allowed:
        raise RuntimeError("require_scope needs a non-empty set of ApiScope")

    def _dep(key: ApiKey = Depends(require_api_key)) -> ApiKey:
        if key.scope == ApiScope.admin or key.scope in allowed:
            return key
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error_response(
                "INSUFFICIENT_SCOPE",
                f"Requires one of: {sorted(scope.value for scope in allowed)}",
            ),
        )

    return _dep


def require_principal(key: ApiKey = Depends(require_api_key)) -> Principal:
    """Resolve the acting user behind the API key."""

    if key.user_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error_response("API_KEY_NOT_BOUND", "API key is not bound to a user."),
        )
    return Principal(user_id=key.user_id, api_key_id=key.id, scope=key.scope)


__all__ = ["Principal", "require_api_key", "require_scope", "require_principal"]
