"""Standardized error payloads and the exceptions that carry them."""
from typing import Any

from fastapi import HTTPException, status


def error_response(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return a standardized error payload."""

    payload: dict[str, Any] = {"error": {"code": code, "message": message}}
    if details:
        payload["error"]["details"] = details
    return payload


class GraphError(HTTPException):
    """Base class for errors raised by the relationship services.

    Subclasses are plain ``HTTPException`` objects so the application's HTTP
    handler renders them with the shared error envelope.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, *, code: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.code = code or self.code
        self.message = message
        super().__init__(
            status_code=type(self).status_code,
            detail=error_response(self.code, message, details),
        )


class ValidationError(GraphError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class NotFoundError(GraphError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class AuthorizationError(NotFoundError):
    """Acting on something the caller does not own.

    Rendered exactly like ``NotFoundError`` so callers cannot probe for
    resources that belong to other users.
    """


class StoreError(GraphError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "STORE_ERROR"


def require_id(value: object, field: str) -> int:
    """Return ``value`` when it is a positive integer identifier."""

    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError("Missing or invalid fields", details={"field": field})
    return value


__all__ = [
    "error_response",
    "require_id",
    "GraphError",
    "ValidationError",
    "NotFoundError",
    "AuthorizationError",
    "StoreError",
]
