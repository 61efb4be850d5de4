"""Lenient page/limit parsing for list endpoints."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _positive_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return None
    return parsed if parsed >= 1 else None


def resolve_page(page: Any, limit: Any, *, default_limit: int, max_limit: int | None = None) -> PageRequest:
    """Build a ``PageRequest``; absent, non-numeric or non-positive values fall back to defaults."""

    resolved_page = _positive_int(page) or 1
    resolved_limit = _positive_int(limit) or default_limit
    if max_limit is not None:
        resolved_limit = min(resolved_limit, max_limit)
    return PageRequest(page=resolved_page, limit=resolved_limit)


__all__ = ["PageRequest", "resolve_page"]
