"""Persistence primitives for follow edges.

Every write touches a single ``follows`` row with a single statement. The
unique ``(user_id, target_id)`` constraint is the only concurrency guard:
``upsert_new`` lets the database drop a conflicting insert and reports it as a
miss instead of an error.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from followgraph.models.follow import Follow, FollowStatus
from followgraph.utils.errors import StoreError
from followgraph.utils.time import utcnow

logger = logging.getLogger(__name__)

_CONFLICT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


@contextmanager
def store_guard(db: Session, operation: str) -> Iterator[None]:
    """Roll back and surface unexpected database failures as ``StoreError``."""

    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Follow store operation failed", extra={"operation": operation})
        raise StoreError("The relationship store is unavailable.") from exc


def upsert_new(db: Session, source_id: int, target_id: int, status: FollowStatus) -> bool:
    """Insert the edge unless the pair already exists; return whether a row was written."""

    table = Follow.__table__
    values = {"user_id": source_id, "target_id": target_id, "status": status}
    conflict_insert = _CONFLICT_INSERTS.get(db.get_bind().dialect.name)

    if conflict_insert is not None:
        stmt = (
            conflict_insert(table)
            .values(**values)
            .on_conflict_do_nothing(index_elements=[table.c.user_id, table.c.target_id])
            .returning(table.c.id)
        )
        inserted_id = db.execute(stmt).scalar_one_or_none()
        db.commit()
        return inserted_id is not None

    try:
        with db.begin_nested():
            db.execute(insert(table).values(**values))
    except IntegrityError:
        db.commit()
        return False
    db.commit()
    return True


def update_status(db: Session, *criteria: Any, status: FollowStatus) -> int:
    """Move every edge matching ``criteria`` to ``status`` and stamp the transition time."""

    stmt = (
        update(Follow)
        .where(*criteria)
        .values(status=status, created_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    db.commit()
    return result.rowcount


def delete_edge(db: Session, source_id: int, target_id: int) -> int:
    stmt = (
        delete(Follow)
        .where(Follow.user_id == source_id, Follow.target_id == target_id)
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    db.commit()
    return result.rowcount


def get_edge(
    db: Session, source_id: int, target_id: int, *, status: FollowStatus | None = None
) -> Follow | None:
    stmt = select(Follow).where(Follow.user_id == source_id, Follow.target_id == target_id)
    if status is not None:
        stmt = stmt.where(Follow.status == status)
    # Transitions skip session synchronisation, so refresh any cached instance.
    return db.scalars(stmt.limit(1).execution_options(populate_existing=True)).first()


def edges_from(db: Session, source_id: int) -> list[tuple[int, FollowStatus]]:
    """Return ``(target_id, status)`` for every outgoing edge of ``source_id``."""

    stmt = select(Follow.target_id, Follow.status).where(Follow.user_id == source_id).order_by(Follow.id)
    return [(row.target_id, row.status) for row in db.execute(stmt)]


__all__ = [
    "store_guard",
    "upsert_new",
    "update_status",
    "delete_edge",
    "get_edge",
    "edges_from",
]
