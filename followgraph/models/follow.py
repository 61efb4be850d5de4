"""Follow edge model."""
from enum import Enum as PyEnum

from sqlalchemy import Enum as SqlEnum, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class FollowStatus(str, PyEnum):
    """Possible states of a follow edge."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Follow(Base):
    """Directed relationship intent from ``user_id`` towards ``target_id``.

    A pending row is the follow request itself. ``created_at`` is refreshed on
    every status transition, so it reads as "status changed at".
    """

    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("user_id", "target_id", name="uq_follows_pair"),
        Index("ix_follows_target_status", "target_id", "status"),
    )

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    target_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status: Mapped[FollowStatus] = mapped_column(
        SqlEnum(FollowStatus, name="follow_status", values_callable=lambda enum: [m.value for m in enum]),
        nullable=False,
        default=FollowStatus.PENDING,
    )

    source = relationship("User", foreign_keys=[user_id], back_populates="outgoing_follows")
    target = relationship("User", foreign_keys=[target_id], back_populates="incoming_follows")
