"""User model."""
from enum import Enum as PyEnum

from sqlalchemy import Enum as SqlEnum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class AccountType(str, PyEnum):
    """Visibility of an account; private accounts approve their followers."""

    PUBLIC = "public"
    PRIVATE = "private"


class User(Base):
    """Represents a member of the network."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    profile_pic: Mapped[str | None] = mapped_column(String(255), nullable=True)
    account_type: Mapped[AccountType] = mapped_column(
        SqlEnum(AccountType, name="account_type", values_callable=lambda enum: [m.value for m in enum]),
        nullable=False,
        default=AccountType.PUBLIC,
    )

    outgoing_follows = relationship(
        "Follow", back_populates="source", foreign_keys="Follow.user_id", passive_deletes=True
    )
    incoming_follows = relationship(
        "Follow", back_populates="target", foreign_keys="Follow.target_id", passive_deletes=True
    )

    @property
    def requires_approval(self) -> bool:
        return self.account_type == AccountType.PRIVATE
