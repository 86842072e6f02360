"""
SocialHub Backend — User SQLAlchemy Model
==========================================

What:  ORM model representing the `users` table (the credential store).
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   UserRepository, the authentication middleware, and every service that
       needs to resolve an author or follower id.

Table Design:
    - username / email: UNIQUE constraints are the source of truth for
      uniqueness. Concurrent duplicate registrations are resolved by the
      store rejecting the second INSERT, never by an application lock.
    - password_hash: bcrypt digest. The plaintext never reaches this table.
    - created_at / updated_at: UTC, timezone-aware.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from socialhub.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    An account. Created once by registration, edited through the profile
    endpoints, removed together with its posts, likes, comments and follow
    edges.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Login name, 3-50 characters, globally unique",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Contact address, globally unique",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt digest of the password",
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    bio: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Optional profile text, at most 500 characters",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
