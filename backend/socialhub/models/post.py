"""
SocialHub Backend — Post SQLAlchemy Model
==========================================

What:  ORM model representing the `posts` table.
Who:   PostRepository (CRUD, search, feed), LikeRepository and
       CommentRepository (ownership and existence checks).

Query Patterns:
    - Feed: WHERE user_id IN (followed ids) ORDER BY created_at DESC, id DESC
      → idx_posts_user_created serves both the author filter and the order
    - All posts newest first: ORDER BY created_at DESC
      → idx_posts_created_at
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from socialhub.database import Base
from socialhub.models.user import utcnow


class Post(Base):
    """A piece of content authored by one user; at most 1000 characters."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Author",
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

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
        Index("idx_posts_created_at", "created_at"),
        Index("idx_posts_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, created_at='{self.created_at}')>"
