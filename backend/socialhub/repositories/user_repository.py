"""
SocialHub Backend — User Repository
====================================

What:  Parameterized queries over `users`, plus the follow-graph lookups
       that return users (following/followers lists and counts).
Who:   AuthService, UserService, FollowService, AuthenticationMiddleware.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.models.comment import Comment
from socialhub.models.follow import Follow
from socialhub.models.like import Like
from socialhub.models.post import Post
from socialhub.models.user import User
from socialhub.repositories.results import WriteResult, add_or_conflict, assign_or_conflict

logger = logging.getLogger(__name__)

# Columns a profile search may filter on
SEARCHABLE_FIELDS = {
    "first_name": User.first_name,
    "last_name": User.last_name,
    "username": User.username,
}


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Lookups ───────────────────────────────────────────────────────────

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_username_or_email(self, identifier: str) -> Optional[User]:
        """Username match wins over an email match for the same string."""
        result = await self.session.execute(
            select(User).where(or_(User.username == identifier, User.email == identifier))
        )
        users = list(result.scalars().all())
        for user in users:
            if user.username == identifier:
                return user
        return users[0] if users else None

    async def exists_by_id(self, user_id: int) -> bool:
        result = await self.session.execute(select(User.id).where(User.id == user_id))
        return result.scalar_one_or_none() is not None

    async def username_exists(self, username: str) -> bool:
        result = await self.session.execute(select(User.id).where(User.username == username))
        return result.first() is not None

    async def email_exists(self, email: str) -> bool:
        result = await self.session.execute(select(User.id).where(User.email == email))
        return result.first() is not None

    async def list_all(self) -> List[User]:
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def search(self, field: str, term: str) -> List[User]:
        """Case-insensitive substring match on one of SEARCHABLE_FIELDS."""
        column = SEARCHABLE_FIELDS[field]
        result = await self.session.execute(
            select(User)
            .where(func.lower(column).contains(term.lower(), autoescape=True))
            .order_by(User.id)
        )
        return list(result.scalars().all())

    # ── Follow graph ──────────────────────────────────────────────────────

    async def following_of(self, user_id: int) -> List[User]:
        """Users that `user_id` follows, most recent edge first."""
        result = await self.session.execute(
            select(User)
            .join(Follow, Follow.following_id == User.id)
            .where(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
        )
        return list(result.scalars().all())

    async def followers_of(self, user_id: int) -> List[User]:
        """Users following `user_id`, most recent edge first."""
        result = await self.session.execute(
            select(User)
            .join(Follow, Follow.follower_id == User.id)
            .where(Follow.following_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
        )
        return list(result.scalars().all())

    async def count_following(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Follow.id)).where(Follow.follower_id == user_id)
        )
        return result.scalar() or 0

    async def count_followers(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Follow.id)).where(Follow.following_id == user_id)
        )
        return result.scalar() or 0

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        bio: Optional[str] = None,
    ) -> WriteResult[User]:
        """INSERT one account; CONFLICT when username or email is taken."""
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            bio=bio,
        )
        if not await add_or_conflict(self.session, user):
            return WriteResult.conflicted()
        return WriteResult.created(user)

    async def update(self, user: User, **fields) -> WriteResult[User]:
        """Apply profile fields; CONFLICT when the new username/email is taken."""
        if not await assign_or_conflict(self.session, user, fields):
            return WriteResult.conflicted()
        return WriteResult.updated(user)

    async def delete(self, user: User) -> None:
        """
        Remove an account and every row that references it.

        Order: likes and comments (own and on own posts) → follow edges in
        both directions → own posts → the account row.
        """
        own_posts = select(Post.id).where(Post.user_id == user.id)
        await self.session.execute(
            delete(Like).where(or_(Like.user_id == user.id, Like.post_id.in_(own_posts)))
        )
        await self.session.execute(
            delete(Comment).where(
                or_(Comment.user_id == user.id, Comment.post_id.in_(own_posts))
            )
        )
        await self.session.execute(
            delete(Follow).where(
                or_(Follow.follower_id == user.id, Follow.following_id == user.id)
            )
        )
        await self.session.execute(delete(Post).where(Post.user_id == user.id))
        await self.session.delete(user)
        await self.session.flush()
        logger.info("Deleted user %s and dependent rows", user.id)
