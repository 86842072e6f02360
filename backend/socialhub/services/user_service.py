"""
SocialHub Backend — User Service
=================================

What:  Profile reads, search, update and account deletion; the follow
       lists and counters exposed under /api/users/{id}.
Who:   Called by the /api/users routes and the /api/auth/me route.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.exceptions import ConflictError, NotFoundError
from socialhub.models.user import User
from socialhub.repositories.user_repository import UserRepository
from socialhub.schemas.user import UserResponse, UserUpdateRequest
from socialhub.services.errors import translate_database_errors

logger = logging.getLogger(__name__)


def to_user_responses(users: List[User]) -> List[UserResponse]:
    return [UserResponse.model_validate(user) for user in users]


class UserService:
    """Stateless; every method receives the request's session."""

    async def _require(self, users: UserRepository, user_id: int) -> User:
        user = await users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return user

    async def ensure_exists(self, db: AsyncSession, user_id: int) -> None:
        """Raise NotFoundError when no account has `user_id`."""
        if not await UserRepository(db).exists_by_id(user_id):
            raise NotFoundError(resource="user", resource_id=user_id)

    @translate_database_errors("loading a user")
    async def get_user(self, db: AsyncSession, user_id: int) -> UserResponse:
        user = await self._require(UserRepository(db), user_id)
        return UserResponse.model_validate(user)

    @translate_database_errors("loading a user by username")
    async def get_by_username(self, db: AsyncSession, username: str) -> UserResponse:
        user = await UserRepository(db).get_by_username(username)
        if user is None:
            raise NotFoundError(resource="user", context={"username": username},
                                message=f"User '{username}' was not found")
        return UserResponse.model_validate(user)

    @translate_database_errors("loading a user by email")
    async def get_by_email(self, db: AsyncSession, email: str) -> UserResponse:
        user = await UserRepository(db).get_by_email(email)
        if user is None:
            raise NotFoundError(resource="user", message="No user is registered with that email")
        return UserResponse.model_validate(user)

    @translate_database_errors("listing users")
    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        return to_user_responses(await UserRepository(db).list_all())

    @translate_database_errors("checking a username")
    async def username_exists(self, db: AsyncSession, username: str) -> bool:
        return await UserRepository(db).username_exists(username)

    @translate_database_errors("checking an email")
    async def email_exists(self, db: AsyncSession, email: str) -> bool:
        return await UserRepository(db).email_exists(email)

    @translate_database_errors("searching users")
    async def search(self, db: AsyncSession, field: str, term: str) -> List[UserResponse]:
        """Case-insensitive contains on first_name, last_name or username."""
        return to_user_responses(await UserRepository(db).search(field, term))

    @translate_database_errors("updating a profile")
    async def update_user(
        self, db: AsyncSession, user_id: int, request: UserUpdateRequest
    ) -> UserResponse:
        """
        Replace the editable profile fields.

        Raises:
            NotFoundError: no such user (→ 404)
            ConflictError: new username or email belongs to another account (→ 409)
        """
        users = UserRepository(db)
        user = await self._require(users, user_id)

        result = await users.update(
            user,
            username=request.username,
            email=str(request.email),
            first_name=request.first_name,
            last_name=request.last_name,
            bio=request.bio,
        )
        if result.conflict:
            taken = await users.get_by_username(request.username)
            if taken is not None and taken.id != user_id:
                raise ConflictError(message="Username is already taken", field="username")
            raise ConflictError(message="Email is already in use", field="email")

        logger.info("Updated profile of user %s", user_id)
        return UserResponse.model_validate(result.entity)

    @translate_database_errors("deleting an account")
    async def delete_user(self, db: AsyncSession, user_id: int) -> None:
        users = UserRepository(db)
        user = await self._require(users, user_id)
        await users.delete(user)

    # ── Follow lists ──────────────────────────────────────────────────────

    @translate_database_errors("listing followed users")
    async def following(self, db: AsyncSession, user_id: int) -> List[UserResponse]:
        users = UserRepository(db)
        await self._require(users, user_id)
        return to_user_responses(await users.following_of(user_id))

    @translate_database_errors("listing followers")
    async def followers(self, db: AsyncSession, user_id: int) -> List[UserResponse]:
        users = UserRepository(db)
        await self._require(users, user_id)
        return to_user_responses(await users.followers_of(user_id))

    @translate_database_errors("counting followed users")
    async def following_count(self, db: AsyncSession, user_id: int) -> int:
        users = UserRepository(db)
        await self._require(users, user_id)
        return await users.count_following(user_id)

    @translate_database_errors("counting followers")
    async def followers_count(self, db: AsyncSession, user_id: int) -> int:
        users = UserRepository(db)
        await self._require(users, user_id)
        return await users.count_followers(user_id)


# Module-level singleton
user_service = UserService()
