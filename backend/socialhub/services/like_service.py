"""
SocialHub Backend — Like Service
=================================

What:  Like, unlike, toggle and like statistics.
Who:   Called by the /api/likes routes.

Rules:
    - liking your own post      → ValidationError (400)
    - liking twice              → ConflictError   (409) from uq_likes_user_post
    - unliking without a like   → NotFoundError   (404)
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.exceptions import ConflictError, NotFoundError, ValidationError
from socialhub.models.post import Post
from socialhub.repositories.like_repository import LikeRepository
from socialhub.repositories.post_repository import PostRepository
from socialhub.repositories.user_repository import UserRepository
from socialhub.schemas.like import LikeResponse, LikeToggleResponse, MostLikedPost
from socialhub.services.errors import translate_database_errors
from socialhub.services.post_service import to_post_response

logger = logging.getLogger(__name__)


class LikeService:
    async def _require_user(self, db: AsyncSession, user_id: int) -> None:
        if not await UserRepository(db).exists_by_id(user_id):
            raise NotFoundError(resource="user", resource_id=user_id)

    async def _require_post(self, db: AsyncSession, post_id: int) -> Post:
        post = await PostRepository(db).get(post_id)
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return post

    @translate_database_errors("liking a post")
    async def like(self, db: AsyncSession, user_id: int, post_id: int) -> LikeResponse:
        await self._require_user(db, user_id)
        post = await self._require_post(db, post_id)
        if post.user_id == user_id:
            raise ValidationError(message="You cannot like your own post", field="post_id")

        result = await LikeRepository(db).create(user_id, post_id)
        if result.conflict:
            raise ConflictError(
                message="You have already liked this post",
                context={"user_id": user_id, "post_id": post_id},
            )
        logger.info("User %s liked post %s", user_id, post_id)
        return LikeResponse.model_validate(result.entity)

    @translate_database_errors("unliking a post")
    async def unlike(self, db: AsyncSession, user_id: int, post_id: int) -> None:
        await self._require_user(db, user_id)
        await self._require_post(db, post_id)
        if not await LikeRepository(db).delete(user_id, post_id):
            raise NotFoundError(resource="like", message="You have not liked this post")
        logger.info("User %s unliked post %s", user_id, post_id)

    async def toggle(self, db: AsyncSession, user_id: int, post_id: int) -> LikeToggleResponse:
        """Unlike when a like exists, otherwise like."""
        if await self.has_liked(db, user_id, post_id):
            await self.unlike(db, user_id, post_id)
            return LikeToggleResponse(liked=False, message="Post unliked successfully")
        await self.like(db, user_id, post_id)
        return LikeToggleResponse(liked=True, message="Post liked successfully")

    @translate_database_errors("checking a like")
    async def has_liked(self, db: AsyncSession, user_id: int, post_id: int) -> bool:
        return await LikeRepository(db).exists(user_id, post_id)

    @translate_database_errors("listing a post's likes")
    async def post_likes(self, db: AsyncSession, post_id: int) -> List[LikeResponse]:
        await self._require_post(db, post_id)
        likes = await LikeRepository(db).list_by_post(post_id)
        return [LikeResponse.model_validate(like) for like in likes]

    @translate_database_errors("listing a user's likes")
    async def user_likes(self, db: AsyncSession, user_id: int) -> List[LikeResponse]:
        await self._require_user(db, user_id)
        likes = await LikeRepository(db).list_by_user(user_id)
        return [LikeResponse.model_validate(like) for like in likes]

    @translate_database_errors("counting a post's likes")
    async def post_like_count(self, db: AsyncSession, post_id: int) -> int:
        await self._require_post(db, post_id)
        return await LikeRepository(db).count_by_post(post_id)

    @translate_database_errors("counting a user's likes")
    async def user_like_count(self, db: AsyncSession, user_id: int) -> int:
        await self._require_user(db, user_id)
        return await LikeRepository(db).count_by_user(user_id)

    @translate_database_errors("ranking liked posts")
    async def most_liked(self, db: AsyncSession, limit: int = 10) -> List[MostLikedPost]:
        posts = PostRepository(db)
        ranked = []
        for post_id, like_count in await LikeRepository(db).most_liked_post_ids(limit):
            view = await posts.get_view(post_id)
            if view is not None:
                ranked.append(MostLikedPost(post=to_post_response(view), like_count=like_count))
        return ranked


# Module-level singleton
like_service = LikeService()
