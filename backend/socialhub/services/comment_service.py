"""SocialHub Backend — Comment Service."""

import logging
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.exceptions import NotFoundError
from socialhub.models.comment import Comment
from socialhub.models.user import User
from socialhub.repositories.comment_repository import CommentRepository, CommentView
from socialhub.repositories.post_repository import PostRepository
from socialhub.repositories.user_repository import UserRepository
from socialhub.schemas.comment import CommentResponse
from socialhub.schemas.common import Page, PageParams
from socialhub.schemas.user import UserResponse
from socialhub.security.dependencies import ensure_actor
from socialhub.services.errors import translate_database_errors

logger = logging.getLogger(__name__)


def to_comment_response(view: CommentView) -> CommentResponse:
    return CommentResponse(
        id=view.comment.id,
        post_id=view.comment.post_id,
        content=view.comment.content,
        created_at=view.comment.created_at,
        updated_at=view.comment.updated_at,
        user=UserResponse.model_validate(view.author),
    )


class CommentService:
    async def _require_post(self, db: AsyncSession, post_id: int) -> None:
        if await PostRepository(db).get(post_id) is None:
            raise NotFoundError(resource="post", resource_id=post_id)

    async def _require_comment(self, comments: CommentRepository, comment_id: int) -> Comment:
        comment = await comments.get(comment_id)
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return comment

    async def _view(self, comments: CommentRepository, comment_id: int) -> CommentResponse:
        view = await comments.get_view(comment_id)
        if view is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return to_comment_response(view)

    @translate_database_errors("creating a comment")
    async def create_comment(
        self, db: AsyncSession, user_id: int, post_id: int, content: str
    ) -> CommentResponse:
        if not await UserRepository(db).exists_by_id(user_id):
            raise NotFoundError(resource="user", resource_id=user_id)
        await self._require_post(db, post_id)

        comments = CommentRepository(db)
        comment = await comments.create(user_id, post_id, content)
        logger.info("User %s commented on post %s", user_id, post_id)
        return await self._view(comments, comment.id)

    @translate_database_errors("loading a comment")
    async def get_comment(self, db: AsyncSession, comment_id: int) -> CommentResponse:
        return await self._view(CommentRepository(db), comment_id)

    @translate_database_errors("updating a comment")
    async def update_comment(
        self, db: AsyncSession, identity: User, comment_id: int, content: str
    ) -> CommentResponse:
        comments = CommentRepository(db)
        comment = await self._require_comment(comments, comment_id)
        ensure_actor(identity, comment.user_id)
        await comments.update_content(comment, content)
        return await self._view(comments, comment_id)

    @translate_database_errors("deleting a comment")
    async def delete_comment(self, db: AsyncSession, identity: User, comment_id: int) -> None:
        comments = CommentRepository(db)
        comment = await self._require_comment(comments, comment_id)
        ensure_actor(identity, comment.user_id)
        await comments.delete(comment)

    @translate_database_errors("listing a post's comments")
    async def post_comments(
        self, db: AsyncSession, post_id: int, params: Optional[PageParams] = None
    ) -> Union[List[CommentResponse], Page[CommentResponse]]:
        """Comments on a post, oldest first."""
        await self._require_post(db, post_id)
        comments = CommentRepository(db)
        items = [to_comment_response(v) for v in await comments.list_by_post(post_id, params)]
        if params is None:
            return items
        return Page[CommentResponse].build(items, await comments.count_by_post(post_id), params)

    @translate_database_errors("counting a post's comments")
    async def post_comment_count(self, db: AsyncSession, post_id: int) -> int:
        await self._require_post(db, post_id)
        return await CommentRepository(db).count_by_post(post_id)

    @translate_database_errors("listing a user's comments")
    async def user_comments(self, db: AsyncSession, user_id: int) -> List[CommentResponse]:
        if not await UserRepository(db).exists_by_id(user_id):
            raise NotFoundError(resource="user", resource_id=user_id)
        views = await CommentRepository(db).list_by_user(user_id)
        return [to_comment_response(v) for v in views]

    @translate_database_errors("searching comments")
    async def search(self, db: AsyncSession, text: str) -> List[CommentResponse]:
        return [to_comment_response(v) for v in await CommentRepository(db).search(text)]

    @translate_database_errors("listing recent comments")
    async def recent(self, db: AsyncSession, limit: int = 10) -> List[CommentResponse]:
        return [to_comment_response(v) for v in await CommentRepository(db).list_recent(limit)]


# Module-level singleton
comment_service = CommentService()
