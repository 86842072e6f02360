"""
SocialHub Backend — User Service Tests
=======================================

What we test:
    ✅ Lookups by id, username, email; existence checks
    ✅ Case-insensitive search on first name, last name, username
    ✅ Profile update and its uniqueness conflicts
    ✅ Account deletion removes dependent rows
    ✅ Driver failures surface as DatabaseError
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from socialhub.exceptions import ConflictError, DatabaseError, NotFoundError
from socialhub.models.comment import Comment
from socialhub.models.follow import Follow
from socialhub.models.like import Like
from socialhub.models.post import Post
from socialhub.schemas.user import UserUpdateRequest
from socialhub.services.comment_service import CommentService
from socialhub.services.follow_service import FollowService
from socialhub.services.like_service import LikeService
from socialhub.services.post_service import PostService
from socialhub.services.user_service import UserService


def update_request(username="alice", email="alice@email.com", bio=None):
    return UserUpdateRequest(
        username=username,
        email=email,
        first_name="Alice",
        last_name="Smith",
        bio=bio,
    )


class TestUserReads:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_lookups(self, db_session, create_user):
        alice = await create_user("alice")

        assert (await self.service.get_user(db_session, alice.id)).username == "alice"
        assert (await self.service.get_by_username(db_session, "alice")).id == alice.id
        assert (await self.service.get_by_email(db_session, "alice@email.com")).id == alice.id
        assert await self.service.username_exists(db_session, "alice") is True
        assert await self.service.username_exists(db_session, "bob") is False
        assert await self.service.email_exists(db_session, "alice@email.com") is True

    @pytest.mark.asyncio
    async def test_missing_user(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_user(db_session, 404)
        with pytest.raises(NotFoundError):
            await self.service.get_by_username(db_session, "ghost")

    @pytest.mark.asyncio
    async def test_search(self, db_session, create_user):
        await create_user("alice_smith", first_name="Alice", last_name="Smith")
        await create_user("bob_jones", first_name="Bob", last_name="Jones")

        assert [u.username for u in await self.service.search(db_session, "first_name", "ALI")] == [
            "alice_smith"
        ]
        assert [u.username for u in await self.service.search(db_session, "last_name", "jon")] == [
            "bob_jones"
        ]
        assert len(await self.service.search(db_session, "username", "_")) == 2


class TestUserWrites:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_update_profile(self, db_session, create_user):
        alice = await create_user("alice")

        updated = await self.service.update_user(
            db_session, alice.id, update_request(username="alice_new", bio="Hi there")
        )

        assert updated.username == "alice_new"
        assert updated.bio == "Hi there"

    @pytest.mark.asyncio
    async def test_update_to_taken_username(self, db_session, create_user):
        alice = await create_user("alice")
        await create_user("bob")

        with pytest.raises(ConflictError) as exc_info:
            await self.service.update_user(
                db_session, alice.id, update_request(username="bob")
            )

        assert exc_info.value.field == "username"
        # rejected values are gone and the row stays readable
        assert alice.username == "alice"
        assert (await self.service.get_user(db_session, alice.id)).username == "alice"

    @pytest.mark.asyncio
    async def test_update_to_taken_email(self, db_session, create_user):
        alice = await create_user("alice")
        await create_user("bob")

        with pytest.raises(ConflictError) as exc_info:
            await self.service.update_user(
                db_session, alice.id, update_request(email="bob@email.com")
            )

        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_delete_removes_dependents(self, db_session, create_user):
        alice = await create_user("alice")
        bob = await create_user("bob")
        posts, likes, comments, follows = PostService(), LikeService(), CommentService(), FollowService()
        alice_post = await posts.create_post(db_session, alice.id, "by alice")
        bob_post = await posts.create_post(db_session, bob.id, "by bob")
        await likes.like(db_session, bob.id, alice_post.id)
        await likes.like(db_session, alice.id, bob_post.id)
        await comments.create_comment(db_session, bob.id, alice_post.id, "nice")
        await comments.create_comment(db_session, alice.id, bob_post.id, "cool")
        await follows.follow(db_session, alice.id, bob.id)
        await follows.follow(db_session, bob.id, alice.id)

        await self.service.delete_user(db_session, alice.id)

        async def count(model):
            return (await db_session.execute(select(func.count()).select_from(model))).scalar()

        assert await count(Post) == 1
        assert await count(Like) == 0
        assert await count(Comment) == 0
        assert await count(Follow) == 0
        with pytest.raises(NotFoundError):
            await self.service.get_user(db_session, alice.id)


class TestDatabaseFailures:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_driver_error_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_users(mock_db_session)

        assert exc_info.value.context == {"original_error": "OperationalError"}

    @pytest.mark.asyncio
    async def test_not_found_is_not_wrapped(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.get_user(mock_db_session, 1)

    @pytest.mark.asyncio
    async def test_rows_flow_through(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        assert await self.service.list_users(mock_db_session) == []
