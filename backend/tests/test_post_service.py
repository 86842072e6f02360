"""
SocialHub Backend — Post Service and Feed Tests
================================================

What we test:
    ✅ Feed: B posts "hello" then "world", A follows B → ["world", "hello"]
    ✅ Feed never contains posts by accounts A does not follow
    ✅ Following nobody → empty feed; unknown user → NotFoundError
    ✅ Feed pagination windows and totals
    ✅ Same-instant posts ordered by id
    ✅ Post CRUD ownership rules, search, date windows
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import update

from socialhub.exceptions import ForbiddenError, NotFoundError, ValidationError
from socialhub.models.post import Post
from socialhub.schemas.common import PageParams
from socialhub.services.follow_service import FollowService
from socialhub.services.post_service import PostService, parse_timestamp


class TestFeed:

    def setup_method(self):
        self.posts = PostService()
        self.follows = FollowService()

    @pytest.mark.asyncio
    async def test_feed_newest_first(self, db_session, create_user):
        a = await create_user("usera")
        b = await create_user("userb")
        await self.follows.follow(db_session, a.id, b.id)
        await self.posts.create_post(db_session, b.id, "hello")
        await self.posts.create_post(db_session, b.id, "world")

        feed = await self.posts.get_feed(db_session, a.id)

        assert [p.content for p in feed] == ["world", "hello"]
        assert all(p.user.username == "userb" for p in feed)

    @pytest.mark.asyncio
    async def test_feed_excludes_unfollowed_authors(self, db_session, create_user):
        a = await create_user("usera")
        b = await create_user("userb")
        c = await create_user("userc")
        await self.follows.follow(db_session, a.id, b.id)
        await self.posts.create_post(db_session, b.id, "from b")
        await self.posts.create_post(db_session, c.id, "from c")
        await self.posts.create_post(db_session, a.id, "from a")

        feed = await self.posts.get_feed(db_session, a.id)

        assert [p.content for p in feed] == ["from b"]

    @pytest.mark.asyncio
    async def test_following_nobody_gives_empty_feed(self, db_session, create_user):
        a = await create_user("usera")
        b = await create_user("userb")
        await self.posts.create_post(db_session, b.id, "hello")

        assert await self.posts.get_feed(db_session, a.id) == []

    @pytest.mark.asyncio
    async def test_feed_for_unknown_user(self, db_session):
        with pytest.raises(NotFoundError):
            await self.posts.get_feed(db_session, 12345)

    @pytest.mark.asyncio
    async def test_unfollow_removes_posts_from_feed(self, db_session, create_user):
        a = await create_user("usera")
        b = await create_user("userb")
        await self.follows.follow(db_session, a.id, b.id)
        await self.posts.create_post(db_session, b.id, "hello")
        await self.follows.unfollow(db_session, a.id, b.id)

        assert await self.posts.get_feed(db_session, a.id) == []

    @pytest.mark.asyncio
    async def test_same_instant_posts_break_ties_by_id(self, db_session, create_user):
        a = await create_user("usera")
        b = await create_user("userb")
        await self.follows.follow(db_session, a.id, b.id)
        first = await self.posts.create_post(db_session, b.id, "first")
        second = await self.posts.create_post(db_session, b.id, "second")
        instant = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        await db_session.execute(update(Post).values(created_at=instant))

        feed = await self.posts.get_feed(db_session, a.id)

        assert [p.id for p in feed] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_paginated_feed(self, db_session, create_user):
        a = await create_user("usera")
        b = await create_user("userb")
        await self.follows.follow(db_session, a.id, b.id)
        for i in range(5):
            await self.posts.create_post(db_session, b.id, f"post {i}")

        first_page = await self.posts.get_feed(db_session, a.id, PageParams(page=0, size=2))
        last_page = await self.posts.get_feed(db_session, a.id, PageParams(page=2, size=2))

        assert [p.content for p in first_page.items] == ["post 4", "post 3"]
        assert first_page.total == 5
        assert first_page.total_pages == 3
        assert [p.content for p in last_page.items] == ["post 0"]

    @pytest.mark.asyncio
    async def test_empty_paginated_feed(self, db_session, create_user):
        a = await create_user("usera")

        page = await self.posts.get_feed(db_session, a.id, PageParams())

        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 0


class TestPostCrud:

    def setup_method(self):
        self.posts = PostService()

    @pytest.mark.asyncio
    async def test_create_and_get(self, db_session, create_user):
        alice = await create_user("alice")

        created = await self.posts.create_post(db_session, alice.id, "Hello, world!")
        fetched = await self.posts.get_post(db_session, created.id)

        assert fetched.content == "Hello, world!"
        assert fetched.user.id == alice.id
        assert fetched.like_count == 0
        assert fetched.comment_count == 0

    @pytest.mark.asyncio
    async def test_create_for_unknown_user(self, db_session):
        with pytest.raises(NotFoundError):
            await self.posts.create_post(db_session, 999, "orphan")

    @pytest.mark.asyncio
    async def test_only_author_may_edit_or_delete(self, db_session, create_user):
        alice = await create_user("alice")
        bob = await create_user("bob")
        post = await self.posts.create_post(db_session, alice.id, "mine")

        with pytest.raises(ForbiddenError):
            await self.posts.update_post(db_session, bob, post.id, "hijacked")
        with pytest.raises(ForbiddenError):
            await self.posts.delete_post(db_session, bob, post.id)

        updated = await self.posts.update_post(db_session, alice, post.id, "edited")
        assert updated.content == "edited"

        await self.posts.delete_post(db_session, alice, post.id)
        with pytest.raises(NotFoundError):
            await self.posts.get_post(db_session, post.id)

    @pytest.mark.asyncio
    async def test_user_posts_and_count(self, db_session, create_user):
        alice = await create_user("alice")
        bob = await create_user("bob")
        await self.posts.create_post(db_session, alice.id, "one")
        await self.posts.create_post(db_session, alice.id, "two")
        await self.posts.create_post(db_session, bob.id, "three")

        posts = await self.posts.list_user_posts(db_session, alice.id)

        assert [p.content for p in posts] == ["two", "one"]
        assert await self.posts.count_user_posts(db_session, alice.id) == 2

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, db_session, create_user):
        alice = await create_user("alice")
        await self.posts.create_post(db_session, alice.id, "Learning FastAPI today")
        await self.posts.create_post(db_session, alice.id, "Coffee break")
        await self.posts.create_post(db_session, alice.id, "100% done")

        assert [p.content for p in await self.posts.search(db_session, "fastapi")] == [
            "Learning FastAPI today"
        ]
        # LIKE wildcards in the term match literally
        assert [p.content for p in await self.posts.search(db_session, "%")] == ["100% done"]


class TestDateWindows:

    def setup_method(self):
        self.posts = PostService()

    def test_parse_timestamp_naive_is_utc(self):
        parsed = parse_timestamp("2024-01-15T10:30:00", "date")
        assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_parse_timestamp_converts_offsets(self):
        parsed = parse_timestamp("2024-01-15T12:30:00+02:00", "date")
        assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_parse_timestamp_rejects_garbage(self):
        with pytest.raises(ValidationError):
            parse_timestamp("yesterday", "date")

    @pytest.mark.asyncio
    async def test_after_and_between(self, db_session, create_user):
        alice = await create_user("alice")
        old = await self.posts.create_post(db_session, alice.id, "old")
        new = await self.posts.create_post(db_session, alice.id, "new")
        await db_session.execute(
            update(Post)
            .where(Post.id == old.id)
            .values(created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        )
        await db_session.execute(
            update(Post)
            .where(Post.id == new.id)
            .values(created_at=datetime(2024, 6, 1, tzinfo=timezone.utc))
        )

        after = await self.posts.posts_after(db_session, "2024-03-01T00:00:00")
        between = await self.posts.posts_between(
            db_session, "2023-12-31T00:00:00", "2024-02-01T00:00:00"
        )

        assert [p.content for p in after] == ["new"]
        assert [p.content for p in between] == ["old"]

    @pytest.mark.asyncio
    async def test_between_rejects_reversed_window(self, db_session):
        with pytest.raises(ValidationError):
            await self.posts.posts_between(
                db_session, "2024-02-01T00:00:00", "2024-01-01T00:00:00"
            )
