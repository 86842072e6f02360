"""
SocialHub Backend — HTTP API Tests
===================================

What:  End-to-end flows through the full middleware chain, routers,
       services and an in-memory database.

What we test:
    ✅ register → login → me → validate
    ✅ 409 on duplicate registration, 401 on bad login, 422 on bad payloads
    ✅ Route policy: 401 anonymous, 403 acting for someone else
    ✅ follow → post → feed, paginated feed with X-Total-Count
    ✅ likes and comments over HTTP
    ✅ error payload shape, X-Request-ID, /health
"""

import pytest


async def register(client, username, email=None, password="password123"):
    response = await client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": email or f"{username}@email.com",
            "password": password,
            "first_name": username.capitalize(),
            "last_name": "Tester",
        },
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return body, {"Authorization": f"Bearer {body['token']}"}


class TestAuthFlow:

    @pytest.mark.asyncio
    async def test_register_login_me_validate(self, client):
        registered, _ = await register(client, "alice_smith", "alice.smith@email.com")
        assert registered["type"] == "Bearer"
        assert "password" not in registered

        login = await client.post(
            "/api/auth/login",
            json={"username_or_email": "alice.smith@email.com", "password": "password123"},
        )
        assert login.status_code == 200
        token = login.json()["token"]

        me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["username"] == "alice_smith"

        valid = await client.post("/api/auth/validate", json={"token": token})
        assert valid.json() == {"valid": True, "username": "alice_smith"}

        invalid = await client.post("/api/auth/validate", json={"token": "nope"})
        assert invalid.json() == {"valid": False, "username": None}

    @pytest.mark.asyncio
    async def test_validate_requires_token(self, client):
        response = await client.post("/api/auth/validate", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_duplicate_registration_conflicts(self, client):
        await register(client, "alice")

        response = await client.post(
            "/api/auth/register",
            json={
                "username": "alice",
                "email": "someone.else@email.com",
                "password": "password123",
                "first_name": "Alice",
                "last_name": "Again",
            },
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "conflict"
        assert body["message"] == "Username is already taken"
        assert body["request_id"]

    @pytest.mark.asyncio
    async def test_bad_login_is_generic_401(self, client):
        await register(client, "alice")

        wrong = await client.post(
            "/api/auth/login", json={"username_or_email": "alice", "password": "wrong-password"}
        )
        unknown = await client.post(
            "/api/auth/login", json={"username_or_email": "ghost", "password": "password123"}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json()["message"] == unknown.json()["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"username": "ab", "email": "ab@email.com", "password": "password123",
             "first_name": "A", "last_name": "B"},
            {"username": "valid_name", "email": "not-an-email", "password": "password123",
             "first_name": "A", "last_name": "B"},
            {"username": "valid_name", "email": "v@email.com", "password": "123",
             "first_name": "A", "last_name": "B"},
        ],
    )
    async def test_schema_violations_are_422(self, client, payload):
        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 422

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["a" * 73, "é" * 37], ids=["ascii", "multibyte"])
    async def test_password_over_72_bytes_is_422(self, client, password):
        response = await client.post(
            "/api/auth/register",
            json={"username": "longpass", "email": "longpass@email.com", "password": password,
                  "first_name": "Long", "last_name": "Pass"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_login_needs_the_exact_password(self, client):
        await register(client, "alice", password="a" * 72)

        exact = await client.post(
            "/api/auth/login", json={"username_or_email": "alice", "password": "a" * 72}
        )
        extended = await client.post(
            "/api/auth/login", json={"username_or_email": "alice", "password": "a" * 72 + "DIFFERENT"}
        )

        assert exact.status_code == 200
        assert extended.status_code == 401


class TestAccessPolicy:

    @pytest.mark.asyncio
    async def test_anonymous_mutation_is_401(self, client):
        await register(client, "alice")

        response = await client.post("/api/posts", json={"content": "hi"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_acting_for_someone_else_is_403(self, client):
        alice, alice_headers = await register(client, "alice")
        bob, _ = await register(client, "bob")

        follow = await client.post(
            f"/api/follows/{bob['id']}/follow/{alice['id']}", headers=alice_headers
        )
        profile = await client.put(
            f"/api/users/{bob['id']}",
            json={"username": "bob", "email": "bob@email.com",
                  "first_name": "Hacked", "last_name": "Name"},
            headers=alice_headers,
        )

        assert follow.status_code == 403
        assert profile.status_code == 403
        assert follow.json()["error"] == "forbidden"

    @pytest.mark.asyncio
    async def test_reads_are_public(self, client):
        alice, _ = await register(client, "alice")

        assert (await client.get(f"/api/users/{alice['id']}")).status_code == 200
        assert (await client.get("/api/users/exists/username/alice")).json() is True
        assert (await client.get("/api/users/exists/email/nobody@email.com")).json() is False


class TestSocialFlow:

    @pytest.mark.asyncio
    async def test_follow_post_feed(self, client):
        a, a_headers = await register(client, "usera")
        b, b_headers = await register(client, "userb")

        follow = await client.post(f"/api/follows/{a['id']}/follow/{b['id']}", headers=a_headers)
        assert follow.status_code == 201

        again = await client.post(f"/api/follows/{a['id']}/follow/{b['id']}", headers=a_headers)
        assert again.status_code == 409

        self_follow = await client.post(f"/api/follows/{a['id']}/follow/{a['id']}", headers=a_headers)
        assert self_follow.status_code == 400

        for content in ("hello", "world"):
            created = await client.post("/api/posts", json={"content": content}, headers=b_headers)
            assert created.status_code == 201

        feed = await client.get("/api/posts/feed", headers=a_headers)
        assert [p["content"] for p in feed.json()] == ["world", "hello"]

        public_feed = await client.get(f"/api/posts/feed/{a['id']}")
        assert [p["content"] for p in public_feed.json()] == ["world", "hello"]

        empty = await client.get(f"/api/posts/feed/{b['id']}")
        assert empty.json() == []

        is_following = await client.get(f"/api/follows/{a['id']}/following/{b['id']}")
        assert is_following.json() is True
        count = await client.get(f"/api/follows/{b['id']}/followers/count")
        assert count.json() == 1

        unfollow = await client.delete(f"/api/follows/{a['id']}/unfollow/{b['id']}", headers=a_headers)
        assert unfollow.status_code == 200
        assert (await client.get("/api/posts/feed", headers=a_headers)).json() == []

    @pytest.mark.asyncio
    async def test_feed_for_unknown_user_is_404(self, client):
        response = await client.get("/api/posts/feed/999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_paginated_feed_sets_total_header(self, client):
        a, a_headers = await register(client, "usera")
        b, b_headers = await register(client, "userb")
        await client.post(f"/api/follows/{a['id']}/follow/{b['id']}", headers=a_headers)
        for i in range(3):
            await client.post("/api/posts", json={"content": f"post {i}"}, headers=b_headers)

        response = await client.get(f"/api/posts/feed/{a['id']}/paginated?page=0&size=2")

        assert response.status_code == 200
        assert response.headers["X-Total-Count"] == "3"
        body = response.json()
        assert [p["content"] for p in body["items"]] == ["post 2", "post 1"]
        assert body["total_pages"] == 2
        assert body["page"] == 0
        assert body["size"] == 2

    @pytest.mark.asyncio
    async def test_page_size_bounds(self, client):
        assert (await client.get("/api/posts/paginated?size=0")).status_code == 422
        assert (await client.get("/api/posts/paginated?size=101")).status_code == 422
        assert (await client.get("/api/posts/paginated?page=-1")).status_code == 422

    @pytest.mark.asyncio
    async def test_likes_and_comments(self, client):
        alice, alice_headers = await register(client, "alice")
        bob, bob_headers = await register(client, "bob")
        post = (await client.post("/api/posts", json={"content": "Hello"}, headers=alice_headers)).json()

        own_like = await client.post(f"/api/likes/{alice['id']}/like/{post['id']}", headers=alice_headers)
        assert own_like.status_code == 400

        like = await client.post(f"/api/likes/{bob['id']}/like/{post['id']}", headers=bob_headers)
        assert like.status_code == 201

        comment = await client.post(
            f"/api/comments/{bob['id']}/comment/{post['id']}",
            json={"content": "Amazing post!"},
            headers=bob_headers,
        )
        assert comment.status_code == 201

        fetched = (await client.get(f"/api/posts/{post['id']}")).json()
        assert fetched["like_count"] == 1
        assert fetched["comment_count"] == 1
        assert fetched["user"]["username"] == "alice"

        edit = await client.put(
            f"/api/comments/{comment.json()['id']}",
            json={"content": "edited by alice"},
            headers=alice_headers,
        )
        assert edit.status_code == 403

        toggle = await client.post(f"/api/likes/{bob['id']}/toggle/{post['id']}", headers=bob_headers)
        assert toggle.json()["liked"] is False

    @pytest.mark.asyncio
    async def test_bad_date_is_400(self, client):
        response = await client.get("/api/posts/after/not-a-date")

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "date"

    @pytest.mark.asyncio
    async def test_delete_account(self, client):
        alice, alice_headers = await register(client, "alice")
        await client.post("/api/posts", json={"content": "bye"}, headers=alice_headers)

        response = await client.delete(f"/api/users/{alice['id']}", headers=alice_headers)

        assert response.status_code == 200
        assert (await client.get(f"/api/users/{alice['id']}")).status_code == 404
        assert (await client.get("/api/posts")).json() == []
        # the token now names a missing account
        assert (await client.get("/api/auth/me", headers=alice_headers)).status_code == 401


class TestOperational:

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client):
        response = await client.get("/api/users", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, client):
        response = await client.get("/api/users")

        assert len(response.headers["X-Request-ID"]) == 8
