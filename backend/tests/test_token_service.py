"""
SocialHub Backend — Token Service Unit Tests
=============================================

What we test:
    ✅ issue → validate round trip yields the subject
    ✅ Expiry: valid just before iat + 24h, invalid after
    ✅ Tokens issued in the past and already expired
    ✅ Wrong secret, tampered payload, garbage, None and empty input
    ✅ Missing claims
    ✅ verify_matches_identity
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from socialhub.security.tokens import TokenService, TokenValidation

SECRET = "unit-test-secret-key-that-is-32-bytes-or-more"


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class TestTokenIssueAndValidate:

    def setup_method(self):
        self.clock = FixedClock(datetime.now(timezone.utc).replace(microsecond=0))
        self.service = TokenService(secret=SECRET, clock=self.clock)

    def test_round_trip_returns_subject(self):
        token = self.service.issue("alice_smith")

        result = self.service.validate(token)

        assert result == TokenValidation(valid=True, subject="alice_smith")

    def test_token_has_three_segments_and_expected_claims(self):
        token = self.service.issue("alice_smith")
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert token.count(".") == 2
        assert claims["sub"] == "alice_smith"
        assert claims["exp"] - claims["iat"] == 86_400

    def test_valid_until_just_before_expiry(self):
        token = self.service.issue("bob")
        self.clock.advance(hours=23, minutes=59, seconds=59)

        assert self.service.validate(token).valid is True

    def test_invalid_once_lifetime_has_passed(self):
        token = self.service.issue("bob")
        self.clock.advance(hours=24, seconds=1)

        result = self.service.validate(token)

        assert result.valid is False
        assert result.subject is None

    def test_token_issued_long_ago_is_expired(self):
        past = TokenService(
            secret=SECRET,
            clock=lambda: datetime.now(timezone.utc) - timedelta(hours=25),
        )
        token = past.issue("carol")

        assert self.service.validate(token).valid is False

    def test_custom_expiration(self):
        short = TokenService(secret=SECRET, expiration=timedelta(minutes=5), clock=self.clock)
        token = short.issue("dave")
        self.clock.advance(minutes=6)

        assert short.validate(token).valid is False


class TestTokenRejection:

    def setup_method(self):
        self.service = TokenService(secret=SECRET)

    @pytest.mark.parametrize("token", [None, "", "not-a-token", "a.b.c", "....."])
    def test_malformed_input_is_invalid(self, token):
        assert self.service.validate(token) == TokenValidation.invalid()

    def test_wrong_secret_is_invalid(self):
        other = TokenService(secret="another-secret-key-that-is-32-bytes-long!")
        token = other.issue("alice_smith")

        assert self.service.validate(token).valid is False

    def test_tampered_payload_is_invalid(self):
        token = self.service.issue("alice_smith")
        header, _, signature = token.split(".")
        forged_payload = jwt.encode(
            {"sub": "admin", "iat": 0, "exp": 9_999_999_999}, "x" * 32, algorithm="HS256"
        ).split(".")[1]

        assert self.service.validate(f"{header}.{forged_payload}.{signature}").valid is False

    def test_missing_subject_is_invalid(self):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode({"iat": now, "exp": now + 3600}, SECRET, algorithm="HS256")

        assert self.service.validate(token).valid is False

    def test_missing_expiry_is_invalid(self):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode({"sub": "alice", "iat": now}, SECRET, algorithm="HS256")

        assert self.service.validate(token).valid is False

    def test_unsigned_token_is_invalid(self):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode({"sub": "alice", "iat": now, "exp": now + 3600}, None, algorithm="none")

        assert self.service.validate(token).valid is False


class TestVerifyMatchesIdentity:

    def setup_method(self):
        self.service = TokenService(secret=SECRET)

    def test_matching_subject(self):
        token = self.service.issue("alice_smith")
        assert self.service.verify_matches_identity(token, "alice_smith") is True

    def test_different_subject(self):
        token = self.service.issue("alice_smith")
        assert self.service.verify_matches_identity(token, "bob_jones") is False

    def test_invalid_token(self):
        assert self.service.verify_matches_identity("garbage", "alice_smith") is False
