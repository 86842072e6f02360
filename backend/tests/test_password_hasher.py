"""SocialHub Backend — PasswordHasher unit tests."""

import pytest

from socialhub.security.passwords import PasswordHasher


class TestPasswordHasher:

    def setup_method(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_verify_accepts_original_password(self):
        digest = self.hasher.hash("password123")
        assert self.hasher.verify("password123", digest) is True

    def test_verify_rejects_other_password(self):
        digest = self.hasher.hash("password123")
        assert self.hasher.verify("password124", digest) is False

    def test_digest_is_salted_and_never_the_plaintext(self):
        first = self.hasher.hash("password123")
        second = self.hasher.hash("password123")

        assert first != second
        assert "password123" not in first
        assert first.startswith("$2b$04$")

    def test_malformed_digest_verifies_false(self):
        assert self.hasher.verify("password123", "not-a-bcrypt-digest") is False

    def test_empty_digest_verifies_false(self):
        assert self.hasher.verify("password123", "") is False

    def test_rounds_default_from_settings(self):
        # conftest sets BCRYPT_ROUNDS=4
        assert PasswordHasher().rounds == 4

    def test_password_over_72_bytes_is_refused(self):
        with pytest.raises(ValueError):
            self.hasher.hash("a" * 73)

    def test_shared_72_byte_prefix_does_not_verify(self):
        digest = self.hasher.hash("a" * 72)

        assert self.hasher.verify("a" * 72, digest) is True
        assert self.hasher.verify("a" * 72 + "X", digest) is False

    def test_limit_counts_bytes_not_characters(self):
        # 37 two-byte characters encode to 74 bytes
        with pytest.raises(ValueError):
            self.hasher.hash("é" * 37)
        assert self.hasher.verify("é" * 36, self.hasher.hash("é" * 36)) is True
