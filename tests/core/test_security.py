"""
Test suite for password hashing and access tokens.

System role: Verification of credential primitives
"""

import pytest

from resourcehub.core.exceptions import AuthenticationError
from resourcehub.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "test-secret"


class TestPasswordHashing:
    """Test suite for hash_password() and verify_password()."""

    def test_correct_password_should_verify(self) -> None:
        # Arrange
        stored = hash_password("s3cret-pass", iterations=1000)

        # Act / Assert
        assert stored.startswith("pbkdf2_sha256$1000$")
        assert verify_password("s3cret-pass", stored) is True

    def test_wrong_password_should_not_verify(self) -> None:
        stored = hash_password("s3cret-pass", iterations=1000)
        assert verify_password("other-pass", stored) is False

    def test_same_password_should_hash_differently(self) -> None:
        assert hash_password("same", 1000) != hash_password("same", 1000)

    @pytest.mark.parametrize(
        "stored",
        [
            "",
            "garbage",
            "md5$1$salt$digest",
            "pbkdf2_sha256$abc$salt$digest",
            "pbkdf2_sha256$0$salt$digest",
            "pbkdf2_sha256$1000$salt$dig\u00e9st",
        ],
    )
    def test_malformed_hash_should_not_verify(self, stored) -> None:
        assert verify_password("anything", stored) is False


class TestAccessTokens:
    """Test suite for create_access_token() and decode_access_token()."""

    def test_token_should_carry_subject_and_claims(self) -> None:
        # Arrange
        token, expires_at = create_access_token("user-1", {"role": "creator"}, SECRET, "HS256", 5)

        # Act
        payload = decode_access_token(token, SECRET, "HS256")

        # Assert
        assert payload["sub"] == "user-1"
        assert payload["role"] == "creator"
        assert expires_at.tzinfo is not None

    def test_wrong_secret_should_fail(self) -> None:
        token, _ = create_access_token("user-1", {}, SECRET, "HS256", 5)
        with pytest.raises(AuthenticationError):
            decode_access_token(token, "other-secret", "HS256")

    def test_expired_token_should_fail(self) -> None:
        token, _ = create_access_token("user-1", {}, SECRET, "HS256", -1)
        with pytest.raises(AuthenticationError):
            decode_access_token(token, SECRET, "HS256")

    def test_garbage_token_should_fail(self) -> None:
        with pytest.raises(AuthenticationError):
            decode_access_token("not-a-jwt", SECRET, "HS256")
