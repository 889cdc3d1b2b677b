"""Tests for password hashing and bearer tokens."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from diet_tracker.errors import AuthenticationError
from diet_tracker.services.security import PasswordHasher, TokenService


def test_password_hash_verifies_only_the_original() -> None:
    hasher = PasswordHasher()

    hashed = hasher.hash("secret-pass")

    assert hashed != "secret-pass"
    assert hasher.verify("secret-pass", hashed)
    assert not hasher.verify("wrong-pass", hashed)
    assert not hasher.verify("secret-pass", "")


def test_token_roundtrip_returns_user_id() -> None:
    tokens = TokenService(secret="test-secret")
    user_id = uuid4()

    assert tokens.decode(tokens.issue(user_id)) == user_id


def test_expired_token_is_rejected() -> None:
    tokens = TokenService(secret="test-secret", expire_days=30)
    issued = datetime.now(tz=UTC) - timedelta(days=31)

    with pytest.raises(AuthenticationError):
        tokens.decode(tokens.issue(uuid4(), now=issued))


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = TokenService(secret="other-secret").issue(uuid4())

    with pytest.raises(AuthenticationError):
        TokenService(secret="test-secret").decode(token)


def test_malformed_token_is_rejected() -> None:
    with pytest.raises(AuthenticationError):
        TokenService(secret="test-secret").decode("not-a-token")
