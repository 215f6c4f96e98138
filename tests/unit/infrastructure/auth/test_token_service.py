"""Unit tests for session token issuing and verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from thinkink.infrastructure.auth import (
    InvalidTokenError,
    TokenExpiredError,
    TokenService,
)

SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret_key=SECRET)


class TestTokenService:
    def test_issue_and_verify(self, tokens):
        token = tokens.issue(user_id="user-1", username="alice")

        identity = tokens.verify(token)

        assert identity.user_id == "user-1"
        assert identity.username == "alice"
        assert identity.issued_at.tzinfo is not None

    def test_token_claims(self, tokens):
        token = tokens.issue(user_id="user-1", username="alice")

        decoded = jwt.decode(token, SECRET, algorithms=["HS256"], issuer="thinkink")

        assert decoded["sub"] == "user-1"
        assert decoded["user_id"] == "user-1"
        assert decoded["username"] == "alice"
        assert decoded["exp"] - decoded["iat"] == 3600

    def test_lifetime_is_one_hour(self, tokens):
        assert tokens.lifetime_seconds == 3600

    def test_expired_token_rejected(self, tokens):
        token = tokens.issue(
            user_id="user-1", username="alice", expires_delta=timedelta(seconds=-5)
        )

        with pytest.raises(TokenExpiredError):
            tokens.verify(token)

    def test_expired_is_an_invalid_token(self):
        assert issubclass(TokenExpiredError, InvalidTokenError)

    def test_tampered_token_rejected(self, tokens):
        token = tokens.issue(user_id="user-1", username="alice")
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[::-1]}"

        with pytest.raises(InvalidTokenError):
            tokens.verify(tampered)

    def test_token_from_other_secret_rejected(self, tokens):
        token = TokenService(secret_key="another-secret-key-of-sufficient-size").issue(
            user_id="user-1", username="alice"
        )

        with pytest.raises(InvalidTokenError):
            tokens.verify(token)

    def test_garbage_rejected(self, tokens):
        with pytest.raises(InvalidTokenError):
            tokens.verify("not-a-jwt")

    def test_missing_identity_claims_rejected(self, tokens):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"iss": "thinkink", "sub": "user-1", "iat": now, "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="identity"):
            tokens.verify(token)

    def test_wrong_issuer_rejected(self, tokens):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "iss": "someone-else",
                "sub": "user-1",
                "user_id": "user-1",
                "username": "alice",
                "iat": now,
                "exp": now + timedelta(hours=1),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            tokens.verify(token)
