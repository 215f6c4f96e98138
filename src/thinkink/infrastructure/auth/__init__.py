"""Authentication infrastructure: password hashing and session tokens."""

from thinkink.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    SessionIdentity,
    TokenExpiredError,
    TokenService,
    token_service,
)
from thinkink.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "DUMMY_PASSWORD_HASH",
    "InvalidTokenError",
    "SessionIdentity",
    "TokenExpiredError",
    "TokenService",
    "hash_password",
    "needs_rehash",
    "token_service",
    "verify_password",
]
