"""Domain services for ThinkInk."""

from thinkink.domain.services.auth_service import (
    AuthService,
    InvalidCredentialsError,
    LoginResult,
)
from thinkink.domain.services.post_service import PostService, canonical_id, is_owner

__all__ = [
    "AuthService",
    "InvalidCredentialsError",
    "LoginResult",
    "PostService",
    "canonical_id",
    "is_owner",
]
