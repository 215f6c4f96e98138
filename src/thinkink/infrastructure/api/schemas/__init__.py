"""Pydantic schemas for API requests and responses."""

from thinkink.infrastructure.api.schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from thinkink.infrastructure.api.schemas.post_schemas import (
    AuthorResponse,
    DeletePostResponse,
    PostResponse,
)

__all__ = [
    "AuthorResponse",
    "DeletePostResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PostResponse",
    "ProfileResponse",
    "RegisterRequest",
    "RegisterResponse",
    "UserResponse",
]
