"""Pydantic schemas for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from thinkink.infrastructure.api.schemas.base import CamelModel
from thinkink.infrastructure.persistence.models.user import USERNAME_MIN_LENGTH


class RegisterRequest(BaseModel):
    """Request body for user registration."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=255,
        description="Unique username",
    )
    password: str = Field(..., min_length=1, description="User's password")


class LoginRequest(BaseModel):
    """Request body for user login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, description="User's password")


class UserResponse(CamelModel):
    """User information in auth responses."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    created_at: datetime = Field(..., description="When the user was created")


class RegisterResponse(BaseModel):
    """Response for successful registration."""

    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    """Response for successful login. The token itself is set as a cookie."""

    message: str
    username: str


class ProfileResponse(CamelModel):
    """Session status of the caller."""

    logged_in: bool = True
    user_id: str
    username: str


class MessageResponse(BaseModel):
    message: str
