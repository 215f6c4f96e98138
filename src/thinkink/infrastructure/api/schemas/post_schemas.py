"""Pydantic schemas for post endpoints.

Posts are rendered with camelCase keys and their author joined as
``{id, username}``.
"""

from datetime import datetime

from pydantic import Field

from thinkink.infrastructure.api.schemas.base import CamelModel


class AuthorResponse(CamelModel):
    id: str
    username: str


class PostResponse(CamelModel):
    """A post with its author."""

    id: str = Field(..., description="Post ID")
    title: str
    summary: str
    content: str
    cover: str | None = Field(None, description="Public URL of the cover image")
    author: AuthorResponse
    created_at: datetime
    updated_at: datetime


class DeletePostResponse(CamelModel):
    success: bool = True
    message: str = "Post deleted successfully"
