"""Persistence repositories for database operations."""

from thinkink.infrastructure.persistence.repositories.post_repository import (
    RECENT_POSTS_LIMIT,
    PostRepository,
)
from thinkink.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "RECENT_POSTS_LIMIT",
    "PostRepository",
    "UserRepository",
]
