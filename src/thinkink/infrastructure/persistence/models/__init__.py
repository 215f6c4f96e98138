"""SQLAlchemy models for ThinkInk tables."""

from thinkink.infrastructure.persistence.models.post import PostModel
from thinkink.infrastructure.persistence.models.user import UserModel

__all__ = [
    "PostModel",
    "UserModel",
]
