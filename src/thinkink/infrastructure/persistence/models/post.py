"""SQLAlchemy model for the posts table."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from thinkink.infrastructure.persistence.database import Base
from thinkink.infrastructure.persistence.models.user import utcnow

TITLE_MAX_LENGTH = 255


class PostModel(Base):
    """SQLAlchemy model for the posts table.

    The author is loaded with every post (``selectin``) so callers always get
    the denormalized ``{id, username}`` view without a second query.

    Attributes:
        id: Primary key (UUID string).
        title: Post title.
        summary: Short summary shown in listings.
        content: Post body.
        cover: Public locator (URL) of the cover image, if any.
        cover_key: Media store key of the cover object, used for deletion.
        author_id: Foreign key to users table, never reassigned.
        created_at: Timestamp when the post was created (listing sort key).
        updated_at: Timestamp of the last write.
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Post ID (UUID)",
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    cover: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        comment="Cover image locator",
    )
    cover_key: Mapped[str | None] = mapped_column(
        String(512),
        nullable=True,
        comment="Media store key of the cover image",
    )
    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Foreign key to users table",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="posts",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title={self.title!r}, author_id={self.author_id})>"
