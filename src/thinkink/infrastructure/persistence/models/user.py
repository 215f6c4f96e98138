"""SQLAlchemy model for the users table."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from thinkink.infrastructure.persistence.database import Base

USERNAME_MIN_LENGTH = 4


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Usernames are unique across the whole table; the unique index is what
    guarantees it, so registration never relies on a prior existence check.

    Attributes:
        id: Primary key (UUID string).
        username: Login name, unique, immutable after creation.
        password_hash: Argon2 hash, never the plaintext.
        created_at: Timestamp when the user was created.
        last_login: Timestamp of last successful login.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="User ID (UUID)",
    )
    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Unique login name",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp of last successful login",
    )

    posts: Mapped[list["PostModel"]] = relationship(  # noqa: F821
        "PostModel",
        back_populates="author",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
