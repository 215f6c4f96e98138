"""User repository for database operations."""

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from thinkink.core.exceptions import ConflictError
from thinkink.infrastructure.persistence.models import UserModel


class UserRepository:
    """Credential store: persists user identities and password hashes."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, username: str, password_hash: str) -> UserModel:
        """Create a new user.

        The username unique index is the source of truth for uniqueness; a
        violation on insert is reported as a conflict.

        Args:
            username: Login name.
            password_hash: Hashed password.

        Returns:
            Created user model.

        Raises:
            ConflictError: If a user with this username already exists.
        """
        user = UserModel(username=username, password_hash=password_hash)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Username already exists") from e
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> UserModel | None:
        """Get a user by username.

        Args:
            username: Login name.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        return result.scalar_one_or_none()

    async def update_last_login(self, user_id: str) -> None:
        """Update the last_login timestamp for a user.

        Args:
            user_id: ID of the user to update.
        """
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(last_login=datetime.now(timezone.utc))
        )
        await self.session.flush()

    async def update_password_hash(self, user: UserModel, password_hash: str) -> None:
        """Replace a user's password hash (used to upgrade outdated hashes)."""
        user.password_hash = password_hash
        await self.session.flush()
