"""Account workflows: registration, login and profile lookup."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from thinkink.core.exceptions import UnauthorizedError, ValidationError
from thinkink.core.logging import get_logger
from thinkink.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    SessionIdentity,
    TokenService,
    hash_password,
    needs_rehash,
    token_service,
    verify_password,
)
from thinkink.infrastructure.persistence.models import UserModel
from thinkink.infrastructure.persistence.models.user import USERNAME_MIN_LENGTH
from thinkink.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


class InvalidCredentialsError(ValidationError):
    """Raised when a username/password pair does not match a user."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


@dataclass(frozen=True)
class LoginResult:
    """A freshly issued session token and the user it belongs to."""

    token: str
    user: UserModel


class AuthService:
    """Service for user registration and authentication."""

    def __init__(self, session: AsyncSession, tokens: TokenService | None = None) -> None:
        """Initialize the auth service.

        Args:
            session: SQLAlchemy async session.
            tokens: Token service. Defaults to the process-wide instance.
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.tokens = tokens or token_service

    async def register(self, username: str, password: str) -> UserModel:
        """Create a user with a hashed password.

        Raises:
            ValidationError: If username or password is missing, or the
                username is shorter than the minimum length.
            ConflictError: If the username is taken.
        """
        if not username or not password:
            raise ValidationError("Username and password are required")
        if len(username) < USERNAME_MIN_LENGTH:
            raise ValidationError(
                f"Username must be at least {USERNAME_MIN_LENGTH} characters"
            )

        user = await self.user_repo.create(username, hash_password(password))
        await self.session.commit()

        logger.info("User registered", user_id=user.id, username=user.username)
        return user

    async def login(self, username: str, password: str) -> LoginResult:
        """Check credentials and issue a session token.

        Unknown usernames and wrong passwords fail identically; a dummy hash is
        verified for unknown users so both paths cost the same.

        Raises:
            ValidationError: If username or password is missing.
            InvalidCredentialsError: If the credentials do not match.
        """
        if not username or not password:
            raise ValidationError("Username and password are required")

        user = await self.user_repo.get_by_username(username)
        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Login failed: user not found", username=username)
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.info("Login failed: invalid password", user_id=user.id)
            raise InvalidCredentialsError()

        if needs_rehash(user.password_hash):
            await self.user_repo.update_password_hash(user, hash_password(password))

        await self.user_repo.update_last_login(user.id)
        await self.session.commit()

        token = self.tokens.issue(user_id=user.id, username=user.username)
        logger.info("User logged in", user_id=user.id)
        return LoginResult(token=token, user=user)

    async def get_profile(self, identity: SessionIdentity) -> UserModel:
        """Resolve the user behind a verified session.

        Raises:
            UnauthorizedError: If the user no longer exists.
        """
        user = await self.user_repo.get_by_id(identity.user_id)
        if user is None:
            raise UnauthorizedError("Invalid user")
        return user
