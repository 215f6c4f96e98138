"""Session token service.

Issues and verifies the signed, time-limited JWTs carried in the session
cookie. Verification is stateless: signature and expiry are checked without
any lookup, and tokens are never revoked before they expire.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from thinkink.core.config import get_settings

SESSION_TOKEN_LIFETIME = timedelta(hours=1)


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered with, or expired."""

    pass


class TokenExpiredError(InvalidTokenError):
    """Raised when a token's validity window has elapsed."""

    pass


@dataclass(frozen=True)
class SessionIdentity:
    """Identity claims recovered from a verified session token."""

    user_id: str
    username: str
    issued_at: datetime


class TokenService:
    """Service for issuing and verifying session tokens."""

    ALGORITHM = "HS256"
    ISSUER = "thinkink"

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the token service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
        """
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    @property
    def lifetime_seconds(self) -> int:
        return int(SESSION_TOKEN_LIFETIME.total_seconds())

    def issue(
        self,
        user_id: str,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Issue a session token for a user.

        Args:
            user_id: The user's unique identifier.
            username: The user's username.
            expires_delta: Validity window. Defaults to one hour.

        Returns:
            Encoded JWT.
        """
        if expires_delta is None:
            expires_delta = SESSION_TOKEN_LIFETIME

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": user_id,
            "iat": now,
            "exp": now + expires_delta,
            "user_id": user_id,
            "username": username,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> SessionIdentity:
        """Verify a session token and return the identity it carries.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is malformed, has a bad signature,
                or lacks the identity claims.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

        user_id = payload.get("user_id")
        username = payload.get("username")
        if not isinstance(user_id, str) or not isinstance(username, str):
            raise InvalidTokenError("Token is missing identity claims")

        return SessionIdentity(
            user_id=user_id,
            username=username,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        )


# Default token service instance
token_service = TokenService()
