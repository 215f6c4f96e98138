"""FastAPI dependencies for authentication, sessions and the media store.

The session token is read from the ``token`` cookie first and from an
``Authorization: Bearer`` header second.
"""

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from thinkink.core.config import get_settings
from thinkink.core.exceptions import UnauthorizedError
from thinkink.core.logging import get_logger
from thinkink.infrastructure.auth import (
    InvalidTokenError,
    SessionIdentity,
    TokenExpiredError,
    token_service,
)
from thinkink.infrastructure.media import MediaStore, get_media_store
from thinkink.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)


def extract_token(request: Request, authorization: str | None) -> str | None:
    """Return the session token carried by the request, if any."""
    token = request.cookies.get(get_settings().cookie_name)
    if token:
        return token

    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def authenticate(token: str | None) -> SessionIdentity:
    """Verify a session token.

    Raises:
        UnauthorizedError: If the token is missing, invalid or expired.
    """
    if not token:
        logger.info("Authentication failed: missing token")
        raise UnauthorizedError("Not authenticated")

    try:
        return token_service.verify(token)
    except TokenExpiredError as e:
        logger.info("Authentication failed: token expired")
        raise UnauthorizedError("Token has expired") from e
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise UnauthorizedError("Invalid token") from e


async def get_current_identity(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> SessionIdentity:
    """Resolve the verified identity of the caller.

    Raises:
        UnauthorizedError: 401 if the token is missing, invalid, or expired.
    """
    return authenticate(extract_token(request, authorization))


def provide_media_store() -> MediaStore:
    return get_media_store()


# Type aliases for dependency injection
CurrentIdentity = Annotated[SessionIdentity, Depends(get_current_identity)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Media = Annotated[MediaStore, Depends(provide_media_store)]
