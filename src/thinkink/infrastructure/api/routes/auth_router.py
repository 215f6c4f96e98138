"""Authentication API routes.

Provides endpoints for registration, login, session status and logout. The
session token travels in an HTTP-only cookie.
"""

from typing import Annotated

from fastapi import APIRouter, Header, Request, Response, status
from fastapi.responses import JSONResponse

from thinkink.core.config import get_settings
from thinkink.core.exceptions import UnauthorizedError
from thinkink.core.logging import get_logger
from thinkink.domain.services import AuthService
from thinkink.infrastructure.api.dependencies import DbSession, authenticate, extract_token
from thinkink.infrastructure.api.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from thinkink.infrastructure.auth import token_service

logger = get_logger(__name__)

router = APIRouter()


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=token_service.lifetime_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.cookie_samesite,
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    responses={400: {"description": "Validation error or username already taken"}},
)
async def register(request: RegisterRequest, session: DbSession) -> RegisterResponse:
    """Register a new user."""
    user = await AuthService(session).register(request.username, request.password)
    return RegisterResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"description": "Invalid credentials"}},
)
async def login(
    request: LoginRequest,
    response: Response,
    session: DbSession,
) -> LoginResponse:
    """Authenticate a user and set the session cookie."""
    result = await AuthService(session).login(request.username, request.password)
    set_session_cookie(response, result.token)
    return LoginResponse(message="Login successful", username=result.user.username)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={401: {"description": "Not logged in"}},
)
async def profile(
    request: Request,
    session: DbSession,
    authorization: Annotated[str | None, Header()] = None,
) -> ProfileResponse | JSONResponse:
    """Report whether the caller holds a valid session."""
    try:
        identity = authenticate(extract_token(request, authorization))
        user = await AuthService(session).get_profile(identity)
    except UnauthorizedError as e:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"loggedIn": False, "error": e.message},
        )

    return ProfileResponse(user_id=user.id, username=user.username)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    """Clear the session cookie. Tokens are not revoked server-side."""
    settings = get_settings()
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.cookie_samesite,
    )
    return MessageResponse(message="Logged out successfully")
