"""API routes for ThinkInk."""

from thinkink.infrastructure.api.routes.auth_router import router as auth_router
from thinkink.infrastructure.api.routes.posts_router import router as posts_router

__all__ = ["auth_router", "posts_router"]
