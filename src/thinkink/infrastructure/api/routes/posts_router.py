"""Post API routes.

Reads are public. Creating requires a session; updating and deleting
additionally require the caller to be the post's author.
"""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from thinkink.domain.services import PostService
from thinkink.infrastructure.api.dependencies import CurrentIdentity, DbSession, Media
from thinkink.infrastructure.api.schemas import DeletePostResponse, PostResponse

router = APIRouter()

OptionalText = Annotated[str | None, Form()]
OptionalFile = Annotated[UploadFile | None, File()]


def _present(upload: UploadFile | None) -> UploadFile | None:
    # Browsers submit an empty, unnamed part when no file is chosen.
    if upload is None or not upload.filename:
        return None
    return upload


@router.post(
    "/post",
    status_code=status.HTTP_201_CREATED,
    response_model=PostResponse,
    responses={
        400: {"description": "Missing fields or rejected file"},
        401: {"description": "Not authenticated"},
    },
)
async def create_post(
    identity: CurrentIdentity,
    session: DbSession,
    media_store: Media,
    title: OptionalText = None,
    summary: OptionalText = None,
    content: OptionalText = None,
    file: OptionalFile = None,
) -> PostResponse:
    """Create a post, uploading its cover image if one is attached."""
    post = await PostService(session, media_store).create_post(
        identity, title, summary, content, _present(file)
    )
    return PostResponse.model_validate(post)


@router.put(
    "/post/{post_id}",
    response_model=PostResponse,
    responses={
        400: {"description": "Missing fields or rejected file"},
        401: {"description": "Not authenticated"},
        403: {"description": "Not the author"},
        404: {"description": "Post not found"},
    },
)
async def update_post(
    post_id: str,
    identity: CurrentIdentity,
    session: DbSession,
    media_store: Media,
    title: OptionalText = None,
    summary: OptionalText = None,
    content: OptionalText = None,
    file: OptionalFile = None,
) -> PostResponse:
    """Replace a post's text and, optionally, its cover image."""
    post = await PostService(session, media_store).update_post(
        identity, post_id, title, summary, content, _present(file)
    )
    return PostResponse.model_validate(post)


@router.delete(
    "/post/{post_id}",
    response_model=DeletePostResponse,
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Not the author"},
        404: {"description": "Post not found"},
    },
)
async def delete_post(
    post_id: str,
    identity: CurrentIdentity,
    session: DbSession,
    media_store: Media,
) -> DeletePostResponse:
    """Delete a post and its cover image."""
    await PostService(session, media_store).delete_post(identity, post_id)
    return DeletePostResponse()


@router.get("/post", response_model=list[PostResponse])
async def list_posts(session: DbSession, media_store: Media) -> list[PostResponse]:
    """List the 20 most recent posts, newest first."""
    posts = await PostService(session, media_store).list_recent()
    return [PostResponse.model_validate(post) for post in posts]


@router.get(
    "/post/{post_id}",
    response_model=PostResponse,
    responses={404: {"description": "Post not found"}},
)
async def get_post(post_id: str, session: DbSession, media_store: Media) -> PostResponse:
    post = await PostService(session, media_store).get_post(post_id)
    return PostResponse.model_validate(post)
