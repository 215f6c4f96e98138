"""Post workflows and the ownership check that gates every mutation.

Update and delete run strictly in this order:

1. the caller's session has already been verified (see the API dependency),
2. the post is loaded by id (404 when missing),
3. its author is compared with the verified user id (403 on mismatch),
4. the mutation runs, with media side effects ordered around the database
   write as described on each method.

Nothing is rolled back across the database/media boundary. A failed write
after a successful upload leaves the uploaded object behind; it is logged
under ``Orphaned media`` with its key so it can be collected by hand.
Concurrent writers to the same post are not serialized; the last write wins.
"""

import uuid

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from thinkink.core.exceptions import (
    ForbiddenError,
    MediaStoreError,
    NotFoundError,
    ValidationError,
)
from thinkink.core.logging import get_logger
from thinkink.infrastructure.auth import SessionIdentity
from thinkink.infrastructure.media import (
    MediaStore,
    StoredMedia,
    public_id_from_locator,
    spool_upload,
)
from thinkink.infrastructure.persistence.models import PostModel
from thinkink.infrastructure.persistence.models.post import TITLE_MAX_LENGTH
from thinkink.infrastructure.persistence.repositories import PostRepository

logger = get_logger(__name__)


def canonical_id(value: object) -> str:
    """Normalize an identifier for equality checks.

    UUIDs compare in their canonical dashed lowercase form regardless of how
    they were written; anything else compares as a stripped string.
    """
    text = str(value).strip()
    try:
        return str(uuid.UUID(text))
    except ValueError:
        return text


def is_owner(post: PostModel, identity: SessionIdentity) -> bool:
    return canonical_id(post.author_id) == canonical_id(identity.user_id)


class PostService:
    """Service for creating, reading, updating and deleting posts."""

    def __init__(self, session: AsyncSession, media_store: MediaStore) -> None:
        """Initialize the post service.

        Args:
            session: SQLAlchemy async session.
            media_store: Where cover images are uploaded to and deleted from.
        """
        self.session = session
        self.post_repo = PostRepository(session)
        self.media_store = media_store

    async def list_recent(self) -> list[PostModel]:
        return await self.post_repo.list_recent()

    async def get_post(self, post_id: str) -> PostModel:
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def create_post(
        self,
        identity: SessionIdentity,
        title: str | None,
        summary: str | None,
        content: str | None,
        cover: UploadFile | None = None,
    ) -> PostModel:
        """Create a post authored by the verified user.

        The cover, when given, is uploaded before the row is written so the
        stored locator is always one the media store returned.

        Raises:
            ValidationError: If a text field is missing or the file is rejected.
            UploadFailedError: If the media store rejects the upload.
        """
        title, summary, content = self._require_fields(title, summary, content)

        stored = await self._upload(cover) if cover is not None else None

        try:
            post = await self.post_repo.create(
                title=title,
                summary=summary,
                content=content,
                author_id=identity.user_id,
                cover=stored.locator if stored else None,
                cover_key=stored.key if stored else None,
            )
            await self.session.commit()
        except Exception:
            if stored is not None:
                logger.warning("Orphaned media after failed post write", key=stored.key)
            raise

        logger.info("Post created", post_id=post.id, user_id=identity.user_id)
        return post

    async def update_post(
        self,
        identity: SessionIdentity,
        post_id: str,
        title: str | None,
        summary: str | None,
        content: str | None,
        cover: UploadFile | None = None,
    ) -> PostModel:
        """Replace a post's title, summary and content, and optionally its cover.

        Title, summary and content are always replaced, so all three must be
        supplied. With a new cover, the upload happens first; the previous
        cover object is deleted only after the upload succeeded, and then the
        row is written. Without a new cover, the current one is kept.

        Raises:
            NotFoundError: If the post does not exist.
            ForbiddenError: If the verified user is not the author.
            ValidationError: If a text field is missing or the file is rejected.
            UploadFailedError: If the media store rejects the upload.
        """
        post = await self._load_owned_post(identity, post_id)
        title, summary, content = self._require_fields(title, summary, content)

        new_cover, new_cover_key = post.cover, post.cover_key
        stored = None
        if cover is not None:
            stored = await self._upload(cover)
            previous_key = self._cover_key_of(post)
            if previous_key:
                await self._discard_media(previous_key, post_id=post.id)
            new_cover, new_cover_key = stored.locator, stored.key

        try:
            post = await self.post_repo.update(
                post,
                title=title,
                summary=summary,
                content=content,
                cover=new_cover,
                cover_key=new_cover_key,
            )
            await self.session.commit()
        except Exception:
            if stored is not None:
                logger.warning(
                    "Orphaned media after failed post write",
                    key=stored.key,
                    post_id=post_id,
                )
            raise

        logger.info(
            "Post updated",
            post_id=post.id,
            user_id=identity.user_id,
            cover_replaced=stored is not None,
        )
        return post

    async def delete_post(self, identity: SessionIdentity, post_id: str) -> None:
        """Delete a post, then clean up its cover object.

        The row goes first; a leftover media object is preferable to a post
        that points at a deleted cover. Cover cleanup is best-effort.

        Raises:
            NotFoundError: If the post does not exist.
            ForbiddenError: If the verified user is not the author.
        """
        post = await self._load_owned_post(identity, post_id)
        cover_key = self._cover_key_of(post)

        await self.post_repo.delete_by_id(post.id)
        await self.session.commit()
        logger.info("Post deleted", post_id=post_id, user_id=identity.user_id)

        if cover_key:
            await self._discard_media(cover_key, post_id=post_id)

    async def _load_owned_post(self, identity: SessionIdentity, post_id: str) -> PostModel:
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")

        if not is_owner(post, identity):
            logger.info(
                "Post access denied: not the author",
                post_id=post_id,
                user_id=identity.user_id,
            )
            raise ForbiddenError("Only the author can modify this post")
        return post

    @staticmethod
    def _require_fields(
        title: str | None, summary: str | None, content: str | None
    ) -> tuple[str, str, str]:
        if not title or not summary or not content:
            raise ValidationError("Missing required fields")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
        return title, summary, content

    async def _upload(self, cover: UploadFile) -> StoredMedia:
        async with spool_upload(cover) as spooled:
            return await self.media_store.upload(
                spooled.path,
                filename=spooled.filename,
                content_type=spooled.content_type,
            )

    def _cover_key_of(self, post: PostModel) -> str | None:
        """Return the media key of a post's cover.

        Rows written before keys were stored fall back to deriving the key
        from the locator.
        """
        if post.cover_key:
            return post.cover_key
        if not post.cover:
            return None
        try:
            return public_id_from_locator(post.cover, self.media_store.folder)
        except ValueError:
            logger.warning("Cannot derive media key from cover", post_id=post.id, cover=post.cover)
            return None

    async def _discard_media(self, key: str, post_id: str) -> None:
        try:
            await self.media_store.delete(key)
        except MediaStoreError as e:
            logger.warning("Media cleanup failed", key=key, post_id=post_id, error=str(e))
