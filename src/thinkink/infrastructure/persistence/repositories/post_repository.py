"""Post repository for database operations."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from thinkink.infrastructure.persistence.models import PostModel

# Listings are capped at a fixed size; there is no pagination cursor.
RECENT_POSTS_LIMIT = 20


class PostRepository:
    """Repository for post database operations.

    Every post returned carries its author loaded, so callers can render the
    ``{id, username}`` author view directly.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(
        self,
        title: str,
        summary: str,
        content: str,
        author_id: str,
        cover: str | None = None,
        cover_key: str | None = None,
    ) -> PostModel:
        """Create a new post owned by ``author_id``.

        Returns:
            Created post with its author loaded.
        """
        post = PostModel(
            title=title,
            summary=summary,
            content=content,
            cover=cover,
            cover_key=cover_key,
            author_id=author_id,
        )
        self.session.add(post)
        await self.session.flush()
        await self.session.refresh(post, attribute_names=["author"])
        return post

    async def get_by_id(self, post_id: str) -> PostModel | None:
        """Get a post by ID.

        Args:
            post_id: Post ID (UUID string).

        Returns:
            Post model if found, None otherwise.
        """
        result = await self.session.execute(
            select(PostModel).where(PostModel.id == post_id)
        )
        return result.scalar_one_or_none()

    async def list_recent(self, limit: int = RECENT_POSTS_LIMIT) -> list[PostModel]:
        """List the newest posts, most recent first.

        Args:
            limit: Maximum number of posts, never more than RECENT_POSTS_LIMIT.

        Returns:
            Posts ordered by created_at descending.
        """
        limit = max(0, min(limit, RECENT_POSTS_LIMIT))
        result = await self.session.execute(
            select(PostModel)
            .order_by(PostModel.created_at.desc(), PostModel.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def update(
        self,
        post: PostModel,
        title: str,
        summary: str,
        content: str,
        cover: str | None,
        cover_key: str | None,
    ) -> PostModel:
        """Replace all mutable fields of a post.

        The author is never touched.

        Returns:
            Updated post.
        """
        post.title = title
        post.summary = summary
        post.content = content
        post.cover = cover
        post.cover_key = cover_key
        self.session.add(post)
        await self.session.flush()
        return post

    async def delete_by_id(self, post_id: str) -> bool:
        """Delete a post by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        result = await self.session.execute(
            delete(PostModel).where(PostModel.id == post_id)
        )
        await self.session.flush()
        return result.rowcount > 0
