"""Tests for PostRepository against an in-memory database."""

from datetime import datetime, timedelta, timezone

import pytest

from thinkink.infrastructure.persistence.models import PostModel
from thinkink.infrastructure.persistence.repositories import (
    RECENT_POSTS_LIMIT,
    PostRepository,
)


@pytest.mark.asyncio
async def test_create_returns_post_with_author(db_session, make_user):
    author = await make_user("alice")
    repo = PostRepository(db_session)

    post = await repo.create(
        title="Title",
        summary="Summary",
        content="Content",
        author_id=author.id,
        cover="https://media.test/posts/abc.png",
        cover_key="posts/abc",
    )

    assert post.id
    assert post.author.username == "alice"
    assert post.cover_key == "posts/abc"
    assert post.created_at is not None
    assert post.updated_at is not None


@pytest.mark.asyncio
async def test_get_by_id_unknown_returns_none(db_session):
    assert await PostRepository(db_session).get_by_id("missing") is None


@pytest.mark.asyncio
async def test_list_recent_is_newest_first_and_capped(db_session, make_user):
    author = await make_user("alice")
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i in range(RECENT_POSTS_LIMIT + 5):
        db_session.add(
            PostModel(
                title=f"post {i}",
                summary="s",
                content="c",
                author_id=author.id,
                created_at=start + timedelta(minutes=i),
            )
        )
    await db_session.commit()

    posts = await PostRepository(db_session).list_recent()

    assert len(posts) == RECENT_POSTS_LIMIT
    assert posts[0].title == f"post {RECENT_POSTS_LIMIT + 4}"
    assert posts[-1].title == "post 5"
    assert all(post.author.username == "alice" for post in posts)


@pytest.mark.asyncio
async def test_list_recent_never_exceeds_limit(db_session, make_user):
    author = await make_user("alice")
    for i in range(RECENT_POSTS_LIMIT + 1):
        db_session.add(PostModel(title=f"p{i}", summary="s", content="c", author_id=author.id))
    await db_session.commit()

    posts = await PostRepository(db_session).list_recent(limit=100)

    assert len(posts) == RECENT_POSTS_LIMIT


@pytest.mark.asyncio
async def test_update_replaces_mutable_fields(db_session, make_user, make_post):
    author = await make_user("alice")
    post = await make_post(author)
    original_author = post.author_id

    updated = await PostRepository(db_session).update(
        post,
        title="New",
        summary="New summary",
        content="New content",
        cover="https://media.test/posts/new.png",
        cover_key="posts/new",
    )

    assert updated.title == "New"
    assert updated.summary == "New summary"
    assert updated.content == "New content"
    assert updated.cover_key == "posts/new"
    assert updated.author_id == original_author


@pytest.mark.asyncio
async def test_delete_by_id(db_session, make_user, make_post):
    author = await make_user("alice")
    post = await make_post(author)
    post_id = post.id
    repo = PostRepository(db_session)

    assert await repo.delete_by_id(post_id) is True
    await db_session.commit()

    assert await repo.get_by_id(post_id) is None
    assert await repo.delete_by_id(post_id) is False
