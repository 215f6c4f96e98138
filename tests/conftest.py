"""Pytest configuration for all tests."""

import os

os.environ.setdefault("THINKINK_ENVIRONMENT", "testing")

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from thinkink.core.exceptions import MediaStoreError, UploadFailedError
from thinkink.infrastructure.auth import hash_password, token_service
from thinkink.infrastructure.media import MediaStore, StoredMedia
from thinkink.infrastructure.persistence.database import Base
from thinkink.infrastructure.persistence.models import PostModel, UserModel

MEDIA_BASE_URL = "https://media.test"


class RecordingMediaStore(MediaStore):
    """In-memory media store that records every call made to it."""

    def __init__(self, folder: str = "posts") -> None:
        super().__init__(folder)
        self.calls: list[tuple[str, str]] = []
        self.objects: dict[str, bytes] = {}
        self.fail_upload = False
        self.fail_delete = False

    async def upload(self, source: Path, filename: str, content_type: str) -> StoredMedia:
        self.calls.append(("upload", filename))
        if self.fail_upload:
            raise UploadFailedError("upload rejected")
        key, object_name = self._new_object_name(filename)
        self.objects[key] = Path(source).read_bytes()
        return StoredMedia(locator=f"{MEDIA_BASE_URL}/{object_name}", key=key)

    async def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        if self.fail_delete:
            raise MediaStoreError("delete rejected")
        if self.objects.pop(key, None) is None:
            raise MediaStoreError(f"Media not found: {key}")

    async def test_connection(self) -> tuple[bool, str | None]:
        return True, "ok"

    @property
    def deleted(self) -> list[str]:
        return [arg for op, arg in self.calls if op == "delete"]

    @property
    def uploaded(self) -> list[str]:
        return [arg for op, arg in self.calls if op == "upload"]


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def media_store() -> RecordingMediaStore:
    return RecordingMediaStore()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, media_store: RecordingMediaStore
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database and media dependencies."""
    from thinkink.infrastructure.api.app import app
    from thinkink.infrastructure.api.dependencies import provide_media_store
    from thinkink.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.dependency_overrides[provide_media_store] = lambda: media_store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory that inserts a user with the given credentials."""

    async def _make_user(username: str = "alice", password: str = "password123") -> UserModel:
        user = UserModel(username=username, password_hash=hash_password(password))
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_post(db_session: AsyncSession, media_store: RecordingMediaStore):
    """Factory that inserts a post, optionally with a cover held by the media store."""

    async def _make_post(
        author: UserModel,
        title: str = "Hello",
        with_cover: bool = False,
        store_key: bool = True,
    ) -> PostModel:
        cover = cover_key = None
        if with_cover:
            key, object_name = media_store._new_object_name("cover.png")
            media_store.objects[key] = b"old-cover"
            cover = f"{MEDIA_BASE_URL}/{object_name}"
            cover_key = key if store_key else None

        post = PostModel(
            title=title,
            summary=f"{title} summary",
            content=f"{title} content",
            cover=cover,
            cover_key=cover_key,
            author_id=author.id,
        )
        db_session.add(post)
        await db_session.commit()
        await db_session.refresh(post, attribute_names=["author"])
        return post

    return _make_post


def auth_headers(user: UserModel) -> dict[str, str]:
    token = token_service.issue(user_id=user.id, username=user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers
