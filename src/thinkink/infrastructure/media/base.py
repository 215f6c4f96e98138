"""Base abstractions for media store providers."""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse


@dataclass(slots=True, frozen=True)
class StoredMedia:
    """Result of a successful upload.

    Attributes:
        locator: Public URL of the stored object.
        key: Extension-less identifier (``<folder>/<uuid>``) used for deletion.
    """

    locator: str
    key: str


def public_id_from_locator(locator: str, folder: str) -> str:
    """Derive the deletion key for a locator.

    The key is ``<folder>/<last path segment without its extension>``; only
    locators produced by a provider in this package are guaranteed to map
    back to their object.

    Example:
        >>> public_id_from_locator("https://cdn.example.com/posts/abc123.png", "posts")
        'posts/abc123'
    """
    segment = PurePosixPath(urlparse(locator).path).name
    stem = segment.split(".")[0]
    if not stem:
        raise ValueError(f"Cannot derive media key from locator: {locator!r}")
    return f"{folder}/{stem}" if folder else stem


class MediaStore(ABC):
    """Abstract base class for media store providers.

    Objects are stored as ``<folder>/<uuid><ext>``; callers address them for
    deletion by the extension-less key returned in :class:`StoredMedia`.
    """

    def __init__(self, folder: str) -> None:
        self.folder = folder.strip("/")

    def _new_object_name(self, filename: str) -> tuple[str, str]:
        """Return ``(key, object_name)`` for a new upload."""
        stem = uuid.uuid4().hex
        key = f"{self.folder}/{stem}" if self.folder else stem
        return key, f"{key}{Path(filename).suffix.lower()}"

    @abstractmethod
    async def upload(self, source: Path, filename: str, content_type: str) -> StoredMedia:
        """Store the file at ``source`` and return its locator and key.

        Raises:
            UploadFailedError: On any transport or service error.
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete the object stored under ``key``.

        Raises:
            MediaStoreError: If the provider reports a failure.
        """
        ...

    @abstractmethod
    async def test_connection(self) -> tuple[bool, str | None]:
        """Test provider connectivity and credentials."""
        ...
