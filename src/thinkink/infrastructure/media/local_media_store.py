"""Local filesystem media store, served by the app under ``/uploads``."""

import asyncio
import shutil
from pathlib import Path

from thinkink.core.exceptions import MediaStoreError, UploadFailedError
from thinkink.core.logging import get_logger
from thinkink.infrastructure.media.base import MediaStore, StoredMedia

logger = get_logger(__name__)


class LocalMediaStore(MediaStore):
    """Media store implementation backed by a local directory."""

    def __init__(self, root: str | Path, public_base_url: str, folder: str = "posts") -> None:
        super().__init__(folder)
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _resolve(self, object_name: str) -> Path:
        path = (self.root / object_name).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise MediaStoreError(f"Invalid media path: {object_name}")
        return path

    async def upload(self, source: Path, filename: str, content_type: str) -> StoredMedia:
        key, object_name = self._new_object_name(filename)
        destination = self._resolve(object_name)

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(shutil.copyfile, source, destination)
        except OSError as e:
            raise UploadFailedError(f"Failed to store file locally: {e}") from e

        logger.info("Media stored", key=key, path=str(destination))
        return StoredMedia(locator=f"{self.public_base_url}/{object_name}", key=key)

    async def delete(self, key: str) -> None:
        base = self._resolve(key)
        try:
            deleted = await asyncio.to_thread(_delete_matching, base)
        except OSError as e:
            raise MediaStoreError(f"Failed to delete media {key}: {e}") from e
        if not deleted:
            raise MediaStoreError(f"Media not found: {key}")

    async def test_connection(self) -> tuple[bool, str | None]:
        """Verify that the media directory is writable."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            check_file = self.root / ".media_store_check"
            check_file.write_text("ok", encoding="utf-8")
            check_file.unlink(missing_ok=True)
            return True, f"Local media store is writable at '{self.root}'."
        except OSError as e:
            return False, f"Local media store test failed: {e}"


def _delete_matching(base: Path) -> int:
    """Unlink every file named ``base`` with any extension; return how many."""
    matches = [p for p in base.parent.glob(f"{base.name}*") if p.stem == base.name]
    for path in matches:
        path.unlink()
    return len(matches)
