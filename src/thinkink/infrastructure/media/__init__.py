"""Media store providers for post cover images."""

from functools import lru_cache

from thinkink.core.config import get_settings
from thinkink.infrastructure.media.base import MediaStore, StoredMedia, public_id_from_locator
from thinkink.infrastructure.media.local_media_store import LocalMediaStore
from thinkink.infrastructure.media.s3_media_store import S3MediaSettings, S3MediaStore
from thinkink.infrastructure.media.spool import SpooledUpload, spool_upload


@lru_cache
def get_media_store() -> MediaStore:
    """Build the configured media store once per process."""
    settings = get_settings()

    if settings.media_provider == "s3":
        return S3MediaStore(
            S3MediaSettings(
                bucket=settings.s3_bucket,
                region=settings.s3_region,
                access_key_id=settings.s3_access_key_id,
                secret_access_key=settings.s3_secret_access_key,
                endpoint_url=settings.s3_endpoint_url,
                public_base_url=settings.s3_public_base_url,
            ),
            folder=settings.media_folder,
        )

    return LocalMediaStore(
        root=settings.media_local_path,
        public_base_url=settings.media_public_base_url,
        folder=settings.media_folder,
    )


__all__ = [
    "LocalMediaStore",
    "MediaStore",
    "S3MediaSettings",
    "S3MediaStore",
    "SpooledUpload",
    "StoredMedia",
    "get_media_store",
    "public_id_from_locator",
    "spool_upload",
]
