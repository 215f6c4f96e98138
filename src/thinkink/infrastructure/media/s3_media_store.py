"""Amazon S3 (or S3-compatible) media store."""

import asyncio
from pathlib import Path, PurePosixPath

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ConfigDict

from thinkink.core.exceptions import MediaStoreError, UploadFailedError
from thinkink.core.logging import get_logger
from thinkink.infrastructure.media.base import MediaStore, StoredMedia

logger = get_logger(__name__)


class S3MediaSettings(BaseModel):
    """Configuration settings for the S3 media store."""

    model_config = ConfigDict(from_attributes=True)

    bucket: str
    region: str
    access_key_id: str | None = None
    secret_access_key: str | None = None
    endpoint_url: str | None = None
    public_base_url: str | None = None


class S3MediaStore(MediaStore):
    """Media store implementation for Amazon S3."""

    def __init__(self, settings: S3MediaSettings, folder: str = "posts") -> None:
        super().__init__(folder)
        self.settings = settings
        self._client = None

    def _get_client(self):
        """Get or create the S3 client."""
        if self._client is None:
            client_kwargs = {"region_name": self.settings.region}
            if self.settings.access_key_id and self.settings.secret_access_key:
                client_kwargs["aws_access_key_id"] = self.settings.access_key_id
                client_kwargs["aws_secret_access_key"] = self.settings.secret_access_key
            if self.settings.endpoint_url:
                client_kwargs["endpoint_url"] = self.settings.endpoint_url

            self._client = boto3.client("s3", **client_kwargs)
        return self._client

    def _locator_for(self, object_name: str) -> str:
        if self.settings.public_base_url:
            base = self.settings.public_base_url.rstrip("/")
        elif self.settings.endpoint_url:
            base = f"{self.settings.endpoint_url.rstrip('/')}/{self.settings.bucket}"
        else:
            base = f"https://{self.settings.bucket}.s3.{self.settings.region}.amazonaws.com"
        return f"{base}/{object_name}"

    async def upload(self, source: Path, filename: str, content_type: str) -> StoredMedia:
        key, object_name = self._new_object_name(filename)

        try:
            await asyncio.to_thread(
                self._get_client().upload_file,
                str(source),
                self.settings.bucket,
                object_name,
                ExtraArgs={"ContentType": content_type},
            )
        except (ClientError, BotoCoreError) as e:
            raise UploadFailedError(f"Failed to upload file to S3: {e}") from e

        logger.info("Media stored", key=key, bucket=self.settings.bucket)
        return StoredMedia(locator=self._locator_for(object_name), key=key)

    async def delete(self, key: str) -> None:
        stem = PurePosixPath(key).name
        client = self._get_client()

        try:
            response = await asyncio.to_thread(
                client.list_objects_v2,
                Bucket=self.settings.bucket,
                Prefix=key,
            )
            object_keys = [
                obj["Key"]
                for obj in response.get("Contents", [])
                if PurePosixPath(obj["Key"]).name.split(".")[0] == stem
            ]
            if not object_keys:
                raise MediaStoreError(f"Media not found: {key}")

            await asyncio.to_thread(
                client.delete_objects,
                Bucket=self.settings.bucket,
                Delete={"Objects": [{"Key": k} for k in object_keys], "Quiet": True},
            )
        except (ClientError, BotoCoreError) as e:
            raise MediaStoreError(f"Failed to delete media from S3: {e}") from e

    async def test_connection(self) -> tuple[bool, str | None]:
        try:
            await asyncio.to_thread(self._get_client().head_bucket, Bucket=self.settings.bucket)
            return True, (
                f"S3 connection successful. Bucket '{self.settings.bucket}' "
                f"is accessible in region '{self.settings.region}'."
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            error_message = e.response.get("Error", {}).get("Message", str(e))
            return False, f"S3 connection failed ({error_code}): {error_message}"
        except BotoCoreError as e:
            return False, f"S3 connection failed: {e}"
