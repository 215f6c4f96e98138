"""Temporary on-disk spooling of uploaded files.

An upload is written to a temporary file before it is forwarded to the
media store. The file is removed when the ``spool_upload`` block exits,
whether the request succeeded or not.
"""

import asyncio
import os
import tempfile
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncGenerator

from fastapi import UploadFile

from thinkink.core.config import get_settings
from thinkink.core.exceptions import ValidationError

CHUNK_SIZE = 64 * 1024


@dataclass(slots=True, frozen=True)
class SpooledUpload:
    """An uploaded file that has been written to local disk."""

    path: Path
    filename: str
    content_type: str
    size: int


@asynccontextmanager
async def spool_upload(
    upload: UploadFile,
    max_size: int | None = None,
    allowed_mime_types: list[str] | None = None,
    directory: str | None = None,
) -> AsyncGenerator[SpooledUpload, None]:
    """Write ``upload`` to a temporary file for the duration of the block.

    Args:
        upload: The multipart file received by the handler.
        max_size: Size limit in bytes. Defaults to the configured limit.
        allowed_mime_types: Accepted content types. Defaults to configuration.
        directory: Where to create the temporary file. Defaults to configuration,
            then the system temp directory.

    Raises:
        ValidationError: If the file is empty, too large, or of a disallowed type.
    """
    settings = get_settings()
    if max_size is None:
        max_size = settings.max_upload_size
    if allowed_mime_types is None:
        allowed_mime_types = settings.allowed_mime_types
    if directory is None:
        directory = settings.upload_tmp_dir

    filename = upload.filename or "upload"
    content_type = upload.content_type or "application/octet-stream"
    if content_type not in allowed_mime_types:
        raise ValidationError(
            f"File type '{content_type}' is not allowed. "
            f"Allowed types: {', '.join(allowed_mime_types)}"
        )

    fd, name = tempfile.mkstemp(
        prefix="thinkink-",
        suffix=Path(filename).suffix.lower(),
        dir=directory,
    )
    path = Path(name)
    try:
        size = 0
        with os.fdopen(fd, "wb") as out:
            while chunk := await upload.read(CHUNK_SIZE):
                size += len(chunk)
                if size > max_size:
                    raise ValidationError(
                        f"File exceeds maximum allowed size ({max_size / (1024 * 1024):.2f}MB)"
                    )
                await asyncio.to_thread(out.write, chunk)
        if size == 0:
            raise ValidationError("Uploaded file is empty")

        yield SpooledUpload(
            path=path,
            filename=filename,
            content_type=content_type,
            size=size,
        )
    finally:
        path.unlink(missing_ok=True)
