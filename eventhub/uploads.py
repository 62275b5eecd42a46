"""Filesystem-backed storage for user-uploaded images."""

import logging
import os
import uuid
from pathlib import Path

from fastapi import UploadFile, status

from eventhub.config import settings
from eventhub.exceptions import NotFoundError, UploadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
PUBLIC_PREFIX = "/uploads"


def upload_dir() -> Path:
    return Path(settings.UPLOAD_DIR)


async def save_upload(upload: UploadFile) -> str:
    """Persist ``upload`` under a fresh name and return its public path."""
    if upload.content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise UploadError("Invalid file type. Only JPEG, PNG and GIF are allowed.")

    extension = os.path.splitext(os.path.basename(upload.filename or ""))[1].lower()
    filename = f"{uuid.uuid4().hex}{extension}"
    directory = upload_dir()
    directory.mkdir(parents=True, exist_ok=True)
    destination = directory / filename

    written = 0
    try:
        with destination.open("wb") as out:
            while chunk := await upload.read(CHUNK_SIZE):
                written += len(chunk)
                if written > settings.MAX_UPLOAD_SIZE:
                    raise UploadError(
                        f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE} bytes.",
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    )
                out.write(chunk)
    except BaseException:
        destination.unlink(missing_ok=True)
        raise

    logger.info(f"Stored upload '{upload.filename}' as {filename} ({written} bytes)")
    return f"{PUBLIC_PREFIX}/{filename}"


def discard_upload(public_path: str) -> None:
    (upload_dir() / os.path.basename(public_path)).unlink(missing_ok=True)


def resolve_upload(filename: str) -> Path:
    # Only the final path component is honoured
    name = os.path.basename(filename)
    path = upload_dir() / name
    if not name or name in (".", "..") or not path.is_file():
        raise NotFoundError("File not found")
    return path
