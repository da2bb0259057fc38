"""
Thumbnail image storage on the local filesystem.
"""

from __future__ import annotations

import asyncio
import uuid
from pathlib import Path
from typing import Tuple, Union

from dashitoon.core.errors import NotFoundError, ValidationError
from dashitoon.core.logging_config import get_logger

logger = get_logger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}
DEFAULT_MAX_BYTES = 2 * 1024 * 1024


class ImageStorage:
    """Stores uploaded images under one directory with generated names."""

    def __init__(self, directory: Union[str, Path], max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    def _path_for(self, file_name: str) -> Path:
        if not file_name or file_name in (".", "..") or "/" in file_name or "\\" in file_name:
            raise ValidationError("Invalid file name.", errors={"fileName": ["File name must not contain a path."]})
        return self.directory / file_name

    async def upload(self, file_name: str, data: bytes, content_type: str) -> str:
        """Store an image and return the generated name it can be fetched by.

        ``file_name`` is the client's name and is only used for logging.
        """
        extension = ALLOWED_CONTENT_TYPES.get(content_type)
        if extension is None:
            raise ValidationError(
                f"Unsupported image type {content_type}.",
                errors={"file": ["Only JPEG, PNG and WEBP images are allowed."]},
            )
        if not data:
            raise ValidationError("The file is empty.", errors={"file": ["The file is empty."]})
        if len(data) > self.max_bytes:
            raise ValidationError(
                "The file is too large.", errors={"file": [f"Maximum size is {self.max_bytes} bytes."]}
            )

        stored_name = f"{uuid.uuid4().hex}{extension}"
        path = self.directory / stored_name
        await asyncio.to_thread(self._write, path, data)
        logger.info(f"Stored image {file_name!r} as {stored_name} ({len(data)} bytes)")
        return stored_name

    async def fetch(self, file_name: str) -> Tuple[bytes, str]:
        """Return the image bytes and content type."""
        path = self._path_for(file_name)
        if not path.is_file():
            raise NotFoundError(file_name, "Image")
        data = await asyncio.to_thread(path.read_bytes)
        content_type = next(
            (ct for ct, extension in ALLOWED_CONTENT_TYPES.items() if path.suffix == extension), "application/octet-stream"
        )
        return data, content_type

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
