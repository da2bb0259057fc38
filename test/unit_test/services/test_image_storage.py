"""
Unit tests for filesystem image storage.
"""

import pytest

from dashitoon.core.errors import NotFoundError, ValidationError
from dashitoon.services import ImageStorage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def storage(tmp_path) -> ImageStorage:
    return ImageStorage(tmp_path / "images", max_bytes=1024)


class TestImageStorage:
    @pytest.mark.parametrize(
        "content_type,extension",
        [("image/png", ".png"), ("image/jpeg", ".jpg"), ("image/webp", ".webp")],
    )
    async def test_upload_and_fetch(self, storage: ImageStorage, content_type, extension):
        name = await storage.upload("cover.bin", PNG_BYTES, content_type)

        assert name.endswith(extension)
        assert "cover" not in name
        data, fetched_type = await storage.fetch(name)
        assert data == PNG_BYTES
        assert fetched_type == content_type

    async def test_unsupported_type(self, storage: ImageStorage):
        with pytest.raises(ValidationError, match="Unsupported image type"):
            await storage.upload("cover.gif", b"GIF89a", "image/gif")

    async def test_empty_file(self, storage: ImageStorage):
        with pytest.raises(ValidationError, match="empty"):
            await storage.upload("cover.png", b"", "image/png")

    async def test_too_large(self, storage: ImageStorage):
        with pytest.raises(ValidationError, match="too large"):
            await storage.upload("cover.png", b"x" * 1025, "image/png")

    @pytest.mark.parametrize("file_name", ["../secrets.png", "a/b.png", "..", "", "a\\b.png"])
    async def test_path_traversal_rejected(self, storage: ImageStorage, file_name):
        with pytest.raises(ValidationError):
            await storage.fetch(file_name)

    async def test_missing_file(self, storage: ImageStorage):
        with pytest.raises(NotFoundError):
            await storage.fetch("0123456789abcdef.png")
