"""
Image upload I/O models.
"""

from __future__ import annotations

from pydantic import BaseModel


class ImageUploadRead(BaseModel):
    file_name: str
    content_type: str
    size: int
