"""
Volume I/O models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class VolumeWrite(BaseModel):
    """Schema for creating or updating a volume."""

    name: str = Field(min_length=1, max_length=100)
    introduction: Optional[str] = Field(default=None, max_length=2000)


class VolumeRead(BaseModel):
    """Schema for reading a volume."""

    id: int
    series_id: int
    volume_number: int
    name: str
    introduction: Optional[str] = None
    chapter_count: int

    class Config:
        from_attributes = True
