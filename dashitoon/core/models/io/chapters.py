"""
Chapter and chapter version I/O models.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

from dashitoon.core.models.domain.enums import ChapterStatus

if TYPE_CHECKING:
    from dashitoon.core.database.entities.chapters import Chapter


class ChapterWrite(BaseModel):
    """Schema for the author's chapter editor (create, save and auto-save)."""

    title: str = Field(min_length=1, max_length=255)
    thumbnail: Optional[str] = Field(default=None, max_length=100)
    content: str = Field(description="Chapter body (HTML for novels, image list for comics)")
    note: Optional[str] = Field(default=None, max_length=5000)


class VersionRename(BaseModel):
    version_name: str = Field(min_length=1, max_length=255)


class ChapterVersionRead(BaseModel):
    """Schema for reading one chapter version."""

    id: uuid.UUID
    version_name: str
    title: str
    thumbnail: Optional[str] = None
    content: str
    note: Optional[str] = None
    is_auto_save: bool
    status: ChapterStatus
    timestamp: datetime

    class Config:
        from_attributes = True


class ChapterVersionSummary(BaseModel):
    """Schema for a version in the history list."""

    id: uuid.UUID
    version_name: str
    title: str
    is_auto_save: bool
    status: ChapterStatus
    timestamp: datetime
    is_current: bool = False
    is_published: bool = False

    class Config:
        from_attributes = True


class ChapterRead(BaseModel):
    """Schema for reading a chapter through its current version."""

    id: int
    volume_id: int
    chapter_number: int
    title: str
    thumbnail: Optional[str] = None
    content: str
    note: Optional[str] = None
    status: ChapterStatus
    current_version_id: uuid.UUID
    published_version_id: Optional[uuid.UUID] = None
    published_date: Optional[datetime] = None
    last_modified: Optional[datetime] = None

    @classmethod
    def from_entity(cls, chapter: "Chapter") -> "ChapterRead":
        current = chapter.current_version
        return cls(
            id=chapter.id,
            volume_id=chapter.volume_id,
            chapter_number=chapter.chapter_number,
            title=current.title,
            thumbnail=current.thumbnail,
            content=current.content,
            note=current.note,
            status=ChapterStatus.published if chapter.is_published else ChapterStatus.draft,
            current_version_id=chapter.current_version_id,
            published_version_id=chapter.published_version_id,
            published_date=chapter.published_date,
            last_modified=chapter.last_modified,
        )
