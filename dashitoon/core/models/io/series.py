"""
Series, genre and category rating I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from dashitoon.core.models.domain.enums import ContentCategory, ContentRating, SeriesStatus, SeriesType


class GenreRead(BaseModel):
    """Schema for reading a genre."""

    id: int
    name: str
    description: str = ""

    class Config:
        from_attributes = True


class CategoryRatingItem(BaseModel):
    """One answer of the content rating rubric."""

    category: ContentCategory = Field(description="Content category (1 violent .. 6 sensitive)")
    rating: int = Field(ge=0, le=3, description="Option from 0 (none) to 3 (explicit)")

    class Config:
        from_attributes = True


class SeriesWrite(BaseModel):
    """Fields shared by series create and update requests."""

    title: str = Field(min_length=1, max_length=255)
    alternative_titles: List[str] = Field(default_factory=list)
    authors: List[str] = Field(default_factory=list)
    start_time: Optional[datetime] = None
    synopsis: str = Field(default="", max_length=5000)
    thumbnail: Optional[str] = Field(default=None, max_length=100)
    status: SeriesStatus = SeriesStatus.ongoing
    genres: List[int] = Field(min_length=1, description="Genre ids, at least one")
    category_ratings: List[CategoryRatingItem] = Field(description="Exactly one rating per content category")


class SeriesCreate(SeriesWrite):
    """Schema for creating a series."""

    type: SeriesType = Field(default=SeriesType.novel, description="Novel or comic; fixed after creation")


class SeriesUpdate(SeriesWrite):
    """Schema for updating a series."""


class SeriesSummary(BaseModel):
    """Schema for a series in listings."""

    id: int
    title: str
    thumbnail: Optional[str] = None
    type: SeriesType
    status: SeriesStatus
    content_rating: ContentRating
    volume_count: int
    last_modified: Optional[datetime] = None

    class Config:
        from_attributes = True


class SeriesRead(SeriesSummary):
    """Schema for reading a series with its rubric and genres."""

    alternative_titles: List[str]
    authors: List[str]
    start_time: Optional[datetime] = None
    synopsis: str
    genres: List[GenreRead]
    category_ratings: List[CategoryRatingItem]
    created: Optional[datetime] = None
    created_by: Optional[str] = None
    last_modified_by: Optional[str] = None
