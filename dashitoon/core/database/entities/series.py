"""
Series entity models.

A series is the top-level aggregate authors work on. It owns its volumes,
DashiFan tiers, reviews and the six category ratings that determine its
overall content rating.
"""

from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, List, Mapping, Optional, Tuple

from sqlalchemy import JSON, DateTime
from sqlmodel import Field, Relationship

from dashitoon.core.models.domain.enums import ContentCategory, ContentRating, SeriesStatus, SeriesType
from dashitoon.core.models.domain.rating import rate_series

from ..base import AuditableBase, Base
from .genres import Genre, GenreSeries

if TYPE_CHECKING:
    from .reviews import Review
    from .subscriptions import DashiFan
    from .volumes import Volume


class CategoryRating(Base, table=True):
    """Entity for the author's rating of one content category.

    Owned by ``Series``.

    Table: category_ratings
    """

    __tablename__ = "category_ratings"

    id: Optional[int] = Field(default=None, primary_key=True)
    series_id: Optional[int] = Field(default=None, foreign_key="series.id", index=True, ondelete="CASCADE")
    category: ContentCategory = Field()
    rating: int = Field(ge=0, le=3)

    series: Optional["Series"] = Relationship(back_populates="category_ratings")


class Series(AuditableBase, table=True):
    """Entity for a series.

    ``created_by`` doubles as the owning author's id.

    Table: series
    """

    __tablename__ = "series"
    __audit_owned__: ClassVar[Tuple[str, ...]] = ("category_ratings",)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255, index=True)
    alternative_titles: List[str] = Field(default_factory=list, sa_type=JSON)
    authors: List[str] = Field(default_factory=list, sa_type=JSON)
    start_time: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    synopsis: str = Field(max_length=5000)
    thumbnail: Optional[str] = Field(default=None, max_length=100)
    type: SeriesType = Field(default=SeriesType.novel)
    status: SeriesStatus = Field(default=SeriesStatus.ongoing)
    content_rating: ContentRating = Field(default=ContentRating.all_ages)
    volume_count: int = Field(default=0)

    category_ratings: List[CategoryRating] = Relationship(
        back_populates="series",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True, "order_by": "CategoryRating.category"},
    )
    genres: List[Genre] = Relationship(
        back_populates="series", link_model=GenreSeries, sa_relationship_kwargs={"passive_deletes": True}
    )
    volumes: List["Volume"] = Relationship(
        back_populates="series",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True, "order_by": "Volume.volume_number"},
    )
    tiers: List["DashiFan"] = Relationship(
        back_populates="series", sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True}
    )
    reviews: List["Review"] = Relationship(
        back_populates="series", sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True}
    )

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return user_id is not None and self.created_by == user_id

    def set_category_ratings(self, ratings: Mapping[ContentCategory, int]) -> ContentRating:
        """Replace the rubric answers and recompute the overall content rating.

        Existing rows are updated in place so unchanged categories keep their ids.
        """
        self.content_rating = rate_series(ratings)
        existing = {row.category: row for row in self.category_ratings}
        for category, option in ratings.items():
            row = existing.get(category)
            if row is None:
                self.category_ratings.append(CategoryRating(category=category, rating=option))
            elif row.rating != option:
                row.rating = option
        return self.content_rating

    def next_volume_number(self) -> int:
        return self.volume_count + 1

    def __repr__(self) -> str:
        return f"Series(id={self.id}, title={self.title}, content_rating={self.content_rating.name})"
