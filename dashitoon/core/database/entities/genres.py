"""
Genre entity models.

Genres are a fixed, admin-curated vocabulary linked to series many-to-many.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, Text

from ..base import AuditableBase, Base

if TYPE_CHECKING:
    from .series import Series


class GenreSeries(Base, table=True):
    """Link table between genres and series.

    Table: genre_series
    """

    __tablename__ = "genre_series"

    genre_id: int = Field(foreign_key="genres.id", primary_key=True, ondelete="CASCADE")
    series_id: int = Field(foreign_key="series.id", primary_key=True, ondelete="CASCADE")


class Genre(AuditableBase, table=True):
    """Entity for a genre.

    Table: genres
    """

    __tablename__ = "genres"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, unique=True)
    description: str = Field(default="", sa_type=Text)

    series: List["Series"] = Relationship(back_populates="genres", link_model=GenreSeries)

    def __repr__(self) -> str:
        return f"Genre(id={self.id}, name={self.name})"
