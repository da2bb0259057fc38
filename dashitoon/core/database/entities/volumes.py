"""
Volume entity models.

Volumes group the chapters of a series and are numbered within it.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship

from ..base import Base

if TYPE_CHECKING:
    from .chapters import Chapter
    from .series import Series


class Volume(Base, table=True):
    """Entity for a volume of a series.

    Table: volumes
    """

    __tablename__ = "volumes"

    id: Optional[int] = Field(default=None, primary_key=True)
    series_id: int = Field(foreign_key="series.id", index=True, ondelete="CASCADE")
    volume_number: int = Field()
    name: str = Field(max_length=100)
    introduction: Optional[str] = Field(default=None, max_length=2000)
    chapter_count: int = Field(default=0)

    series: Optional["Series"] = Relationship(back_populates="volumes")
    chapters: List["Chapter"] = Relationship(
        back_populates="volume",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True, "order_by": "Chapter.chapter_number"},
    )

    def next_chapter_number(self) -> int:
        return self.chapter_count + 1

    def __repr__(self) -> str:
        return f"Volume(id={self.id}, series_id={self.series_id}, volume_number={self.volume_number})"
