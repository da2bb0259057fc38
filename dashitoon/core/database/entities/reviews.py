"""
Review entity models.

Readers review a series once; every new review is screened by the automated
moderation handler.
"""

import uuid
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, Text

from ..base import AuditableBase

if TYPE_CHECKING:
    from .series import Series


class Review(AuditableBase, table=True):
    """Entity for a reader's review of a series.

    Table: reviews
    """

    __tablename__ = "reviews"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    series_id: int = Field(foreign_key="series.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", max_length=450, index=True)

    content: str = Field(sa_type=Text)
    is_recommended: bool = Field(default=True)

    series: Optional["Series"] = Relationship(back_populates="reviews")

    def __repr__(self) -> str:
        return f"Review(id={self.id}, series_id={self.series_id}, user_id={self.user_id})"
