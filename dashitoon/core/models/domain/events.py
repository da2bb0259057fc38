"""Domain events raised by application handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dashitoon.core.database.entities.reviews import Review


@dataclass(frozen=True)
class DomainEvent:
    """Base class for in-process domain events."""

    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc), kw_only=True)


@dataclass(frozen=True)
class UserReviewedEvent(DomainEvent):
    """A reader posted a review on a series."""

    review: "Review"
