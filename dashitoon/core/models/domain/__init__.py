"""Domain rules that do not depend on persistence."""

from .enums import (
    BillingInterval,
    ChapterStatus,
    CommissionType,
    ContentCategory,
    ContentRating,
    KanaType,
    PaymentStatus,
    ReportType,
    SeriesStatus,
    SeriesType,
    SubscriptionStatus,
    TransactionType,
)
from .events import DomainEvent, UserReviewedEvent
from .rating import calculate_content_rating, rate_series, ratings_from_pairs

__all__ = [
    "BillingInterval",
    "ChapterStatus",
    "CommissionType",
    "ContentCategory",
    "ContentRating",
    "DomainEvent",
    "KanaType",
    "PaymentStatus",
    "ReportType",
    "SeriesStatus",
    "SeriesType",
    "SubscriptionStatus",
    "TransactionType",
    "UserReviewedEvent",
    "calculate_content_rating",
    "rate_series",
    "ratings_from_pairs",
]
