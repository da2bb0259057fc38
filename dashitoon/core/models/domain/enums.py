"""Domain enums for DashiToon entities."""

from __future__ import annotations

from enum import Enum, IntEnum


class SeriesType(IntEnum):
    """Medium of a series."""

    novel = 1
    comic = 2


class SeriesStatus(IntEnum):
    """Publication status shown on the series page."""

    ongoing = 1
    completed = 2
    hiatus = 3
    cancelled = 4


class ContentCategory(IntEnum):
    """The six rubric categories an author rates a series against."""

    violent = 1
    nudity = 2
    sexual = 3
    profanity = 4
    alcohol = 5
    sensitive = 6


class ContentRating(IntEnum):
    """Overall audience rating derived from the category ratings."""

    all_ages = 0
    teen = 1
    young_adult = 2
    mature = 3


class ChapterStatus(str, Enum):
    """Lifecycle status of a chapter version."""

    draft = "draft"
    published = "published"


class ReportType(str, Enum):
    """Kind of content a report points at."""

    review = "review"
    comment = "comment"
    series = "series"
    chapter = "chapter"


class KanaType(str, Enum):
    """The two virtual currencies."""

    coin = "coin"  # Earned (check-in, rewards).
    gold = "gold"  # Purchased with real money.


class TransactionType(str, Enum):
    """Reason class for a ledger entry."""

    deposit = "deposit"
    withdraw = "withdraw"
    checkin = "checkin"
    purchase = "purchase"
    refund = "refund"


class CommissionType(IntEnum):
    """Revenue stream the author commission applies to."""

    kana = 1
    dashi_fan = 2


class BillingInterval(str, Enum):
    """Unit of a DashiFan billing cycle."""

    day = "day"
    week = "week"
    month = "month"
    year = "year"


class SubscriptionStatus(str, Enum):
    """Lifecycle status of a DashiFan subscription."""

    pending = "pending"
    active = "active"
    cancelled = "cancelled"
    expired = "expired"


class PaymentStatus(str, Enum):
    """Settlement state of one billing period."""

    pending = "pending"
    paid = "paid"
    failed = "failed"
