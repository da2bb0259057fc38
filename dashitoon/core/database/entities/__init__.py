"""
Database entity models.

This package contains all database entity models organized by aggregate.
Importing the package registers every table on ``Base.metadata`` and makes
the string-based relationship targets resolvable.

Modules:
- users: platform user profile and Kana balances
- kana: append-only Kana ledger
- genres: genre vocabulary and its series link table
- series: series aggregate and its category ratings
- volumes: volumes of a series
- chapters: chapters and their version history
- reviews: reader reviews
- reports: user and system reports
- subscriptions: DashiFan tiers, subscriptions and billing periods
- rates: admin-managed commission and exchange rates
"""

from .chapters import Chapter, ChapterVersion
from .genres import Genre, GenreSeries
from .kana import KanaTransaction
from .rates import CommissionRate, KanaExchangeRate
from .reports import Report
from .reviews import Review
from .series import CategoryRating, Series
from .subscriptions import BillingDetail, DashiFan, Subscription
from .users import User
from .volumes import Volume

__all__ = [
    "BillingDetail",
    "CategoryRating",
    "Chapter",
    "ChapterVersion",
    "CommissionRate",
    "DashiFan",
    "Genre",
    "GenreSeries",
    "KanaExchangeRate",
    "KanaTransaction",
    "Report",
    "Review",
    "Series",
    "Subscription",
    "User",
    "Volume",
]
