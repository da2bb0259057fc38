"""
Database repository layer using SQLModel.

Each module provides async data access for one aggregate. Repositories stage
changes on the request's session; handlers own the commit.

Modules:
- base: AsyncBaseRepository and QueryBuilder utilities
- series: series, volume and genre repositories
- chapters: chapter repository (versions eager-loaded)
- reviews: review and report repositories
- subscriptions: DashiFan tier and subscription repositories
- kana: user and append-only ledger repositories
- rates: commission and exchange rate repositories
"""

from .base import AsyncBaseRepository, QueryBuilder
from .chapters import ChapterRepository
from .kana import KanaTransactionRepository, UserRepository
from .rates import CommissionRateRepository, KanaExchangeRateRepository
from .reviews import ReportRepository, ReviewRepository
from .series import GenreRepository, SeriesRepository, VolumeRepository
from .subscriptions import DashiFanRepository, SubscriptionRepository

__all__ = [
    "AsyncBaseRepository",
    "ChapterRepository",
    "CommissionRateRepository",
    "DashiFanRepository",
    "GenreRepository",
    "KanaExchangeRateRepository",
    "KanaTransactionRepository",
    "QueryBuilder",
    "ReportRepository",
    "ReviewRepository",
    "SeriesRepository",
    "SubscriptionRepository",
    "UserRepository",
    "VolumeRepository",
]
