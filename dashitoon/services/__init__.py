"""
Application services.

One service class per use-case family. Services load aggregates through the
repositories, enforce ownership, apply domain behaviour on the entities and
commit the request's unit of work.
"""

from .chapters import ChapterService
from .events import EventPublisher
from .images import ImageStorage
from .kana import KanaService
from .rates import RatesService
from .reviews import ReviewService, UserReviewedEventHandler
from .series import SeriesService
from .subscriptions import SubscriptionService

__all__ = [
    "ChapterService",
    "EventPublisher",
    "ImageStorage",
    "KanaService",
    "RatesService",
    "ReviewService",
    "SeriesService",
    "SubscriptionService",
    "UserReviewedEventHandler",
]
