"""
Reader reviews and their automated moderation.

``ReviewService.write_review`` persists the review and publishes a
``UserReviewedEvent``. ``UserReviewedEventHandler`` screens the text with the
moderation service and files a single system report when it is flagged.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.database.entities.reports import Report
from dashitoon.core.database.entities.reviews import Review
from dashitoon.core.database.repositories import ReportRepository, ReviewRepository, SeriesRepository
from dashitoon.core.errors import NotFoundError, ValidationError
from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.domain.enums import ReportType
from dashitoon.core.models.domain.events import UserReviewedEvent
from dashitoon.core.monitoring import log_moderation_result
from dashitoon.moderation import ModerationService

from .clock import Clock, utc_now
from .events import EventPublisher

logger = get_logger(__name__)


class ReviewService:
    """Handlers for writing, listing and reporting reviews."""

    def __init__(self, session: AsyncSession, publisher: EventPublisher) -> None:
        self.session = session
        self.publisher = publisher
        self.series = SeriesRepository(session)
        self.reviews = ReviewRepository(session)
        self.reports = ReportRepository(session)

    async def write_review(self, series_id: int, user_id: str, content: str, is_recommended: bool = True) -> Review:
        if await self.series.get_by_id(series_id) is None:
            raise NotFoundError(str(series_id), "Series")
        if await self.reviews.find_by_user(series_id, user_id) is not None:
            raise ValidationError(
                "You have already reviewed this series.", errors={"review": ["Only one review per series is allowed."]}
            )

        review = Review(series_id=series_id, user_id=user_id, content=content, is_recommended=is_recommended)
        self.reviews.add(review)
        await self.session.commit()
        logger.info(f"Review {review.id} written on series {series_id} by {user_id}")

        await self.publisher.publish(UserReviewedEvent(review))
        return review

    async def list_reviews(
        self, series_id: int, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Review]:
        if await self.series.get_by_id(series_id) is None:
            raise NotFoundError(str(series_id), "Series")
        return await self.reviews.list_by_series(series_id, limit=limit, offset=offset)

    async def report_review(self, review_id: uuid.UUID, user_id: str, reason: str) -> Report:
        if await self.reviews.get_by_id(review_id) is None:
            raise NotFoundError(str(review_id), "Review")
        report = Report.create_new_user_report(ReportType.review, review_id, reported_by=user_id, reason=reason)
        self.reports.add(report)
        await self.session.commit()
        return report

    async def list_review_reports(self, review_id: uuid.UUID) -> List[Report]:
        if await self.reviews.get_by_id(review_id) is None:
            raise NotFoundError(str(review_id), "Review")
        return await self.reports.list_for(ReportType.review, str(review_id))

    async def list_reports(
        self, type: Optional[ReportType] = None, system_only: bool = False, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Report]:
        return await self.reports.list_recent(type=type, system_only=system_only, limit=limit, offset=offset)


class UserReviewedEventHandler:
    """Screens a freshly written review and reports it when flagged."""

    def __init__(self, session: AsyncSession, moderation: ModerationService, clock: Optional[Clock] = None) -> None:
        self.session = session
        self.moderation = moderation
        self.reports = ReportRepository(session)
        self._clock = clock or utc_now

    async def handle(self, event: UserReviewedEvent) -> None:
        review = event.review
        analysis = await self.moderation.moderate_review(review.content)
        log_moderation_result(str(review.id), analysis.flagged, analysis.flagged_categories)

        if not analysis.flagged:
            return

        report = Report.create_new_system_report(ReportType.review, review.id, now=self._clock())
        report.add_analytics(analysis)
        self.reports.add(report)
        await self.session.commit()
        logger.warning(f"Review {review.id} flagged by moderation: {', '.join(analysis.flagged_categories)}")
