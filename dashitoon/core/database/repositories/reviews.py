"""
Review and report repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.models.domain.enums import ReportType

from ..entities.reports import Report
from ..entities.reviews import Review
from .base import AsyncBaseRepository, QueryBuilder


class ReviewRepository(AsyncBaseRepository[Review]):
    """Repository for review data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Review)

    async def find_by_user(self, series_id: int, user_id: str) -> Optional[Review]:
        stmt = select(Review).where(Review.series_id == series_id, Review.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_series(
        self, series_id: int, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Review]:
        stmt = select(Review).where(Review.series_id == series_id).order_by(col(Review.created).desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.exec(stmt)
        return list(result.all())


class ReportRepository(AsyncBaseRepository[Report]):
    """Repository for report data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Report)

    async def list_for(self, type: ReportType, reported_id: str) -> List[Report]:
        """List reports filed against one piece of content, newest first."""
        stmt = (
            select(Report)
            .where(Report.type == type, Report.reported_id == reported_id)
            .order_by(col(Report.reported_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_recent(
        self,
        type: Optional[ReportType] = None,
        system_only: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Report]:
        stmt = select(Report).order_by(col(Report.reported_at).desc())
        stmt = QueryBuilder.apply_filters(stmt, Report, {"type": type})
        if system_only:
            stmt = stmt.where(col(Report.reported_by).is_(None))
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.exec(stmt)
        return list(result.all())
