"""
Series, volume and genre repositories.

Queries eager-load the relationships the handlers touch, since lazy loading
is not available on async sessions.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy.orm import selectinload
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.genres import Genre
from ..entities.series import Series
from ..entities.volumes import Volume
from .base import AsyncBaseRepository


class SeriesRepository(AsyncBaseRepository[Series]):
    """Repository for series data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Series)

    async def get_with_volume(self, series_id: int, volume_id: int) -> Optional[Series]:
        """Load a series with only the requested volume in ``volumes``.

        An empty ``volumes`` list means the volume does not belong to the series.
        """
        stmt = (
            select(Series)
            .where(Series.id == series_id)
            .options(selectinload(Series.volumes.and_(Volume.id == volume_id)))  # type: ignore[attr-defined]
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_details(self, series_id: int) -> Optional[Series]:
        """Load a series with its rubric answers and genres."""
        stmt = (
            select(Series)
            .where(Series.id == series_id)
            .options(
                selectinload(Series.category_ratings),  # type: ignore[arg-type]
                selectinload(Series.genres),  # type: ignore[arg-type]
            )
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_author(self, user_id: str) -> List[Series]:
        stmt = (
            select(Series)
            .where(Series.created_by == user_id)
            .options(selectinload(Series.genres))  # type: ignore[arg-type]
            .order_by(col(Series.last_modified).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())


class VolumeRepository(AsyncBaseRepository[Volume]):
    """Repository for volume data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Volume)

    async def get_in_series(self, series_id: int, volume_id: int) -> Optional[Volume]:
        stmt = select(Volume).where(Volume.id == volume_id, Volume.series_id == series_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_series(self, series_id: int) -> List[Volume]:
        stmt = select(Volume).where(Volume.series_id == series_id).order_by(col(Volume.volume_number))
        result = await self.session.exec(stmt)
        return list(result.all())


class GenreRepository(AsyncBaseRepository[Genre]):
    """Repository for the genre vocabulary."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Genre)

    async def list_all(self) -> List[Genre]:
        result = await self.session.exec(select(Genre).order_by(col(Genre.name)))
        return list(result.all())

    async def get_many(self, genre_ids: Sequence[int]) -> List[Genre]:
        if not genre_ids:
            return []
        result = await self.session.exec(select(Genre).where(col(Genre.id).in_(list(genre_ids))))
        return list(result.all())
