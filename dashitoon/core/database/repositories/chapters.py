"""
Chapter repository.

Chapters are always loaded together with their version history since every
chapter command reads or mutates it.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.chapters import Chapter
from .base import AsyncBaseRepository


class ChapterRepository(AsyncBaseRepository[Chapter]):
    """Repository for chapter data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Chapter)

    async def get_in_volume(self, chapter_id: int, volume_id: int) -> Optional[Chapter]:
        """Get a chapter of a volume with its versions loaded.

        Args:
            chapter_id: Chapter ID
            volume_id: Volume the chapter must belong to

        Returns:
            Chapter instance or None
        """
        stmt = (
            select(Chapter)
            .where(Chapter.id == chapter_id, Chapter.volume_id == volume_id)
            .options(selectinload(Chapter.versions))  # type: ignore[arg-type]
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_volume(self, volume_id: int, published_only: bool = False) -> List[Chapter]:
        stmt = (
            select(Chapter)
            .where(Chapter.volume_id == volume_id)
            .options(selectinload(Chapter.versions))  # type: ignore[arg-type]
            .order_by(col(Chapter.chapter_number))
        )
        if published_only:
            stmt = stmt.where(col(Chapter.published_version_id).is_not(None))
        result = await self.session.exec(stmt)
        return list(result.all())
