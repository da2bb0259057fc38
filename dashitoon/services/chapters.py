"""
Author studio chapter commands and queries.

Every command walks the aggregate from the top: the series must exist and be
owned by the caller, the volume must belong to the series and the chapter to
the volume. Only then is the chapter's own behaviour invoked.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.database.entities.chapters import Chapter, ChapterVersion
from dashitoon.core.database.entities.volumes import Volume
from dashitoon.core.database.repositories import ChapterRepository, SeriesRepository
from dashitoon.core.errors import ForbiddenAccessError, NotFoundError
from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.io.chapters import ChapterWrite

from .clock import Clock, utc_now

logger = get_logger(__name__)


class ChapterService:
    """Handlers for the chapter editor and its version history."""

    def __init__(self, session: AsyncSession, clock: Optional[Clock] = None) -> None:
        self.session = session
        self.series = SeriesRepository(session)
        self.chapters = ChapterRepository(session)
        self._clock = clock or utc_now

    async def _get_volume(self, series_id: int, volume_id: int, user_id: Optional[str]) -> Volume:
        series = await self.series.get_with_volume(series_id, volume_id)
        if series is None:
            raise NotFoundError(str(series_id), "Series")
        if not series.is_owned_by(user_id):
            raise ForbiddenAccessError()
        volume = next((v for v in series.volumes if v.id == volume_id), None)
        if volume is None:
            raise NotFoundError(str(volume_id), "Volume")
        return volume

    async def _get_chapter(self, series_id: int, volume_id: int, chapter_id: int, user_id: Optional[str]) -> Chapter:
        volume = await self._get_volume(series_id, volume_id, user_id)
        chapter = await self.chapters.get_in_volume(chapter_id, volume.id)
        if chapter is None:
            raise NotFoundError(str(chapter_id), "Chapter")
        return chapter

    async def create_chapter(self, series_id: int, volume_id: int, user_id: str, data: ChapterWrite) -> Chapter:
        volume = await self._get_volume(series_id, volume_id, user_id)
        chapter = Chapter.create(
            volume_id=volume.id,
            chapter_number=volume.next_chapter_number(),
            title=data.title,
            content=data.content,
            thumbnail=data.thumbnail,
            note=data.note,
            now=self._clock(),
        )
        volume.chapter_count += 1
        self.chapters.add(chapter)
        await self.session.commit()
        logger.info(f"Chapter {chapter.id} created in volume {volume.id} by {user_id}")
        return chapter

    async def update_chapter(
        self, series_id: int, volume_id: int, chapter_id: int, user_id: str, data: ChapterWrite
    ) -> Chapter:
        chapter = await self._get_chapter(series_id, volume_id, chapter_id, user_id)
        chapter.add_version(
            title=data.title, content=data.content, thumbnail=data.thumbnail, note=data.note, now=self._clock()
        )
        await self.session.commit()
        return chapter

    async def auto_save_chapter(
        self, series_id: int, volume_id: int, chapter_id: int, user_id: str, data: ChapterWrite
    ) -> Chapter:
        chapter = await self._get_chapter(series_id, volume_id, chapter_id, user_id)
        chapter.add_version(
            title=data.title,
            content=data.content,
            thumbnail=data.thumbnail,
            note=data.note,
            is_auto_save=True,
            now=self._clock(),
        )
        await self.session.commit()
        return chapter

    async def publish_chapter(self, series_id: int, volume_id: int, chapter_id: int, user_id: str) -> Chapter:
        chapter = await self._get_chapter(series_id, volume_id, chapter_id, user_id)
        version = chapter.publish(self._clock())
        await self.session.commit()
        logger.info(f"Chapter {chapter.id} published with version {version.id}")
        return chapter

    async def unpublish_chapter(self, series_id: int, volume_id: int, chapter_id: int, user_id: str) -> Chapter:
        chapter = await self._get_chapter(series_id, volume_id, chapter_id, user_id)
        chapter.unpublish()
        await self.session.commit()
        return chapter

    async def restore_version(
        self, series_id: int, volume_id: int, chapter_id: int, version_id: uuid.UUID, user_id: str
    ) -> ChapterVersion:
        chapter = await self._get_chapter(series_id, volume_id, chapter_id, user_id)
        version = chapter.restore_version(version_id, self._clock())
        await self.session.commit()
        return version

    async def rename_version(
        self, series_id: int, volume_id: int, chapter_id: int, version_id: uuid.UUID, user_id: str, version_name: str
    ) -> ChapterVersion:
        chapter = await self._get_chapter(series_id, volume_id, chapter_id, user_id)
        version = chapter.rename_version(version_id, version_name)
        await self.session.commit()
        return version

    async def delete_version(
        self, series_id: int, volume_id: int, chapter_id: int, version_id: uuid.UUID, user_id: Optional[str]
    ) -> None:
        """Delete one version from a chapter's history.

        Raises:
            NotFoundError: series, volume, chapter or version is missing
            ForbiddenAccessError: the caller does not own the series
            ChapterVersionInUseError: the version is current or published
        """
        chapter = await self._get_chapter(series_id, volume_id, chapter_id, user_id)
        chapter.remove_version(version_id)
        await self.session.commit()
        logger.info(f"Version {version_id} of chapter {chapter_id} deleted by {user_id}")

    async def get_version(
        self, series_id: int, volume_id: int, chapter_id: int, version_id: uuid.UUID, user_id: str
    ) -> ChapterVersion:
        chapter = await self._get_chapter(series_id, volume_id, chapter_id, user_id)
        return chapter.get_version(version_id)

    async def get_chapter(self, series_id: int, volume_id: int, chapter_id: int, user_id: str) -> Chapter:
        return await self._get_chapter(series_id, volume_id, chapter_id, user_id)

    async def list_chapters(self, series_id: int, volume_id: int, user_id: str) -> List[Chapter]:
        volume = await self._get_volume(series_id, volume_id, user_id)
        return await self.chapters.list_by_volume(volume.id)

    async def delete_chapter(self, series_id: int, volume_id: int, chapter_id: int, user_id: str) -> None:
        chapter = await self._get_chapter(series_id, volume_id, chapter_id, user_id)
        await self.chapters.delete(chapter)
        await self.session.commit()
        logger.info(f"Chapter {chapter_id} deleted by {user_id}")
