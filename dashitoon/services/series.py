"""
Series and volume management for the author studio.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.database.entities.genres import Genre
from dashitoon.core.database.entities.series import Series
from dashitoon.core.database.entities.volumes import Volume
from dashitoon.core.database.repositories import GenreRepository, SeriesRepository, VolumeRepository
from dashitoon.core.errors import ForbiddenAccessError, NotFoundError, ValidationError
from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.domain.rating import ratings_from_pairs
from dashitoon.core.models.io.series import SeriesCreate, SeriesUpdate, SeriesWrite
from dashitoon.core.models.io.volumes import VolumeWrite

logger = get_logger(__name__)


class SeriesService:
    """Handlers for the series editor and volume management."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.series = SeriesRepository(session)
        self.volumes = VolumeRepository(session)
        self.genres = GenreRepository(session)

    async def _resolve_genres(self, genre_ids: Sequence[int]) -> List[Genre]:
        wanted = set(genre_ids)
        if not wanted:
            raise ValidationError("At least one genre is required.", errors={"genres": ["At least one genre is required."]})
        genres = await self.genres.get_many(sorted(wanted))
        missing = wanted - {genre.id for genre in genres}
        if missing:
            raise ValidationError(
                "Unknown genre.", errors={"genres": [f"Unknown genre id {genre_id}." for genre_id in sorted(missing)]}
            )
        return genres

    async def _apply(self, series: Series, data: SeriesWrite) -> None:
        ratings = ratings_from_pairs((item.category, item.rating) for item in data.category_ratings)
        genres = await self._resolve_genres(data.genres)
        series.title = data.title
        series.alternative_titles = list(data.alternative_titles)
        series.authors = list(data.authors)
        series.start_time = data.start_time
        series.synopsis = data.synopsis
        series.thumbnail = data.thumbnail
        series.status = data.status
        series.genres = genres
        series.set_category_ratings(ratings)

    async def _get_owned(self, series_id: int, user_id: Optional[str]) -> Series:
        series = await self.series.get_details(series_id)
        if series is None:
            raise NotFoundError(str(series_id), "Series")
        if not series.is_owned_by(user_id):
            raise ForbiddenAccessError()
        return series

    async def create_series(self, user_id: str, data: SeriesCreate) -> Series:
        series = Series(title=data.title, synopsis=data.synopsis, type=data.type)
        await self._apply(series, data)
        self.series.add(series)
        await self.session.commit()
        logger.info(f"Series {series.id} created by {user_id} rated {series.content_rating.name}")
        return series

    async def update_series(self, series_id: int, user_id: str, data: SeriesUpdate) -> Series:
        series = await self._get_owned(series_id, user_id)
        await self._apply(series, data)
        await self.session.commit()
        return series

    async def get_series(self, series_id: int) -> Series:
        series = await self.series.get_details(series_id)
        if series is None:
            raise NotFoundError(str(series_id), "Series")
        return series

    async def list_my_series(self, user_id: str) -> List[Series]:
        return await self.series.list_by_author(user_id)

    async def list_genres(self) -> List[Genre]:
        return await self.genres.list_all()

    async def create_volume(self, series_id: int, user_id: str, data: VolumeWrite) -> Volume:
        series = await self._get_owned(series_id, user_id)
        volume = Volume(
            series_id=series.id,
            volume_number=series.next_volume_number(),
            name=data.name,
            introduction=data.introduction,
        )
        series.volume_count += 1
        await self.volumes.create(volume)
        await self.session.commit()
        return volume

    async def _get_owned_volume(self, series_id: int, volume_id: int, user_id: str) -> Volume:
        await self._get_owned(series_id, user_id)
        volume = await self.volumes.get_in_series(series_id, volume_id)
        if volume is None:
            raise NotFoundError(str(volume_id), "Volume")
        return volume

    async def update_volume(self, series_id: int, volume_id: int, user_id: str, data: VolumeWrite) -> Volume:
        volume = await self._get_owned_volume(series_id, volume_id, user_id)
        volume.name = data.name
        volume.introduction = data.introduction
        await self.session.commit()
        return volume

    async def delete_volume(self, series_id: int, volume_id: int, user_id: str) -> None:
        volume = await self._get_owned_volume(series_id, volume_id, user_id)
        await self.volumes.delete(volume)
        await self.session.commit()
        logger.info(f"Volume {volume_id} of series {series_id} deleted by {user_id}")

    async def list_volumes(self, series_id: int) -> List[Volume]:
        if await self.series.get_by_id(series_id) is None:
            raise NotFoundError(str(series_id), "Series")
        return await self.volumes.list_by_series(series_id)
