"""
API endpoints for the genre vocabulary.
"""

from typing import List

from fastapi import APIRouter

from dashitoon.core.models.io.series import GenreRead

from ...services.deps import SeriesServiceDep

router = APIRouter()


@router.get("", response_model=List[GenreRead], summary="List Genres")
async def list_genres(service: SeriesServiceDep) -> List[GenreRead]:
    return [GenreRead.model_validate(genre) for genre in await service.list_genres()]
