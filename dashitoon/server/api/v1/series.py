"""
API endpoints for the series editor.

Authors create and edit their series here; reading a series is public.
"""

from typing import List

from fastapi import APIRouter, status

from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.io.series import SeriesCreate, SeriesRead, SeriesSummary, SeriesUpdate

from ...services.deps import ActiveUser, CurrentUser, SeriesServiceDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=SeriesRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Series",
    description="Create a series owned by the caller. The content rating is derived from the six category ratings.",
    responses={
        201: {"description": "Series created"},
        400: {"description": "Invalid series data, genres or category ratings"},
        403: {"description": "Caller is restricted"},
    },
)
async def create_series(data: SeriesCreate, user: ActiveUser, service: SeriesServiceDep) -> SeriesRead:
    """
    Create a new series.

    - **genres**: at least one existing genre id.
    - **category_ratings**: exactly one rating (0-3) per content category.
    """
    series = await service.create_series(user.id, data)
    return SeriesRead.model_validate(series)


@router.get(
    "/mine",
    response_model=List[SeriesSummary],
    summary="List My Series",
    description="List the series owned by the caller, most recently modified first.",
)
async def list_my_series(user: CurrentUser, service: SeriesServiceDep) -> List[SeriesSummary]:
    series = await service.list_my_series(user.id)
    logger.debug(f"Retrieved {len(series)} series for {user.id}")
    return [SeriesSummary.model_validate(item) for item in series]


@router.get(
    "/{series_id}",
    response_model=SeriesRead,
    summary="Get Series",
    responses={404: {"description": "Series not found"}},
)
async def get_series(series_id: int, service: SeriesServiceDep) -> SeriesRead:
    series = await service.get_series(series_id)
    return SeriesRead.model_validate(series)


@router.put(
    "/{series_id}",
    response_model=SeriesRead,
    summary="Update Series",
    description="Replace the editable fields, genres and category ratings of a series.",
    responses={
        400: {"description": "Invalid series data"},
        403: {"description": "Caller does not own the series"},
        404: {"description": "Series not found"},
    },
)
async def update_series(series_id: int, data: SeriesUpdate, user: ActiveUser, service: SeriesServiceDep) -> SeriesRead:
    series = await service.update_series(series_id, user.id, data)
    return SeriesRead.model_validate(series)
