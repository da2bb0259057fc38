"""
API endpoints for reader reviews.

New reviews are screened by the moderation service before the response is
returned; flagged reviews stay visible and are queued as system reports.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Body, Query, status

from dashitoon.core.models.io.reviews import ReportRead, ReviewCreate, ReviewRead

from ...services.deps import ActiveUser, ReviewServiceDep

router = APIRouter()


@router.get("/series/{series_id}/reviews", response_model=List[ReviewRead], summary="List Reviews")
async def list_reviews(
    series_id: int,
    service: ReviewServiceDep,
    limit: Optional[int] = Query(default=20, ge=1, le=100),
    offset: Optional[int] = Query(default=0, ge=0),
) -> List[ReviewRead]:
    reviews = await service.list_reviews(series_id, limit=limit, offset=offset)
    return [ReviewRead.model_validate(review) for review in reviews]


@router.post(
    "/series/{series_id}/reviews",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Write Review",
    responses={
        400: {"description": "Invalid review or series already reviewed by the caller"},
        404: {"description": "Series not found"},
        502: {"description": "Moderation service failed"},
    },
)
async def write_review(series_id: int, data: ReviewCreate, user: ActiveUser, service: ReviewServiceDep) -> ReviewRead:
    review = await service.write_review(series_id, user.id, data.content, data.is_recommended)
    return ReviewRead.model_validate(review)


@router.post(
    "/reviews/{review_id}/reports",
    response_model=ReportRead,
    status_code=status.HTTP_201_CREATED,
    summary="Report Review",
)
async def report_review(
    review_id: uuid.UUID,
    user: ActiveUser,
    service: ReviewServiceDep,
    reason: str = Body(embed=True, min_length=1, max_length=2000),
) -> ReportRead:
    report = await service.report_review(review_id, user.id, reason)
    return ReportRead.model_validate(report)
