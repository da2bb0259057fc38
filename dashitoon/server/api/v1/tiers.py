"""
API endpoints for the DashiFan tiers of a series.
"""

import uuid
from typing import List

from fastapi import APIRouter, status

from dashitoon.core.models.io.subscriptions import DashiFanCreate, DashiFanRead, DashiFanUpdate

from ...services.deps import ActiveUser, SubscriptionServiceDep

router = APIRouter()


@router.get("", response_model=List[DashiFanRead], summary="List Tiers")
async def list_tiers(series_id: int, service: SubscriptionServiceDep, active_only: bool = True) -> List[DashiFanRead]:
    tiers = await service.list_tiers(series_id, active_only=active_only)
    return [DashiFanRead.model_validate(tier) for tier in tiers]


@router.post("", response_model=DashiFanRead, status_code=status.HTTP_201_CREATED, summary="Create Tier")
async def create_tier(
    series_id: int, data: DashiFanCreate, user: ActiveUser, service: SubscriptionServiceDep
) -> DashiFanRead:
    tier = await service.create_tier(series_id, user.id, data)
    return DashiFanRead.model_validate(tier)


@router.put("/{tier_id}", response_model=DashiFanRead, summary="Update Tier")
async def update_tier(
    series_id: int, tier_id: uuid.UUID, data: DashiFanUpdate, user: ActiveUser, service: SubscriptionServiceDep
) -> DashiFanRead:
    tier = await service.update_tier(series_id, tier_id, user.id, data)
    return DashiFanRead.model_validate(tier)


@router.post("/{tier_id}/toggle", response_model=DashiFanRead, summary="Toggle Tier")
async def toggle_tier(
    series_id: int, tier_id: uuid.UUID, user: ActiveUser, service: SubscriptionServiceDep
) -> DashiFanRead:
    """Open or close a tier for new subscriptions."""
    tier = await service.toggle_tier(series_id, tier_id, user.id)
    return DashiFanRead.model_validate(tier)
