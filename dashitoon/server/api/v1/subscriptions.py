"""
API endpoints for reader subscriptions to DashiFan tiers.
"""

import uuid
from typing import List

from fastapi import APIRouter, status

from dashitoon.core.models.io.subscriptions import PaymentConfirm, SubscriptionCreate, SubscriptionRead

from ...services.deps import ActiveUser, CurrentUser, SubscriptionServiceDep

router = APIRouter()


@router.get("", response_model=List[SubscriptionRead], summary="List My Subscriptions")
async def list_my_subscriptions(user: CurrentUser, service: SubscriptionServiceDep) -> List[SubscriptionRead]:
    subscriptions = await service.list_my_subscriptions(user.id)
    return [SubscriptionRead.model_validate(subscription) for subscription in subscriptions]


@router.post(
    "",
    response_model=SubscriptionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe",
    description="Open a pending subscription with its first unpaid billing period.",
    responses={400: {"description": "Tier inactive or a live subscription to the series exists"}},
)
async def subscribe(data: SubscriptionCreate, user: ActiveUser, service: SubscriptionServiceDep) -> SubscriptionRead:
    subscription = await service.subscribe(user.id, data.dashi_fan_id)
    return SubscriptionRead.model_validate(subscription)


@router.post("/{subscription_id}/payments", response_model=SubscriptionRead, summary="Confirm Payment")
async def confirm_payment(
    subscription_id: uuid.UUID, data: PaymentConfirm, user: CurrentUser, service: SubscriptionServiceDep
) -> SubscriptionRead:
    subscription = await service.confirm_payment(subscription_id, data.billing_id, user.id)
    return SubscriptionRead.model_validate(subscription)


@router.post(
    "/{subscription_id}/payments/failed",
    response_model=SubscriptionRead,
    summary="Report Failed Payment",
    description="Mark an unpaid billing period as failed; the subscription expires.",
)
async def fail_payment(
    subscription_id: uuid.UUID, data: PaymentConfirm, user: CurrentUser, service: SubscriptionServiceDep
) -> SubscriptionRead:
    subscription = await service.fail_payment(subscription_id, data.billing_id, user.id)
    return SubscriptionRead.model_validate(subscription)


@router.post("/{subscription_id}/cancel", response_model=SubscriptionRead, summary="Cancel Subscription")
async def cancel_subscription(
    subscription_id: uuid.UUID, user: CurrentUser, service: SubscriptionServiceDep
) -> SubscriptionRead:
    subscription = await service.cancel(subscription_id, user.id)
    return SubscriptionRead.model_validate(subscription)
