"""
API endpoints for platform administrators.

Covers the rates panel (author commission and Kana exchange rate), the report
queue and the subscription billing run. All endpoints require the admin role.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Query

from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.domain.enums import CommissionType, ReportType
from dashitoon.core.models.io.rates import (
    CommissionRateRead,
    CommissionRateUpdate,
    KanaExchangeRateRead,
    KanaExchangeRateUpdate,
)
from dashitoon.core.models.io.reviews import ReportRead
from dashitoon.core.models.io.subscriptions import RenewalRead

from ...services.deps import AdminUser, RatesServiceDep, ReviewServiceDep, SubscriptionServiceDep

logger = get_logger(__name__)

router = APIRouter()


@router.get("/rates/commission", response_model=CommissionRateRead, summary="Get Commission Rate")
async def get_commission_rate(
    user: AdminUser, service: RatesServiceDep, type: CommissionType = CommissionType.kana
) -> CommissionRateRead:
    return await service.get_commission_rate(type)


@router.put(
    "/rates/commission",
    response_model=CommissionRateRead,
    summary="Update Commission Rate",
    description="Set the author share (0-100 percent). Earlier rates are kept as history.",
)
async def update_commission_rate(
    data: CommissionRateUpdate,
    user: AdminUser,
    service: RatesServiceDep,
    type: CommissionType = CommissionType.kana,
) -> CommissionRateRead:
    return await service.update_commission_rate(type, data.rate, user.id)


@router.get("/rates/kana-exchange", response_model=KanaExchangeRateRead, summary="Get Kana Exchange Rate")
async def get_kana_exchange_rate(user: AdminUser, service: RatesServiceDep) -> KanaExchangeRateRead:
    return await service.get_kana_exchange_rate()


@router.put("/rates/kana-exchange", response_model=KanaExchangeRateRead, summary="Update Kana Exchange Rate")
async def update_kana_exchange_rate(
    data: KanaExchangeRateUpdate, user: AdminUser, service: RatesServiceDep
) -> KanaExchangeRateRead:
    return await service.update_kana_exchange_rate(data.rate, user.id)


@router.get("/reports", response_model=List[ReportRead], summary="List Reports")
async def list_reports(
    user: AdminUser,
    service: ReviewServiceDep,
    type: Optional[ReportType] = None,
    system_only: bool = False,
    limit: Optional[int] = Query(default=50, ge=1, le=200),
    offset: Optional[int] = Query(default=0, ge=0),
) -> List[ReportRead]:
    reports = await service.list_reports(type=type, system_only=system_only, limit=limit, offset=offset)
    return [ReportRead.model_validate(report) for report in reports]


@router.get("/reports/reviews/{review_id}", response_model=List[ReportRead], summary="List Reports For Review")
async def list_review_reports(review_id: uuid.UUID, user: AdminUser, service: ReviewServiceDep) -> List[ReportRead]:
    reports = await service.list_review_reports(review_id)
    return [ReportRead.model_validate(report) for report in reports]


@router.post(
    "/subscriptions/renew",
    response_model=RenewalRead,
    summary="Renew Due Subscriptions",
    description="Open the next billing period for every active subscription that is due.",
)
async def renew_due_subscriptions(user: AdminUser, service: SubscriptionServiceDep) -> RenewalRead:
    renewed = await service.renew_due()
    logger.info(f"Billing run by {user.id} renewed {renewed} subscription(s)")
    return RenewalRead(renewed=renewed)
