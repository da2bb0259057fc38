"""
DashiFan tier and subscription repositories.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.models.domain.enums import SubscriptionStatus

from ..entities.subscriptions import DashiFan, Subscription
from .base import AsyncBaseRepository

LIVE_STATUSES = (SubscriptionStatus.pending, SubscriptionStatus.active)


class DashiFanRepository(AsyncBaseRepository[DashiFan]):
    """Repository for DashiFan tier data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, DashiFan)

    async def get_in_series(self, series_id: int, tier_id: uuid.UUID) -> Optional[DashiFan]:
        stmt = select(DashiFan).where(DashiFan.id == tier_id, DashiFan.series_id == series_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_series(self, series_id: int, active_only: bool = False) -> List[DashiFan]:
        stmt = select(DashiFan).where(DashiFan.series_id == series_id).order_by(col(DashiFan.price_amount))
        if active_only:
            stmt = stmt.where(col(DashiFan.is_active).is_(True))
        result = await self.session.exec(stmt)
        return list(result.all())


class SubscriptionRepository(AsyncBaseRepository[Subscription]):
    """Repository for subscription data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Subscription)

    def _with_details(self):
        return select(Subscription).options(
            selectinload(Subscription.billing_details),  # type: ignore[arg-type]
            selectinload(Subscription.dashi_fan),  # type: ignore[arg-type]
        )

    async def get_with_details(self, subscription_id: uuid.UUID) -> Optional[Subscription]:
        result = await self.session.exec(self._with_details().where(Subscription.id == subscription_id))
        return result.one_or_none()

    async def find_live(self, user_id: str, series_id: int) -> Optional[Subscription]:
        """Find a pending or active subscription of the user to any tier of the series."""
        stmt = (
            select(Subscription)
            .join(DashiFan, col(DashiFan.id) == col(Subscription.dashi_fan_id))
            .where(
                Subscription.user_id == user_id,
                DashiFan.series_id == series_id,
                col(Subscription.status).in_(LIVE_STATUSES),
            )
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_user(self, user_id: str) -> List[Subscription]:
        stmt = self._with_details().where(Subscription.user_id == user_id).order_by(col(Subscription.created).desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_due(self, now: datetime) -> List[Subscription]:
        """Active subscriptions whose next billing date has passed."""
        stmt = self._with_details().where(
            Subscription.status == SubscriptionStatus.active,
            col(Subscription.next_billing_date) <= now,
        )
        result = await self.session.exec(stmt)
        return list(result.all())
