"""
DashiFan tiers and reader subscriptions.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.database.entities.subscriptions import DashiFan, Subscription
from dashitoon.core.database.repositories import DashiFanRepository, SeriesRepository, SubscriptionRepository
from dashitoon.core.errors import DuplicateSubscriptionError, ForbiddenAccessError, NotFoundError, ValidationError
from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.io.subscriptions import DashiFanCreate, DashiFanUpdate

from .clock import Clock, utc_now

logger = get_logger(__name__)


class SubscriptionService:
    """Handlers for tier management (authors) and subscriptions (readers)."""

    def __init__(self, session: AsyncSession, clock: Optional[Clock] = None) -> None:
        self.session = session
        self.series = SeriesRepository(session)
        self.tiers = DashiFanRepository(session)
        self.subscriptions = SubscriptionRepository(session)
        self._clock = clock or utc_now

    async def _check_owner(self, series_id: int, user_id: str) -> None:
        series = await self.series.get_by_id(series_id)
        if series is None:
            raise NotFoundError(str(series_id), "Series")
        if not series.is_owned_by(user_id):
            raise ForbiddenAccessError()

    async def _get_owned_tier(self, series_id: int, tier_id: uuid.UUID, user_id: str) -> DashiFan:
        await self._check_owner(series_id, user_id)
        tier = await self.tiers.get_in_series(series_id, tier_id)
        if tier is None:
            raise NotFoundError(str(tier_id), "DashiFan")
        return tier

    async def _get_own_subscription(self, subscription_id: uuid.UUID, user_id: str) -> Subscription:
        subscription = await self.subscriptions.get_with_details(subscription_id)
        if subscription is None:
            raise NotFoundError(str(subscription_id), "Subscription")
        if subscription.user_id != user_id:
            raise ForbiddenAccessError()
        return subscription

    # Tiers

    async def create_tier(self, series_id: int, user_id: str, data: DashiFanCreate) -> DashiFan:
        await self._check_owner(series_id, user_id)
        tier = DashiFan(series_id=series_id, **data.model_dump())
        self.tiers.add(tier)
        await self.session.commit()
        return tier

    async def update_tier(self, series_id: int, tier_id: uuid.UUID, user_id: str, data: DashiFanUpdate) -> DashiFan:
        tier = await self._get_owned_tier(series_id, tier_id, user_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(tier, key, value)
        await self.session.commit()
        return tier

    async def toggle_tier(self, series_id: int, tier_id: uuid.UUID, user_id: str) -> DashiFan:
        tier = await self._get_owned_tier(series_id, tier_id, user_id)
        tier.is_active = not tier.is_active
        await self.session.commit()
        return tier

    async def list_tiers(self, series_id: int, active_only: bool = True) -> List[DashiFan]:
        if await self.series.get_by_id(series_id) is None:
            raise NotFoundError(str(series_id), "Series")
        return await self.tiers.list_by_series(series_id, active_only=active_only)

    # Subscriptions

    async def subscribe(self, user_id: str, tier_id: uuid.UUID) -> Subscription:
        tier = await self.tiers.get_by_id(tier_id)
        if tier is None:
            raise NotFoundError(str(tier_id), "DashiFan")
        if not tier.is_active:
            raise ValidationError("This tier is not open for subscription.", errors={"dashiFanId": ["Tier is inactive."]})
        if await self.subscriptions.find_live(user_id, tier.series_id) is not None:
            raise DuplicateSubscriptionError(tier.series_id)

        subscription = Subscription.start(user_id=user_id, tier=tier, now=self._clock())
        self.subscriptions.add(subscription)
        await self.session.commit()
        logger.info(f"Subscription {subscription.id} opened by {user_id} on tier {tier.id}")
        return subscription

    async def confirm_payment(self, subscription_id: uuid.UUID, billing_id: uuid.UUID, user_id: str) -> Subscription:
        subscription = await self._get_own_subscription(subscription_id, user_id)
        tier = subscription.dashi_fan
        if tier is None:
            raise NotFoundError(str(subscription.dashi_fan_id), "DashiFan")
        subscription.confirm_payment(billing_id, tier, self._clock())
        await self.session.commit()
        logger.info(f"Payment {billing_id} confirmed for subscription {subscription.id}")
        return subscription

    async def fail_payment(self, subscription_id: uuid.UUID, billing_id: uuid.UUID, user_id: str) -> Subscription:
        subscription = await self._get_own_subscription(subscription_id, user_id)
        subscription.fail_payment(billing_id)
        await self.session.commit()
        logger.warning(f"Payment {billing_id} failed; subscription {subscription.id} is {subscription.status.value}")
        return subscription

    async def cancel(self, subscription_id: uuid.UUID, user_id: str) -> Subscription:
        subscription = await self._get_own_subscription(subscription_id, user_id)
        subscription.cancel()
        await self.session.commit()
        return subscription

    async def list_my_subscriptions(self, user_id: str) -> List[Subscription]:
        return await self.subscriptions.list_by_user(user_id)

    async def renew_due(self, now: Optional[datetime] = None) -> int:
        """Open the next billing period of every active subscription that is due.

        Subscriptions still waiting on an unpaid period are skipped.
        """
        now = now or self._clock()
        renewed = 0
        for subscription in await self.subscriptions.list_due(now):
            if subscription.pending_billing() is not None or subscription.dashi_fan is None:
                continue
            subscription.add_billing(subscription.dashi_fan, subscription.next_billing_date)
            renewed += 1
        await self.session.commit()
        logger.info(f"Renewed {renewed} due subscription(s)")
        return renewed
