"""
DashiFan and subscription entity models.

A DashiFan is a paid membership tier an author offers on a series. Readers
subscribe to a tier; each billing period of a subscription is recorded as a
``BillingDetail`` owned by the subscription.

State machine of a subscription:
    pending --(first payment)--> active --(cancel)--> cancelled
    pending|active --(payment failed)--> expired
"""

import calendar
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, List, Optional, Tuple

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship

from dashitoon.core.errors import NotFoundError, ValidationError
from dashitoon.core.models.domain.enums import BillingInterval, PaymentStatus, SubscriptionStatus

from ..base import AuditableBase

if TYPE_CHECKING:
    from .series import Series


def add_billing_cycle(start: datetime, interval: BillingInterval, count: int) -> datetime:
    """Advance ``start`` by ``count`` billing intervals.

    Month and year steps clamp to the last day of the target month.
    """
    if interval == BillingInterval.day:
        return start + timedelta(days=count)
    if interval == BillingInterval.week:
        return start + timedelta(weeks=count)
    months = count * (12 if interval == BillingInterval.year else 1)
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


class DashiFan(AuditableBase, table=True):
    """Entity for a paid membership tier of a series.

    Table: dashi_fans
    """

    __tablename__ = "dashi_fans"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    series_id: int = Field(foreign_key="series.id", index=True, ondelete="CASCADE")

    name: str = Field(max_length=255)
    description: str = Field(max_length=255)
    perks: int = Field(default=0)  # Number of chapters unlocked ahead of public release.

    price_amount: Decimal = Field(max_digits=12, decimal_places=2)
    price_currency: str = Field(default="VND", max_length=3)
    billing_interval: BillingInterval = Field(default=BillingInterval.month)
    billing_interval_count: int = Field(default=1)

    is_active: bool = Field(default=True)

    series: Optional["Series"] = Relationship(back_populates="tiers")
    subscriptions: List["Subscription"] = Relationship(
        back_populates="dashi_fan", sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True}
    )

    def next_billing_date(self, start: datetime) -> datetime:
        return add_billing_cycle(start, self.billing_interval, self.billing_interval_count)

    def __repr__(self) -> str:
        return f"DashiFan(id={self.id}, series_id={self.series_id}, name={self.name})"


class BillingDetail(AuditableBase, table=True):
    """Entity for one billing period of a subscription.

    Owned by ``Subscription``.

    Table: billing_details
    """

    __tablename__ = "billing_details"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    subscription_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="subscriptions.id", index=True, ondelete="CASCADE"
    )

    billing_date: datetime = Field(sa_type=DateTime(timezone=True))
    price_amount: Decimal = Field(max_digits=12, decimal_places=2)
    price_currency: str = Field(default="VND", max_length=3)
    payment_status: PaymentStatus = Field(default=PaymentStatus.pending)
    is_paid: bool = Field(default=False)

    subscription: Optional["Subscription"] = Relationship(back_populates="billing_details")


class Subscription(AuditableBase, table=True):
    """Entity for a reader's subscription to a DashiFan tier.

    Table: subscriptions
    """

    __tablename__ = "subscriptions"
    __audit_owned__: ClassVar[Tuple[str, ...]] = ("billing_details",)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(foreign_key="users.id", max_length=450, index=True)
    dashi_fan_id: uuid.UUID = Field(foreign_key="dashi_fans.id", index=True, ondelete="CASCADE")

    status: SubscriptionStatus = Field(default=SubscriptionStatus.pending, index=True)
    next_billing_date: datetime = Field(sa_type=DateTime(timezone=True), index=True)

    dashi_fan: Optional[DashiFan] = Relationship(back_populates="subscriptions")
    billing_details: List[BillingDetail] = Relationship(
        back_populates="subscription",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True, "order_by": "BillingDetail.billing_date"},
    )

    @classmethod
    def start(cls, *, user_id: str, tier: DashiFan, now: Optional[datetime] = None) -> "Subscription":
        """Open a pending subscription with its first unpaid billing period."""
        now = now or datetime.now(timezone.utc)
        subscription = cls(user_id=user_id, dashi_fan_id=tier.id, next_billing_date=now)
        subscription.add_billing(tier, now)
        return subscription

    @property
    def is_live(self) -> bool:
        return self.status in (SubscriptionStatus.pending, SubscriptionStatus.active)

    def add_billing(self, tier: DashiFan, billing_date: datetime) -> BillingDetail:
        detail = BillingDetail(
            billing_date=billing_date,
            price_amount=tier.price_amount,
            price_currency=tier.price_currency,
        )
        self.billing_details.append(detail)
        return detail

    def pending_billing(self) -> Optional[BillingDetail]:
        return next((b for b in self.billing_details if b.payment_status == PaymentStatus.pending), None)

    def confirm_payment(self, billing_id: uuid.UUID, tier: DashiFan, now: Optional[datetime] = None) -> BillingDetail:
        """Settle a billing period, activate the subscription and schedule the next period."""
        detail = next((b for b in self.billing_details if b.id == billing_id), None)
        if detail is None:
            raise NotFoundError(str(billing_id), "BillingDetail")
        if detail.is_paid:
            raise ValidationError(f"Billing period {billing_id} is already paid.")
        if not self.is_live:
            raise ValidationError(f"Cannot pay for a {self.status.value} subscription.")
        detail.is_paid = True
        detail.payment_status = PaymentStatus.paid
        self.status = SubscriptionStatus.active
        self.next_billing_date = tier.next_billing_date(detail.billing_date)
        return detail

    def fail_payment(self, billing_id: uuid.UUID) -> BillingDetail:
        """Record a declined billing period; a live subscription expires."""
        detail = next((b for b in self.billing_details if b.id == billing_id), None)
        if detail is None:
            raise NotFoundError(str(billing_id), "BillingDetail")
        if detail.is_paid:
            raise ValidationError(f"Billing period {billing_id} is already paid.")
        detail.payment_status = PaymentStatus.failed
        if self.is_live:
            self.status = SubscriptionStatus.expired
        return detail

    def cancel(self) -> None:
        if self.status == SubscriptionStatus.cancelled:
            raise ValidationError("Subscription is already cancelled.")
        self.status = SubscriptionStatus.cancelled

    def __repr__(self) -> str:
        return f"Subscription(id={self.id}, user_id={self.user_id}, status={self.status.value})"
