"""
DashiFan tier and subscription I/O models.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from dashitoon.core.models.domain.enums import BillingInterval, PaymentStatus, SubscriptionStatus


class DashiFanCreate(BaseModel):
    """Schema for creating a DashiFan tier."""

    name: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", max_length=255)
    perks: int = Field(default=0, ge=0, description="Chapters unlocked ahead of public release")
    price_amount: Decimal = Field(gt=0)
    price_currency: str = Field(default="VND", min_length=3, max_length=3)
    billing_interval: BillingInterval = BillingInterval.month
    billing_interval_count: int = Field(default=1, ge=1)


class DashiFanUpdate(BaseModel):
    """Schema for updating a DashiFan tier."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=255)
    perks: Optional[int] = Field(default=None, ge=0)
    price_amount: Optional[Decimal] = Field(default=None, gt=0)
    billing_interval: Optional[BillingInterval] = None
    billing_interval_count: Optional[int] = Field(default=None, ge=1)


class DashiFanRead(BaseModel):
    """Schema for reading a DashiFan tier."""

    id: uuid.UUID
    series_id: int
    name: str
    description: str
    perks: int
    price_amount: Decimal
    price_currency: str
    billing_interval: BillingInterval
    billing_interval_count: int
    is_active: bool

    class Config:
        from_attributes = True


class BillingDetailRead(BaseModel):
    id: uuid.UUID
    billing_date: datetime
    price_amount: Decimal
    price_currency: str
    payment_status: PaymentStatus
    is_paid: bool

    class Config:
        from_attributes = True


class SubscriptionCreate(BaseModel):
    dashi_fan_id: uuid.UUID


class PaymentConfirm(BaseModel):
    billing_id: uuid.UUID


class SubscriptionRead(BaseModel):
    """Schema for reading a subscription and its billing history."""

    id: uuid.UUID
    user_id: str
    dashi_fan_id: uuid.UUID
    status: SubscriptionStatus
    next_billing_date: datetime
    billing_details: List[BillingDetailRead] = Field(default_factory=list)

    class Config:
        from_attributes = True


class RenewalRead(BaseModel):
    renewed: int = Field(description="Number of subscriptions that received a new billing period")
