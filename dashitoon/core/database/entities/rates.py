"""
Rate entity models.

Administrators configure the author commission percentage and the Kana to VND
exchange rate. Each update appends a row; the newest row already in effect
is the one applied.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from dashitoon.core.models.domain.enums import CommissionType

from ..base import Base


class CommissionRate(Base, table=True):
    """Entity for the author share of a revenue stream, in percent.

    Table: commission_rates
    """

    __tablename__ = "commission_rates"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: CommissionType = Field(index=True)
    rate: Decimal = Field(max_digits=5, decimal_places=2)
    effective_from: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True), index=True
    )
    updated_by: Optional[str] = Field(default=None, max_length=450)


class KanaExchangeRate(Base, table=True):
    """Entity for the price of one Kana in a fiat currency.

    Table: kana_exchange_rates
    """

    __tablename__ = "kana_exchange_rates"

    id: Optional[int] = Field(default=None, primary_key=True)
    currency: str = Field(default="VND", max_length=3, index=True)
    rate: Decimal = Field(max_digits=12, decimal_places=2)
    effective_from: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True), index=True
    )
    updated_by: Optional[str] = Field(default=None, max_length=450)
