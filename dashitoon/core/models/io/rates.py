"""
Admin rate I/O models.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from dashitoon.core.models.domain.enums import CommissionType


class CommissionRateRead(BaseModel):
    """Schema for reading the commission rate in effect."""

    type: CommissionType
    rate: Decimal
    effective_from: Optional[datetime] = Field(default=None, description="None when the built-in default applies")

    class Config:
        from_attributes = True


class CommissionRateUpdate(BaseModel):
    rate: Decimal = Field(ge=0, le=100, description="Author share in percent")


class KanaExchangeRateRead(BaseModel):
    """Schema for reading the Kana exchange rate in effect."""

    currency: str
    rate: Decimal
    effective_from: Optional[datetime] = Field(default=None, description="None when the built-in default applies")

    class Config:
        from_attributes = True


class KanaExchangeRateUpdate(BaseModel):
    rate: Decimal = Field(gt=0, description="Price of one Kana in the fiat currency")
