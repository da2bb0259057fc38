"""
Kana wallet I/O models.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from dashitoon.core.models.domain.enums import KanaType, TransactionType


class KanaBalanceRead(BaseModel):
    kana_coin: int
    kana_gold: int
    last_checkin: Optional[datetime] = None

    class Config:
        from_attributes = True


class KanaTopUp(BaseModel):
    amount: int = Field(gt=0, description="Kana Gold to deposit")


class KanaSpend(BaseModel):
    currency: KanaType
    amount: int = Field(gt=0)
    reason: str = Field(min_length=1, max_length=500)


class KanaTransactionRead(BaseModel):
    """Schema for reading a ledger entry."""

    id: uuid.UUID
    currency: KanaType
    type: TransactionType
    amount: int
    reason: str
    timestamp: datetime

    class Config:
        from_attributes = True


class KanaLedgerRead(BaseModel):
    """Ledger totals per currency next to the stored balances."""

    ledger_coin: int
    ledger_gold: int
    kana_coin: int
    kana_gold: int
    consistent: bool
