"""
Kana ledger entity models.

The ledger provides append-only accounting of virtual-currency credits and
debits per user. Balances on ``User`` are the running sum of these rows.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship

from dashitoon.core.models.domain.enums import KanaType, TransactionType

from ..base import Base

if TYPE_CHECKING:
    from .users import User


class KanaTransaction(Base, table=True):
    """Entity for one Kana balance change.

    Table: kana_transactions
    """

    __tablename__ = "kana_transactions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(foreign_key="users.id", max_length=450, index=True)

    currency: KanaType = Field(index=True)
    type: TransactionType = Field()
    amount: int = Field()  # Signed: negative for debits.
    reason: str = Field(max_length=500)

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True), index=True
    )

    user: Optional["User"] = Relationship(back_populates="ledgers")

    def __repr__(self) -> str:
        return f"KanaTransaction(id={self.id}, user_id={self.user_id}, amount={self.amount} {self.currency.value})"
