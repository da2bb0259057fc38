"""
User entity models.

Identity (passwords, tokens, external logins) is handled upstream; this table
holds the platform-side profile: Kana balances, the daily check-in marker,
the admin flag and the moderation restriction.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship

from dashitoon.core.errors import AlreadyCheckedInError, InsufficientKanaError
from dashitoon.core.models.domain.enums import KanaType, TransactionType

from ..base import Base

if TYPE_CHECKING:
    from .kana import KanaTransaction


class User(Base, table=True):
    """Entity for a platform user.

    Table: users
    """

    __tablename__ = "users"

    id: str = Field(primary_key=True, max_length=450)
    user_name: str = Field(max_length=256, index=True)
    email: Optional[str] = Field(default=None, max_length=256)

    # Kana balances
    kana_coin: int = Field(default=0)
    kana_gold: int = Field(default=0)
    last_checkin: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    # Authorization
    is_admin: bool = Field(default=False)
    restrict_until: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    ledgers: List["KanaTransaction"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "KanaTransaction.timestamp"},
    )

    def is_restricted(self, now: Optional[datetime] = None) -> bool:
        """Whether the user is currently barred from author/reader write actions."""
        if self.restrict_until is None:
            return False
        now = now or datetime.now(timezone.utc)
        until = self.restrict_until
        if until.tzinfo is None:
            until = until.replace(tzinfo=timezone.utc)
        return until > now

    def balance(self, currency: KanaType) -> int:
        return self.kana_coin if currency == KanaType.coin else self.kana_gold

    def record_transaction(
        self,
        *,
        currency: KanaType,
        type: TransactionType,
        amount: int,
        reason: str,
        now: datetime,
    ) -> "KanaTransaction":
        """Apply a signed balance change and return the ledger entry for it.

        The caller adds the returned entry to the session; entries are never
        updated or removed afterwards.
        """
        from .kana import KanaTransaction

        balance = self.balance(currency)
        if balance + amount < 0:
            raise InsufficientKanaError(currency.value, balance, -amount)
        if currency == KanaType.coin:
            self.kana_coin = balance + amount
        else:
            self.kana_gold = balance + amount
        return KanaTransaction(
            user_id=self.id,
            currency=currency,
            type=type,
            amount=amount,
            reason=reason,
            timestamp=now,
        )

    def check_in(self, now: datetime, reward: int) -> "KanaTransaction":
        """Grant the daily check-in reward, at most once per UTC day."""
        last = self.last_checkin
        if last is not None:
            if last.tzinfo is None:
                last = last.replace(tzinfo=timezone.utc)
            if last.astimezone(timezone.utc).date() == now.astimezone(timezone.utc).date():
                raise AlreadyCheckedInError()
        self.last_checkin = now
        return self.record_transaction(
            currency=KanaType.coin,
            type=TransactionType.checkin,
            amount=reward,
            reason="Daily check-in",
            now=now,
        )

    def __repr__(self) -> str:
        return f"User(id={self.id}, user_name={self.user_name})"
