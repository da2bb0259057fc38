"""
Kana wallet: daily check-in, Gold top-up and spending.

Every balance change is recorded as one ledger entry in the same commit.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.database.entities.kana import KanaTransaction
from dashitoon.core.database.entities.users import User
from dashitoon.core.database.repositories import KanaTransactionRepository
from dashitoon.core.errors import ValidationError
from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.domain.enums import KanaType, TransactionType

from .clock import Clock, utc_now

logger = get_logger(__name__)

TOP_UP_REASON = "Kana Gold top-up"


class KanaService:
    def __init__(self, session: AsyncSession, checkin_reward: int = 10, clock: Optional[Clock] = None) -> None:
        self.session = session
        self.ledger = KanaTransactionRepository(session)
        self.checkin_reward = checkin_reward
        self._clock = clock or utc_now

    async def check_in(self, user: User) -> KanaTransaction:
        transaction = self.ledger.append(user.check_in(self._clock(), self.checkin_reward))
        await self.session.commit()
        logger.info(f"User {user.id} checked in for {transaction.amount} Kana Coin")
        return transaction

    async def top_up(self, user: User, amount: int) -> KanaTransaction:
        if amount <= 0:
            raise ValidationError("Amount must be positive.", errors={"amount": ["Must be greater than 0."]})
        transaction = self.ledger.append(
            user.record_transaction(
                currency=KanaType.gold,
                type=TransactionType.deposit,
                amount=amount,
                reason=TOP_UP_REASON,
                now=self._clock(),
            )
        )
        await self.session.commit()
        return transaction

    async def spend(self, user: User, currency: KanaType, amount: int, reason: str) -> KanaTransaction:
        if amount <= 0:
            raise ValidationError("Amount must be positive.", errors={"amount": ["Must be greater than 0."]})
        transaction = self.ledger.append(
            user.record_transaction(
                currency=currency,
                type=TransactionType.withdraw,
                amount=-amount,
                reason=reason,
                now=self._clock(),
            )
        )
        await self.session.commit()
        logger.info(f"User {user.id} spent {amount} {currency.value}: {reason}")
        return transaction

    async def ledger_totals(self, user: User) -> Dict[KanaType, int]:
        """Sum the ledger per currency and compare with the stored balances."""
        totals = {currency: await self.ledger.sum_for_user(user.id, currency) for currency in KanaType}
        for currency, total in totals.items():
            if total != user.balance(currency):
                logger.error(
                    f"Kana ledger mismatch for user {user.id}: {currency.value} balance "
                    f"{user.balance(currency)}, ledger {total}"
                )
        return totals

    async def list_transactions(
        self,
        user: User,
        currency: Optional[KanaType] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[KanaTransaction]:
        return await self.ledger.list_by_user(user.id, currency=currency, limit=limit, offset=offset)
