"""
User and Kana ledger repositories.

The ledger repository deliberately exposes no update or delete operations.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.models.domain.enums import KanaType

from ..entities.kana import KanaTransaction
from ..entities.users import User
from .base import AsyncBaseRepository, QueryBuilder


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user profile data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)


class KanaTransactionRepository:
    """Append-only access to the Kana ledger."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def append(self, transaction: KanaTransaction) -> KanaTransaction:
        self.session.add(transaction)
        return transaction

    async def list_by_user(
        self,
        user_id: str,
        currency: Optional[KanaType] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[KanaTransaction]:
        """List a user's ledger entries, newest first."""
        stmt = select(KanaTransaction).where(KanaTransaction.user_id == user_id)
        stmt = QueryBuilder.apply_filters(stmt, KanaTransaction, {"currency": currency})
        stmt = stmt.order_by(col(KanaTransaction.timestamp).desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def sum_for_user(self, user_id: str, currency: KanaType) -> int:
        """Net ledger total for one currency; equals the stored balance."""
        stmt = select(func.coalesce(func.sum(KanaTransaction.amount), 0)).where(
            KanaTransaction.user_id == user_id, KanaTransaction.currency == currency
        )
        result = await self.session.exec(stmt)
        return int(result.one())
