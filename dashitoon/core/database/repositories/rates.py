"""
Commission and exchange rate repositories.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.models.domain.enums import CommissionType

from ..entities.rates import CommissionRate, KanaExchangeRate
from .base import AsyncBaseRepository


class CommissionRateRepository(AsyncBaseRepository[CommissionRate]):
    """Repository for author commission rates."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CommissionRate)

    async def get_effective(self, type: CommissionType, now: datetime) -> Optional[CommissionRate]:
        """The newest rate of ``type`` already in effect at ``now``."""
        stmt = (
            select(CommissionRate)
            .where(CommissionRate.type == type, col(CommissionRate.effective_from) <= now)
            .order_by(col(CommissionRate.effective_from).desc(), col(CommissionRate.id).desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()


class KanaExchangeRateRepository(AsyncBaseRepository[KanaExchangeRate]):
    """Repository for Kana exchange rates."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, KanaExchangeRate)

    async def get_effective(self, currency: str, now: datetime) -> Optional[KanaExchangeRate]:
        """The newest rate for ``currency`` already in effect at ``now``."""
        stmt = (
            select(KanaExchangeRate)
            .where(KanaExchangeRate.currency == currency, col(KanaExchangeRate.effective_from) <= now)
            .order_by(col(KanaExchangeRate.effective_from).desc(), col(KanaExchangeRate.id).desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()
