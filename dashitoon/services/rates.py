"""
Admin-managed commission and Kana exchange rates.

Updates append a new row so the history is kept; reads return the newest row
already in effect, or the configured default when nothing was ever set.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.database.entities.rates import CommissionRate, KanaExchangeRate
from dashitoon.core.database.repositories import CommissionRateRepository, KanaExchangeRateRepository
from dashitoon.core.errors import ValidationError
from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.domain.enums import CommissionType
from dashitoon.core.models.io.rates import CommissionRateRead, KanaExchangeRateRead

from .clock import Clock, utc_now

logger = get_logger(__name__)

EXCHANGE_CURRENCY = "VND"


class RatesService:
    def __init__(
        self,
        session: AsyncSession,
        default_commission_rate: Union[Decimal, float] = 70,
        default_exchange_rate: Union[Decimal, float] = 1,
        clock: Optional[Clock] = None,
    ) -> None:
        self.session = session
        self.commission_rates = CommissionRateRepository(session)
        self.exchange_rates = KanaExchangeRateRepository(session)
        self.default_commission_rate = Decimal(str(default_commission_rate))
        self.default_exchange_rate = Decimal(str(default_exchange_rate))
        self._clock = clock or utc_now

    async def get_commission_rate(self, type: CommissionType = CommissionType.kana) -> CommissionRateRead:
        row = await self.commission_rates.get_effective(type, self._clock())
        if row is None:
            return CommissionRateRead(type=type, rate=self.default_commission_rate)
        return CommissionRateRead.model_validate(row)

    async def update_commission_rate(
        self, type: CommissionType, rate: Decimal, user_id: Optional[str] = None
    ) -> CommissionRateRead:
        if not Decimal(0) <= rate <= Decimal(100):
            raise ValidationError("Commission rate must be between 0 and 100.", errors={"rate": ["Must be between 0 and 100."]})
        row = CommissionRate(type=type, rate=rate, effective_from=self._clock(), updated_by=user_id)
        self.commission_rates.add(row)
        await self.session.commit()
        logger.info(f"Commission rate for {type.name} set to {rate} by {user_id}")
        return CommissionRateRead.model_validate(row)

    async def get_kana_exchange_rate(self) -> KanaExchangeRateRead:
        row = await self.exchange_rates.get_effective(EXCHANGE_CURRENCY, self._clock())
        if row is None:
            return KanaExchangeRateRead(currency=EXCHANGE_CURRENCY, rate=self.default_exchange_rate)
        return KanaExchangeRateRead.model_validate(row)

    async def update_kana_exchange_rate(self, rate: Decimal, user_id: Optional[str] = None) -> KanaExchangeRateRead:
        if rate <= 0:
            raise ValidationError("Exchange rate must be positive.", errors={"rate": ["Must be greater than 0."]})
        row = KanaExchangeRate(currency=EXCHANGE_CURRENCY, rate=rate, effective_from=self._clock(), updated_by=user_id)
        self.exchange_rates.add(row)
        await self.session.commit()
        logger.info(f"Kana exchange rate set to {rate} {EXCHANGE_CURRENCY} by {user_id}")
        return KanaExchangeRateRead.model_validate(row)
