"""
Unit tests for the admin rates panel.
"""

from decimal import Decimal

import pytest
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.core.database.entities import CommissionRate
from dashitoon.core.errors import ValidationError
from dashitoon.core.models.domain.enums import CommissionType
from dashitoon.services import RatesService


@pytest.fixture
def service(session: AsyncSession, clock) -> RatesService:
    return RatesService(session, default_commission_rate=70, default_exchange_rate=1, clock=clock)


class TestCommissionRate:
    async def test_default_before_any_update(self, service: RatesService):
        rate = await service.get_commission_rate(CommissionType.dashi_fan)

        assert rate.type == CommissionType.dashi_fan
        assert rate.rate == Decimal("70")
        assert rate.effective_from is None

    async def test_update_appends_history(self, session: AsyncSession, service: RatesService, clock):
        await service.update_commission_rate(CommissionType.kana, Decimal("65"), user_id="admin-1")
        clock.advance(hours=1)
        await service.update_commission_rate(CommissionType.kana, Decimal("60.5"), user_id="admin-1")

        current = await service.get_commission_rate(CommissionType.kana)
        rows = (await session.exec(select(CommissionRate))).all()

        assert current.rate == Decimal("60.5")
        assert len(rows) == 2
        assert (await service.get_commission_rate(CommissionType.dashi_fan)).rate == Decimal("70")

    @pytest.mark.parametrize("rate", [Decimal("-1"), Decimal("100.01")])
    async def test_out_of_range(self, service: RatesService, rate):
        with pytest.raises(ValidationError):
            await service.update_commission_rate(CommissionType.kana, rate)


class TestKanaExchangeRate:
    async def test_default_and_update(self, service: RatesService):
        assert (await service.get_kana_exchange_rate()).rate == Decimal("1")

        updated = await service.update_kana_exchange_rate(Decimal("250"), user_id="admin-1")

        assert updated.currency == "VND"
        assert (await service.get_kana_exchange_rate()).rate == Decimal("250")

    async def test_non_positive_rejected(self, service: RatesService):
        with pytest.raises(ValidationError):
            await service.update_kana_exchange_rate(Decimal("0"))
