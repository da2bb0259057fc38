"""
API endpoints for the caller's Kana wallet.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from dashitoon.core.models.domain.enums import KanaType
from dashitoon.core.models.io.kana import (
    KanaBalanceRead,
    KanaLedgerRead,
    KanaSpend,
    KanaTopUp,
    KanaTransactionRead,
)

from ...services.deps import ActiveUser, CurrentUser, KanaServiceDep

router = APIRouter()


@router.get("", response_model=KanaBalanceRead, summary="Get Kana Balance")
async def get_balance(user: CurrentUser) -> KanaBalanceRead:
    return KanaBalanceRead.model_validate(user)


@router.post(
    "/checkin",
    response_model=KanaTransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Daily Check-in",
    responses={400: {"description": "Already checked in today"}},
)
async def check_in(user: ActiveUser, service: KanaServiceDep) -> KanaTransactionRead:
    return KanaTransactionRead.model_validate(await service.check_in(user))


@router.post("/top-up", response_model=KanaTransactionRead, status_code=status.HTTP_201_CREATED, summary="Top Up Gold")
async def top_up(data: KanaTopUp, user: ActiveUser, service: KanaServiceDep) -> KanaTransactionRead:
    return KanaTransactionRead.model_validate(await service.top_up(user, data.amount))


@router.post(
    "/spend",
    response_model=KanaTransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Spend Kana",
    responses={400: {"description": "Insufficient balance"}},
)
async def spend(data: KanaSpend, user: ActiveUser, service: KanaServiceDep) -> KanaTransactionRead:
    return KanaTransactionRead.model_validate(await service.spend(user, data.currency, data.amount, data.reason))


@router.get("/transactions", response_model=List[KanaTransactionRead], summary="List Kana Transactions")
async def list_transactions(
    user: CurrentUser,
    service: KanaServiceDep,
    currency: Optional[KanaType] = None,
    limit: Optional[int] = Query(default=50, ge=1, le=200),
    offset: Optional[int] = Query(default=0, ge=0),
) -> List[KanaTransactionRead]:
    transactions = await service.list_transactions(user, currency=currency, limit=limit, offset=offset)
    return [KanaTransactionRead.model_validate(transaction) for transaction in transactions]


@router.get(
    "/ledger",
    response_model=KanaLedgerRead,
    summary="Reconcile Kana Ledger",
    description="Sum the caller's ledger per currency and compare it with the stored balances.",
)
async def get_ledger_totals(user: CurrentUser, service: KanaServiceDep) -> KanaLedgerRead:
    totals = await service.ledger_totals(user)
    return KanaLedgerRead(
        ledger_coin=totals[KanaType.coin],
        ledger_gold=totals[KanaType.gold],
        kana_coin=user.kana_coin,
        kana_gold=user.kana_gold,
        consistent=all(total == user.balance(currency) for currency, total in totals.items()),
    )
