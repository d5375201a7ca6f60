from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from pair_analytics.api.deps import (
    get_all_pair_transactions_use_case,
    get_pair_transactions_use_case,
)
from pair_analytics.api.schemas.transactions import PairTransactionsResponse
from pair_analytics.application.use_cases.get_pair_transactions import (
    GetAllPairTransactionsUseCase,
    GetPairTransactionsUseCase,
)
from pair_analytics.domain.exceptions import PairDataInputError

router = APIRouter()


@router.get("/v1/transactions", response_model=PairTransactionsResponse)
async def get_all_pair_transactions(
    use_case: GetAllPairTransactionsUseCase = Depends(get_all_pair_transactions_use_case),
):
    transactions = await use_case.execute()
    return PairTransactionsResponse.model_validate(asdict(transactions))


@router.get("/v1/pairs/{pair_address}/transactions", response_model=PairTransactionsResponse)
async def get_pair_transactions(
    pair_address: str,
    use_case: GetPairTransactionsUseCase = Depends(get_pair_transactions_use_case),
):
    try:
        transactions = await use_case.execute(pair_address)
    except PairDataInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return PairTransactionsResponse.model_validate(asdict(transactions))
