from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class TransactionRefResponse(BaseModel):
    id: str
    timestamp: int


class MintResponse(BaseModel):
    transaction: TransactionRefResponse
    token0_symbol: str
    token1_symbol: str
    to: str | None
    liquidity: Decimal
    amount0: Decimal
    amount1: Decimal
    amount_usd: Decimal


class BurnResponse(BaseModel):
    transaction: TransactionRefResponse
    token0_symbol: str
    token1_symbol: str
    sender: str | None
    liquidity: Decimal
    amount0: Decimal
    amount1: Decimal
    amount_usd: Decimal


class SwapResponse(BaseModel):
    id: str
    transaction: TransactionRefResponse
    token0_symbol: str
    token1_symbol: str
    amount0_in: Decimal
    amount0_out: Decimal
    amount1_in: Decimal
    amount1_out: Decimal
    amount_usd: Decimal
    to: str | None


class PairTransactionsResponse(BaseModel):
    mints: list[MintResponse]
    burns: list[BurnResponse]
    swaps: list[SwapResponse]
