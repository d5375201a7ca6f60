from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class TokenResponse(BaseModel):
    id: str
    symbol: str
    name: str
    derived_eth: Decimal | None = None
    total_liquidity: Decimal | None = None


class EnrichedPairResponse(BaseModel):
    id: str
    token0: TokenResponse
    token1: TokenResponse
    reserve0: Decimal
    reserve1: Decimal
    reserve_usd: Decimal
    reserve_eth: Decimal
    tracked_reserve_eth: Decimal
    total_supply: Decimal
    volume_usd: Decimal
    untracked_volume_usd: Decimal
    token0_price: Decimal
    token1_price: Decimal
    tx_count: int
    created_at_timestamp: int
    created_at_block_number: int
    one_day_volume_usd: Decimal
    one_week_volume_usd: Decimal
    volume_change_usd: Decimal
    one_day_volume_untracked: Decimal
    volume_change_untracked: Decimal
    tracked_reserve_usd: Decimal
    liquidity_change_usd: Decimal


class PairDayDataResponse(BaseModel):
    date: int
    daily_volume_usd: Decimal
    reserve_usd: Decimal
    daily_volume_token0: Decimal
    daily_volume_token1: Decimal
    synthetic: bool


class CandleResponse(BaseModel):
    timestamp: int
    open: Decimal
    close: Decimal


class HourlyRateResponse(BaseModel):
    rate0: list[CandleResponse]
    rate1: list[CandleResponse]
