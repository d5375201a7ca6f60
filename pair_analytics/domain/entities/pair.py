from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Token:
    id: str
    symbol: str
    name: str
    derived_eth: Decimal | None = None
    total_liquidity: Decimal | None = None


@dataclass(frozen=True)
class Pair:
    id: str
    token0: Token
    token1: Token
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


@dataclass(frozen=True)
class PairSnapshot:
    id: str
    reserve_usd: Decimal
    tracked_reserve_eth: Decimal
    volume_usd: Decimal
    untracked_volume_usd: Decimal


@dataclass(frozen=True)
class EnrichedPair:
    pair: Pair
    one_day_volume_usd: Decimal
    one_week_volume_usd: Decimal
    volume_change_usd: Decimal
    one_day_volume_untracked: Decimal
    volume_change_untracked: Decimal
    tracked_reserve_usd: Decimal
    liquidity_change_usd: Decimal
