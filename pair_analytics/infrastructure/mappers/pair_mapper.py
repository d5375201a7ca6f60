from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pair_analytics.domain.entities.pair import Pair, PairSnapshot, Token
from pair_analytics.domain.entities.pair_chart import HourlyRateSample, PairDayData


def to_decimal(value: Any) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def to_decimal_or_none(value: Any) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def map_row_to_token(row: Mapping[str, Any]) -> Token:
    return Token(
        id=str(row["id"]).lower(),
        symbol=str(row.get("symbol") or ""),
        name=str(row.get("name") or ""),
        derived_eth=to_decimal_or_none(row.get("derivedETH")),
        total_liquidity=to_decimal_or_none(row.get("totalLiquidity")),
    )


def map_row_to_pair(row: Mapping[str, Any]) -> Pair:
    return Pair(
        id=str(row["id"]).lower(),
        token0=map_row_to_token(row["token0"]),
        token1=map_row_to_token(row["token1"]),
        reserve0=to_decimal(row.get("reserve0")),
        reserve1=to_decimal(row.get("reserve1")),
        reserve_usd=to_decimal(row.get("reserveUSD")),
        reserve_eth=to_decimal(row.get("reserveETH")),
        tracked_reserve_eth=to_decimal(row.get("trackedReserveETH")),
        total_supply=to_decimal(row.get("totalSupply")),
        volume_usd=to_decimal(row.get("volumeUSD")),
        untracked_volume_usd=to_decimal(row.get("untrackedVolumeUSD")),
        token0_price=to_decimal(row.get("token0Price")),
        token1_price=to_decimal(row.get("token1Price")),
        tx_count=int(row.get("txCount") or 0),
        created_at_timestamp=int(row.get("createdAtTimestamp") or 0),
        created_at_block_number=int(row.get("createdAtBlockNumber") or 0),
    )


def map_row_to_pair_snapshot(row: Mapping[str, Any]) -> PairSnapshot:
    return PairSnapshot(
        id=str(row["id"]).lower(),
        reserve_usd=to_decimal(row.get("reserveUSD")),
        tracked_reserve_eth=to_decimal(row.get("trackedReserveETH")),
        volume_usd=to_decimal(row.get("volumeUSD")),
        untracked_volume_usd=to_decimal(row.get("untrackedVolumeUSD")),
    )


def map_row_to_pair_day_data(row: Mapping[str, Any]) -> PairDayData:
    return PairDayData(
        date=int(row["date"]),
        daily_volume_usd=to_decimal(row.get("dailyVolumeUSD")),
        reserve_usd=to_decimal(row.get("reserveUSD")),
        daily_volume_token0=to_decimal(row.get("dailyVolumeToken0")),
        daily_volume_token1=to_decimal(row.get("dailyVolumeToken1")),
    )


def map_row_to_hourly_rate_sample(timestamp: int, row: Mapping[str, Any]) -> HourlyRateSample:
    return HourlyRateSample(
        timestamp=timestamp,
        rate0=to_decimal(row.get("token0Price")),
        rate1=to_decimal(row.get("token1Price")),
    )
