from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PairDayData:
    date: int
    daily_volume_usd: Decimal
    reserve_usd: Decimal
    daily_volume_token0: Decimal = Decimal("0")
    daily_volume_token1: Decimal = Decimal("0")
    synthetic: bool = False


@dataclass(frozen=True)
class HourlyRateSample:
    timestamp: int
    rate0: Decimal
    rate1: Decimal


@dataclass(frozen=True)
class Candle:
    timestamp: int
    open: Decimal
    close: Decimal
