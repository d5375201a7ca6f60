from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from pair_analytics.domain.entities.pair_chart import Candle


@dataclass(frozen=True)
class GetBulkPairDataInput:
    pair_ids: list[str]
    eth_price: Decimal


@dataclass(frozen=True)
class GetPairChartDataInput:
    pair_address: str


@dataclass(frozen=True)
class GetHourlyRateDataInput:
    pair_address: str
    start_time: int
    latest_block: int | None = None


@dataclass(frozen=True)
class HourlyRateDataOutput:
    rate0: list[Candle] = field(default_factory=list)
    rate1: list[Candle] = field(default_factory=list)
