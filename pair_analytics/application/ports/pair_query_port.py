from __future__ import annotations

from typing import Protocol

from pair_analytics.domain.entities.block import Block
from pair_analytics.domain.entities.pair import Pair, PairSnapshot
from pair_analytics.domain.entities.pair_chart import HourlyRateSample, PairDayData
from pair_analytics.domain.entities.transactions import PairTransactions


class PairQueryPort(Protocol):
    async def fetch_top_pair_ids(self) -> list[str]:
        ...

    async def fetch_pairs(self, *, pair_ids: list[str]) -> list[Pair]:
        ...

    async def fetch_pair_snapshots_at_block(
        self,
        *,
        pair_ids: list[str],
        block_number: int,
    ) -> dict[str, PairSnapshot]:
        ...

    async def fetch_pair_snapshot_at_block(
        self,
        *,
        pair_id: str,
        block_number: int,
    ) -> PairSnapshot | None:
        ...

    async def fetch_pair_day_datas(
        self,
        *,
        pair_address: str,
        skip: int,
        page_size: int,
    ) -> list[PairDayData]:
        ...

    async def fetch_transactions(self, *, pair_ids: list[str] | None) -> PairTransactions:
        ...

    async def fetch_hourly_rates(
        self,
        *,
        pair_address: str,
        blocks: list[Block],
        chunk_size: int,
    ) -> list[HourlyRateSample]:
        ...
