from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from pair_analytics.application.dto.pair_data import GetBulkPairDataInput
from pair_analytics.application.ports.block_lookup_port import BlockLookupPort
from pair_analytics.application.ports.pair_query_port import PairQueryPort
from pair_analytics.domain.entities.pair import EnrichedPair, Pair, PairSnapshot
from pair_analytics.domain.exceptions import FETCH_ERRORS, DataSourceError
from pair_analytics.domain.services.pair_enrichment import enrich_pair
from pair_analytics.domain.services.timeframes import timestamps_for_changes


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def _gather_or_cancel(*aws):
    """Like ``asyncio.gather`` but cancels and reaps the siblings when one fails."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except Exception:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class GetBulkPairDataUseCase:
    def __init__(
        self,
        *,
        pair_query_port: PairQueryPort,
        block_lookup_port: BlockLookupPort,
        now_provider: Callable[[], datetime] = _utc_now,
    ):
        self._pair_query_port = pair_query_port
        self._block_lookup_port = block_lookup_port
        self._now_provider = now_provider

    async def execute(self, command: GetBulkPairDataInput) -> list[EnrichedPair] | None:
        try:
            return await self._execute(command)
        except FETCH_ERRORS:
            logger.exception("get_bulk_pair_data: failed pairs=%s", len(command.pair_ids))
            return None

    async def _execute(self, command: GetBulkPairDataInput) -> list[EnrichedPair]:
        b1, b2, b_week = await self._resolve_change_blocks()
        pair_ids = [pair_id.lower() for pair_id in command.pair_ids]

        current = await self._pair_query_port.fetch_pairs(pair_ids=pair_ids)
        one_day_data, two_day_data, one_week_data = await _gather_or_cancel(
            *(
                self._pair_query_port.fetch_pair_snapshots_at_block(
                    pair_ids=pair_ids,
                    block_number=block_number,
                )
                for block_number in (b1, b2, b_week)
            )
        )

        fallbacks: list[tuple[str, int]] = []

        async def history(data: dict[str, PairSnapshot], pair_id: str, block_number: int) -> PairSnapshot | None:
            snapshot = data.get(pair_id)
            if snapshot is not None:
                return snapshot
            fallbacks.append((pair_id, block_number))
            return await self._pair_query_port.fetch_pair_snapshot_at_block(
                pair_id=pair_id,
                block_number=block_number,
            )

        async def parse(pair: Pair) -> EnrichedPair:
            one_day, two_day, one_week = await _gather_or_cancel(
                history(one_day_data, pair.id, b1),
                history(two_day_data, pair.id, b2),
                history(one_week_data, pair.id, b_week),
            )
            return enrich_pair(
                pair,
                one_day=one_day,
                two_day=two_day,
                one_week=one_week,
                eth_price=command.eth_price,
            )

        enriched = await _gather_or_cancel(*(parse(pair) for pair in current))

        logger.info(
            "get_bulk_pair_data: enriched pairs=%s requested=%s fallbacks=%s blocks=%s/%s/%s",
            len(enriched),
            len(pair_ids),
            len(fallbacks),
            b1,
            b2,
            b_week,
        )
        return list(enriched)

    async def _resolve_change_blocks(self) -> tuple[int, int, int]:
        timestamps = timestamps_for_changes(self._now_provider())
        blocks = await self._block_lookup_port.get_blocks_from_timestamps(list(timestamps))
        numbers = {block.timestamp: block.number for block in blocks}
        missing = [timestamp for timestamp in timestamps if timestamp not in numbers]
        if missing:
            raise DataSourceError(f"Blocks not found for timestamps: {missing}")
        t1, t2, t_week = timestamps
        return numbers[t1], numbers[t2], numbers[t_week]
