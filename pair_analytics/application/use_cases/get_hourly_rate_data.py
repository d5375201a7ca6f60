from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from pair_analytics.application.dto.pair_data import GetHourlyRateDataInput, HourlyRateDataOutput
from pair_analytics.application.ports.block_lookup_port import BlockLookupPort
from pair_analytics.application.ports.pair_query_port import PairQueryPort
from pair_analytics.domain.exceptions import FETCH_ERRORS, PairDataInputError
from pair_analytics.domain.services.hourly_rates import build_hourly_candles, hourly_timestamps
from pair_analytics.domain.services.pair_address import normalize_pair_address


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetHourlyRateDataUseCase:
    def __init__(
        self,
        *,
        pair_query_port: PairQueryPort,
        block_lookup_port: BlockLookupPort,
        chunk_size: int = 100,
        now_provider: Callable[[], datetime] = _utc_now,
    ):
        self._pair_query_port = pair_query_port
        self._block_lookup_port = block_lookup_port
        self._chunk_size = max(1, chunk_size)
        self._now_provider = now_provider

    async def execute(self, command: GetHourlyRateDataInput) -> HourlyRateDataOutput:
        address = normalize_pair_address(command.pair_address)
        if command.start_time < 0:
            raise PairDataInputError("start_time must be a unix timestamp.")

        now = int(self._now_provider().timestamp())
        timestamps = hourly_timestamps(start_time=command.start_time, now=now)
        if not timestamps:
            return HourlyRateDataOutput()

        try:
            blocks = await self._block_lookup_port.get_blocks_from_timestamps(
                timestamps,
                chunk_size=self._chunk_size,
            )
            if not blocks:
                return HourlyRateDataOutput()
            if command.latest_block is not None:
                blocks = [block for block in blocks if block.number <= command.latest_block]

            samples = await self._pair_query_port.fetch_hourly_rates(
                pair_address=address,
                blocks=blocks,
                chunk_size=self._chunk_size,
            )
        except FETCH_ERRORS:
            logger.exception("get_hourly_rate_data: failed pair=%s start_time=%s", address, command.start_time)
            return HourlyRateDataOutput()

        rate0, rate1 = build_hourly_candles(samples)
        logger.info(
            "get_hourly_rate_data: built_candles pair=%s hours=%s blocks=%s candles=%s",
            address,
            len(timestamps),
            len(blocks),
            len(rate0),
        )
        return HourlyRateDataOutput(rate0=rate0, rate1=rate1)
