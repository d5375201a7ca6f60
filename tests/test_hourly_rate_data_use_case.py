from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from pair_analytics.application.dto.pair_data import GetHourlyRateDataInput
from pair_analytics.application.use_cases.get_hourly_rate_data import GetHourlyRateDataUseCase
from pair_analytics.domain.entities.block import Block
from pair_analytics.domain.entities.pair_chart import HourlyRateSample
from pair_analytics.domain.exceptions import DataSourceError, PairDataInputError

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
NOW_TS = int(NOW.timestamp())
START = NOW_TS - 4 * 3600


class FakeBlockLookupPort:
    def __init__(self, *, empty: bool = False):
        self.empty = empty
        self.requested: list[int] = []
        self.chunk_size: int | None = None

    async def get_blocks_from_timestamps(self, timestamps, *, chunk_size=500):
        self.requested = list(timestamps)
        self.chunk_size = chunk_size
        if self.empty:
            return []
        return [Block(number=1000 + i, timestamp=ts) for i, ts in enumerate(timestamps)]


class FakePairQueryPort:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.blocks: list[Block] = []

    async def fetch_hourly_rates(self, *, pair_address, blocks, chunk_size):
        if self.fail:
            raise DataSourceError("boom")
        self.blocks = list(blocks)
        return [
            HourlyRateSample(
                timestamp=block.timestamp,
                rate0=Decimal(block.number - 999),
                rate1=Decimal(1) / Decimal(block.number - 999),
            )
            for block in blocks
        ]


def _use_case(pairs: FakePairQueryPort, blocks: FakeBlockLookupPort) -> GetHourlyRateDataUseCase:
    return GetHourlyRateDataUseCase(
        pair_query_port=pairs,
        block_lookup_port=blocks,
        chunk_size=100,
        now_provider=lambda: NOW,
    )


@pytest.mark.asyncio()
async def test_builds_candles_from_hourly_blocks():
    pairs = FakePairQueryPort()
    blocks = FakeBlockLookupPort()

    output = await _use_case(pairs, blocks).execute(
        GetHourlyRateDataInput(pair_address="0xPAIR", start_time=START)
    )

    assert blocks.requested == [START, START + 3600, START + 7200, START + 10800]
    assert blocks.chunk_size == 100
    assert len(output.rate0) == 3
    assert output.rate0[0].timestamp == START
    assert output.rate0[0].open == Decimal("1")
    assert output.rate0[0].close == Decimal("2")
    assert len(output.rate1) == 3


@pytest.mark.asyncio()
async def test_latest_block_filters_newer_blocks():
    pairs = FakePairQueryPort()

    output = await _use_case(pairs, FakeBlockLookupPort()).execute(
        GetHourlyRateDataInput(pair_address="0xpair", start_time=START, latest_block=1001)
    )

    assert [block.number for block in pairs.blocks] == [1000, 1001]
    assert len(output.rate0) == 1


@pytest.mark.asyncio()
async def test_start_time_in_current_hour_returns_empty():
    blocks = FakeBlockLookupPort()

    output = await _use_case(FakePairQueryPort(), blocks).execute(
        GetHourlyRateDataInput(pair_address="0xpair", start_time=NOW_TS - 60)
    )

    assert output.rate0 == []
    assert output.rate1 == []
    assert blocks.requested == []


@pytest.mark.asyncio()
async def test_no_blocks_returns_empty():
    output = await _use_case(FakePairQueryPort(), FakeBlockLookupPort(empty=True)).execute(
        GetHourlyRateDataInput(pair_address="0xpair", start_time=START)
    )

    assert output.rate0 == []
    assert output.rate1 == []


@pytest.mark.asyncio()
async def test_failure_returns_two_empty_lists():
    output = await _use_case(FakePairQueryPort(fail=True), FakeBlockLookupPort()).execute(
        GetHourlyRateDataInput(pair_address="0xpair", start_time=START)
    )

    assert output.rate0 == []
    assert output.rate1 == []


@pytest.mark.asyncio()
async def test_invalid_address_raises():
    with pytest.raises(PairDataInputError):
        await _use_case(FakePairQueryPort(), FakeBlockLookupPort()).execute(
            GetHourlyRateDataInput(pair_address="pair", start_time=START)
        )
