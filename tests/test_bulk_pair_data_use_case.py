from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from pair_analytics.application.dto.pair_data import GetBulkPairDataInput
from pair_analytics.application.use_cases.get_all_pair_data import GetAllPairDataUseCase
from pair_analytics.application.use_cases.get_bulk_pair_data import GetBulkPairDataUseCase
from pair_analytics.domain.entities.block import Block
from pair_analytics.domain.entities.pair import Pair, PairSnapshot, Token
from pair_analytics.domain.exceptions import DataSourceError
from pair_analytics.domain.services.timeframes import timestamps_for_changes

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
B1, B2, B_WEEK = 300, 200, 100


def _pair(pair_id: str, *, volume: str = "1000") -> Pair:
    return Pair(
        id=pair_id,
        token0=Token(id=f"{pair_id}-t0", symbol="AAA", name="Token A"),
        token1=Token(id=f"{pair_id}-t1", symbol="BBB", name="Token B"),
        reserve0=Decimal("1"),
        reserve1=Decimal("1"),
        reserve_usd=Decimal("200"),
        reserve_eth=Decimal("1"),
        tracked_reserve_eth=Decimal("2"),
        total_supply=Decimal("1"),
        volume_usd=Decimal(volume),
        untracked_volume_usd=Decimal(volume),
        token0_price=Decimal("1"),
        token1_price=Decimal("1"),
        tx_count=1,
        created_at_timestamp=0,
        created_at_block_number=1,
    )


def _snapshot(pair_id: str, *, volume: str, reserve: str = "100") -> PairSnapshot:
    return PairSnapshot(
        id=pair_id,
        reserve_usd=Decimal(reserve),
        tracked_reserve_eth=Decimal("1"),
        volume_usd=Decimal(volume),
        untracked_volume_usd=Decimal(volume),
    )


class FakeBlockLookupPort:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.calls: list[list[int]] = []

    async def get_blocks_from_timestamps(self, timestamps, *, chunk_size=500):
        self.calls.append(list(timestamps))
        if self.fail:
            raise DataSourceError("blocks subgraph down")
        t1, t2, t_week = timestamps_for_changes(NOW)
        numbers = {t1: B1, t2: B2, t_week: B_WEEK}
        return [Block(number=numbers[ts], timestamp=ts) for ts in timestamps if ts in numbers]


class FakePairQueryPort:
    def __init__(self):
        self.pairs = [_pair("0xa", volume="1000"), _pair("0xb", volume="500")]
        self.history = {
            B1: {"0xa": _snapshot("0xa", volume="900"), "0xb": _snapshot("0xb", volume="450")},
            B2: {"0xa": _snapshot("0xa", volume="850"), "0xb": _snapshot("0xb", volume="400")},
            B_WEEK: {"0xa": _snapshot("0xa", volume="500"), "0xb": _snapshot("0xb", volume="100")},
        }
        self.batch_omissions: dict[int, set[str]] = {}
        self.point_calls: list[tuple[str, int]] = []
        self.fail_bulk = False

    async def fetch_top_pair_ids(self):
        return [pair.id for pair in self.pairs]

    async def fetch_pairs(self, *, pair_ids):
        if self.fail_bulk:
            raise DataSourceError("boom")
        return [pair for pair in self.pairs if pair.id in pair_ids]

    async def fetch_pair_snapshots_at_block(self, *, pair_ids, block_number):
        omitted = self.batch_omissions.get(block_number, set())
        return {
            pair_id: snapshot
            for pair_id, snapshot in self.history[block_number].items()
            if pair_id in pair_ids and pair_id not in omitted
        }

    async def fetch_pair_snapshot_at_block(self, *, pair_id, block_number):
        self.point_calls.append((pair_id, block_number))
        return self.history[block_number].get(pair_id)


class FakeReferencePricePort:
    def __init__(self, price: str = "2000", *, fail: bool = False):
        self.price = Decimal(price)
        self.fail = fail

    async def fetch_eth_price(self):
        if self.fail:
            raise DataSourceError("no bundle")
        return self.price


def _use_case(port: FakePairQueryPort, blocks: FakeBlockLookupPort | None = None) -> GetBulkPairDataUseCase:
    return GetBulkPairDataUseCase(
        pair_query_port=port,
        block_lookup_port=blocks or FakeBlockLookupPort(),
        now_provider=lambda: NOW,
    )


@pytest.mark.asyncio()
async def test_bulk_pair_data_enriches_every_pair():
    port = FakePairQueryPort()
    blocks = FakeBlockLookupPort()

    result = await _use_case(port, blocks).execute(
        GetBulkPairDataInput(pair_ids=["0xA", "0xb"], eth_price=Decimal("2000"))
    )

    assert result is not None
    by_id = {row.pair.id: row for row in result}
    assert by_id["0xa"].one_day_volume_usd == Decimal("100")
    assert by_id["0xa"].volume_change_usd == Decimal("100")
    assert by_id["0xa"].one_week_volume_usd == Decimal("500")
    assert by_id["0xa"].tracked_reserve_usd == Decimal("4000")
    assert by_id["0xb"].one_day_volume_usd == Decimal("50")
    assert port.point_calls == []
    assert blocks.calls == [list(timestamps_for_changes(NOW))]


@pytest.mark.asyncio()
async def test_missing_pair_in_one_day_batch_triggers_single_fallback():
    port = FakePairQueryPort()
    port.batch_omissions = {B1: {"0xb"}}

    result = await _use_case(port).execute(
        GetBulkPairDataInput(pair_ids=["0xa", "0xb"], eth_price=Decimal("1"))
    )

    assert result is not None
    assert port.point_calls == [("0xb", B1)]
    by_id = {row.pair.id: row for row in result}
    assert by_id["0xb"].one_day_volume_usd == Decimal("50")


@pytest.mark.asyncio()
async def test_pair_created_after_one_day_block_uses_lifetime_volume():
    port = FakePairQueryPort()
    del port.history[B1]["0xb"]
    port.batch_omissions = {B1: {"0xb"}}

    result = await _use_case(port).execute(
        GetBulkPairDataInput(pair_ids=["0xa", "0xb"], eth_price=Decimal("1"))
    )

    assert result is not None
    by_id = {row.pair.id: row for row in result}
    assert by_id["0xb"].one_day_volume_usd == Decimal("500")


@pytest.mark.asyncio()
async def test_failure_returns_none_without_partial_results():
    port = FakePairQueryPort()
    port.fail_bulk = True

    result = await _use_case(port).execute(
        GetBulkPairDataInput(pair_ids=["0xa"], eth_price=Decimal("1"))
    )

    assert result is None


class StalledFallbackPort(FakePairQueryPort):
    def __init__(self):
        super().__init__()
        self.batch_omissions = {B1: {"0xa", "0xb"}}
        self.cancelled: list[str] = []

    async def fetch_pair_snapshot_at_block(self, *, pair_id, block_number):
        if pair_id == "0xa":
            raise DataSourceError("point lookup failed")
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled.append(pair_id)
            raise


@pytest.mark.asyncio()
async def test_failed_fallback_cancels_pending_lookups():
    port = StalledFallbackPort()

    result = await _use_case(port).execute(
        GetBulkPairDataInput(pair_ids=["0xa", "0xb"], eth_price=Decimal("1"))
    )

    assert result is None
    assert port.cancelled == ["0xb"]


@pytest.mark.asyncio()
async def test_block_lookup_failure_returns_none():
    result = await _use_case(FakePairQueryPort(), FakeBlockLookupPort(fail=True)).execute(
        GetBulkPairDataInput(pair_ids=["0xa"], eth_price=Decimal("1"))
    )

    assert result is None


@pytest.mark.asyncio()
async def test_all_pair_data_returns_map_keyed_by_pair_id():
    port = FakePairQueryPort()
    use_case = GetAllPairDataUseCase(
        pair_query_port=port,
        reference_price_port=FakeReferencePricePort("1500"),
        bulk_pair_data_use_case=_use_case(port),
    )

    result = await use_case.execute()

    assert set(result) == {"0xa", "0xb"}
    assert result["0xa"].tracked_reserve_usd == Decimal("3000")


@pytest.mark.asyncio()
async def test_all_pair_data_returns_empty_map_on_failure():
    port = FakePairQueryPort()
    price_failure = GetAllPairDataUseCase(
        pair_query_port=port,
        reference_price_port=FakeReferencePricePort(fail=True),
        bulk_pair_data_use_case=_use_case(port),
    )
    assert await price_failure.execute() == {}

    port.fail_bulk = True
    bulk_failure = GetAllPairDataUseCase(
        pair_query_port=port,
        reference_price_port=FakeReferencePricePort(),
        bulk_pair_data_use_case=_use_case(port),
    )
    assert await bulk_failure.execute() == {}
