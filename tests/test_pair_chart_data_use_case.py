from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from pair_analytics.application.dto.pair_data import GetPairChartDataInput
from pair_analytics.application.use_cases.get_pair_chart_data import GetPairChartDataUseCase
from pair_analytics.domain.entities.pair_chart import PairDayData
from pair_analytics.domain.exceptions import DataSourceError, PairDataInputError
from pair_analytics.domain.services.chart_fill import ONE_DAY_SECONDS

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
TODAY = int(NOW.timestamp()) // ONE_DAY_SECONDS * ONE_DAY_SECONDS


class FakePairQueryPort:
    def __init__(self, pages: list[list[PairDayData]], *, fail_on_page: int | None = None):
        self.pages = pages
        self.fail_on_page = fail_on_page
        self.skips: list[int] = []

    async def fetch_pair_day_datas(self, *, pair_address, skip, page_size):
        index = len(self.skips)
        self.skips.append(skip)
        if self.fail_on_page == index:
            raise DataSourceError("subgraph down")
        return self.pages[index]


def _rows(first_day_offset: int, count: int) -> list[PairDayData]:
    return [
        PairDayData(
            date=TODAY - (first_day_offset - i) * ONE_DAY_SECONDS,
            daily_volume_usd=Decimal("1"),
            reserve_usd=Decimal(str(i)),
        )
        for i in range(count)
    ]


def _use_case(port: FakePairQueryPort, *, page_size: int = 1000) -> GetPairChartDataUseCase:
    return GetPairChartDataUseCase(
        pair_query_port=port,
        page_size=page_size,
        now_provider=lambda: NOW,
    )


@pytest.mark.asyncio()
async def test_paginates_until_short_page():
    port = FakePairQueryPort([_rows(10, 3), _rows(7, 3), _rows(4, 2)])

    series = await _use_case(port, page_size=3).execute(GetPairChartDataInput(pair_address="0xABC"))

    assert port.skips == [0, 3, 6]
    assert len(series) == 11
    assert [row.date for row in series] == sorted(row.date for row in series)


@pytest.mark.asyncio()
async def test_full_page_of_1000_requests_next_page():
    full_page = [
        PairDayData(date=TODAY - 2000 * ONE_DAY_SECONDS, daily_volume_usd=Decimal("0"), reserve_usd=Decimal("1"))
    ] * 1000
    port = FakePairQueryPort([full_page, []])

    await _use_case(port).execute(GetPairChartDataInput(pair_address="0xabc"))

    assert port.skips == [0, 1000]


@pytest.mark.asyncio()
async def test_series_is_sorted_when_pages_arrive_out_of_order():
    rows = _rows(4, 5)
    port = FakePairQueryPort([list(reversed(rows))])

    series = await _use_case(port).execute(GetPairChartDataInput(pair_address="0xabc"))

    assert [row.date for row in series] == [row.date for row in rows]


@pytest.mark.asyncio()
async def test_gaps_are_filled_up_to_today():
    port = FakePairQueryPort([_rows(3, 1)])

    series = await _use_case(port).execute(GetPairChartDataInput(pair_address="0xabc"))

    assert [row.date for row in series] == [TODAY - i * ONE_DAY_SECONDS for i in (3, 2, 1, 0)]
    assert [row.synthetic for row in series] == [False, True, True, True]


@pytest.mark.asyncio()
async def test_rows_older_than_lookback_are_kept():
    old = PairDayData(
        date=TODAY - 700 * ONE_DAY_SECONDS,
        daily_volume_usd=Decimal("3"),
        reserve_usd=Decimal("10"),
    )
    recent = PairDayData(
        date=TODAY - 10 * ONE_DAY_SECONDS,
        daily_volume_usd=Decimal("4"),
        reserve_usd=Decimal("20"),
    )
    port = FakePairQueryPort([[old, recent]])

    series = await _use_case(port).execute(GetPairChartDataInput(pair_address="0xabc"))

    assert series[0] == old
    assert len(series) == 701
    assert series[1].synthetic is True
    assert series[1].reserve_usd == Decimal("10")
    assert series[690] == recent
    assert series[-1].date == TODAY
    assert series[-1].reserve_usd == Decimal("20")


@pytest.mark.asyncio()
async def test_failure_returns_empty_list():
    port = FakePairQueryPort([_rows(10, 3)], fail_on_page=1)

    series = await _use_case(port, page_size=3).execute(GetPairChartDataInput(pair_address="0xabc"))

    assert series == []


@pytest.mark.asyncio()
async def test_invalid_address_raises():
    with pytest.raises(PairDataInputError):
        await _use_case(FakePairQueryPort([])).execute(GetPairChartDataInput(pair_address="abc"))
