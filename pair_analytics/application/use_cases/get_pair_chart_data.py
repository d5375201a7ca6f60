from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from pair_analytics.application.dto.pair_data import GetPairChartDataInput
from pair_analytics.application.ports.pair_query_port import PairQueryPort
from pair_analytics.domain.entities.pair_chart import PairDayData
from pair_analytics.domain.exceptions import FETCH_ERRORS
from pair_analytics.domain.services.chart_fill import fill_daily_series
from pair_analytics.domain.services.pair_address import normalize_pair_address
from pair_analytics.domain.services.timeframes import chart_window


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetPairChartDataUseCase:
    def __init__(
        self,
        *,
        pair_query_port: PairQueryPort,
        lookback_days: int = 365,
        page_size: int = 1000,
        now_provider: Callable[[], datetime] = _utc_now,
    ):
        self._pair_query_port = pair_query_port
        self._lookback_days = max(1, lookback_days)
        self._page_size = max(1, page_size)
        self._now_provider = now_provider

    async def execute(self, command: GetPairChartDataInput) -> list[PairDayData]:
        address = normalize_pair_address(command.pair_address)
        start_time, end_time = chart_window(self._now_provider(), lookback_days=self._lookback_days)

        try:
            rows = await self._fetch_all_pages(address)
        except FETCH_ERRORS:
            logger.exception("get_pair_chart_data: failed pair=%s", address)
            return []

        # Whole history; the lookback start applies only when nothing was fetched.
        if rows:
            start_time = min(row.date for row in rows)
        series = fill_daily_series(rows, start_time=start_time, end_time=end_time)
        logger.info(
            "get_pair_chart_data: built_series pair=%s fetched=%s days=%s filled=%s",
            address,
            len(rows),
            len(series),
            sum(1 for row in series if row.synthetic),
        )
        return series

    async def _fetch_all_pages(self, address: str) -> list[PairDayData]:
        rows: list[PairDayData] = []
        skip = 0
        while True:
            page = await self._pair_query_port.fetch_pair_day_datas(
                pair_address=address,
                skip=skip,
                page_size=self._page_size,
            )
            rows.extend(page)
            skip += self._page_size
            if len(page) < self._page_size:
                break
        return rows
