from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from pair_analytics.domain.entities.pair_chart import PairDayData

ONE_DAY_SECONDS = 24 * 60 * 60


def fill_daily_series(
    snapshots: Iterable[PairDayData],
    *,
    start_time: int,
    end_time: int,
) -> list[PairDayData]:
    """Pad daily snapshots into one entry per UTC day within [start_time, end_time).

    Missing days get zero volume and carry forward the last real reserve.
    Snapshots older than the window only serve as the carry-forward anchor,
    and days before the first anchor are left out.
    """
    by_day: dict[int, PairDayData] = {}
    for row in snapshots:
        by_day[row.date // ONE_DAY_SECONDS] = row
    if not by_day:
        return []

    start_day = start_time // ONE_DAY_SECONDS
    first_day = min(by_day)
    anchor: Decimal | None = None
    for day in sorted(by_day):
        if day >= start_day:
            break
        anchor = by_day[day].reserve_usd

    result: list[PairDayData] = []
    day = start_day if anchor is not None else max(start_day, first_day)
    while day * ONE_DAY_SECONDS < end_time:
        row = by_day.get(day)
        if row is not None:
            anchor = row.reserve_usd
            result.append(row)
        elif anchor is not None:
            result.append(
                PairDayData(
                    date=day * ONE_DAY_SECONDS,
                    daily_volume_usd=Decimal("0"),
                    reserve_usd=anchor,
                    synthetic=True,
                )
            )
        day += 1

    return sorted(result, key=lambda row: row.date)
