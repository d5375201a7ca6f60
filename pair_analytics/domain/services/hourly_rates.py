from __future__ import annotations

from collections.abc import Sequence

from pair_analytics.domain.entities.pair_chart import Candle, HourlyRateSample

ONE_HOUR_SECONDS = 60 * 60


def hourly_timestamps(*, start_time: int, now: int) -> list[int]:
    timestamps: list[int] = []
    current = start_time
    while current <= now - ONE_HOUR_SECONDS:
        timestamps.append(current)
        current += ONE_HOUR_SECONDS
    return timestamps


def build_hourly_candles(samples: Sequence[HourlyRateSample]) -> tuple[list[Candle], list[Candle]]:
    ordered = sorted(samples, key=lambda sample: sample.timestamp)
    rate0: list[Candle] = []
    rate1: list[Candle] = []
    for current, following in zip(ordered, ordered[1:]):
        rate0.append(Candle(timestamp=current.timestamp, open=current.rate0, close=following.rate0))
        rate1.append(Candle(timestamp=current.timestamp, open=current.rate1, close=following.rate1))
    return rate0, rate1
