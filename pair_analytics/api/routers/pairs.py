from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from pair_analytics.api.deps import (
    get_all_pair_data_use_case,
    get_hourly_rate_data_use_case,
    get_pair_chart_data_use_case,
)
from pair_analytics.api.schemas.pairs import (
    CandleResponse,
    EnrichedPairResponse,
    HourlyRateResponse,
    PairDayDataResponse,
    TokenResponse,
)
from pair_analytics.application.dto.pair_data import GetHourlyRateDataInput, GetPairChartDataInput
from pair_analytics.application.use_cases.get_all_pair_data import GetAllPairDataUseCase
from pair_analytics.application.use_cases.get_hourly_rate_data import GetHourlyRateDataUseCase
from pair_analytics.application.use_cases.get_pair_chart_data import GetPairChartDataUseCase
from pair_analytics.domain.entities.pair import EnrichedPair, Token
from pair_analytics.domain.entities.pair_chart import Candle
from pair_analytics.domain.exceptions import PairDataInputError

router = APIRouter()


def _token_response(token: Token) -> TokenResponse:
    return TokenResponse(
        id=token.id,
        symbol=token.symbol,
        name=token.name,
        derived_eth=token.derived_eth,
        total_liquidity=token.total_liquidity,
    )


def _enriched_pair_response(row: EnrichedPair) -> EnrichedPairResponse:
    pair = row.pair
    return EnrichedPairResponse(
        id=pair.id,
        token0=_token_response(pair.token0),
        token1=_token_response(pair.token1),
        reserve0=pair.reserve0,
        reserve1=pair.reserve1,
        reserve_usd=pair.reserve_usd,
        reserve_eth=pair.reserve_eth,
        tracked_reserve_eth=pair.tracked_reserve_eth,
        total_supply=pair.total_supply,
        volume_usd=pair.volume_usd,
        untracked_volume_usd=pair.untracked_volume_usd,
        token0_price=pair.token0_price,
        token1_price=pair.token1_price,
        tx_count=pair.tx_count,
        created_at_timestamp=pair.created_at_timestamp,
        created_at_block_number=pair.created_at_block_number,
        one_day_volume_usd=row.one_day_volume_usd,
        one_week_volume_usd=row.one_week_volume_usd,
        volume_change_usd=row.volume_change_usd,
        one_day_volume_untracked=row.one_day_volume_untracked,
        volume_change_untracked=row.volume_change_untracked,
        tracked_reserve_usd=row.tracked_reserve_usd,
        liquidity_change_usd=row.liquidity_change_usd,
    )


def _candle_response(candle: Candle) -> CandleResponse:
    return CandleResponse(timestamp=candle.timestamp, open=candle.open, close=candle.close)


@router.get("/v1/pairs", response_model=dict[str, EnrichedPairResponse])
async def get_all_pair_data(
    use_case: GetAllPairDataUseCase = Depends(get_all_pair_data_use_case),
):
    pairs = await use_case.execute()
    return {pair_id: _enriched_pair_response(row) for pair_id, row in pairs.items()}


@router.get("/v1/pairs/{pair_address}/chart", response_model=list[PairDayDataResponse])
async def get_pair_chart_data(
    pair_address: str,
    use_case: GetPairChartDataUseCase = Depends(get_pair_chart_data_use_case),
):
    try:
        series = await use_case.execute(GetPairChartDataInput(pair_address=pair_address))
    except PairDataInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return [
        PairDayDataResponse(
            date=row.date,
            daily_volume_usd=row.daily_volume_usd,
            reserve_usd=row.reserve_usd,
            daily_volume_token0=row.daily_volume_token0,
            daily_volume_token1=row.daily_volume_token1,
            synthetic=row.synthetic,
        )
        for row in series
    ]


@router.get("/v1/pairs/{pair_address}/hourly-rates", response_model=HourlyRateResponse)
async def get_hourly_rate_data(
    pair_address: str,
    start_time: int = Query(alias="startTime"),
    latest_block: int | None = Query(default=None, alias="latestBlock"),
    use_case: GetHourlyRateDataUseCase = Depends(get_hourly_rate_data_use_case),
):
    try:
        output = await use_case.execute(
            GetHourlyRateDataInput(
                pair_address=pair_address,
                start_time=start_time,
                latest_block=latest_block,
            )
        )
    except PairDataInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return HourlyRateResponse(
        rate0=[_candle_response(candle) for candle in output.rate0],
        rate1=[_candle_response(candle) for candle in output.rate1],
    )
