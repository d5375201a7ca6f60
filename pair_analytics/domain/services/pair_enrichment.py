from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from pair_analytics.domain.entities.pair import EnrichedPair, Pair, PairSnapshot, Token
from pair_analytics.domain.services.percent_change import (
    get_percent_change,
    get_two_day_percent_change,
)

WETH_ADDRESS = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"


def _display_token(token: Token) -> Token:
    if token.id.lower() == WETH_ADDRESS:
        return replace(token, name="Ether (Wrapped)", symbol="ETH")
    return token


def enrich_pair(
    pair: Pair,
    *,
    one_day: PairSnapshot | None,
    two_day: PairSnapshot | None,
    one_week: PairSnapshot | None,
    eth_price: Decimal,
) -> EnrichedPair:
    one_day_volume_usd, volume_change_usd = get_two_day_percent_change(
        pair.volume_usd,
        one_day.volume_usd if one_day else None,
        two_day.volume_usd if two_day else None,
    )
    one_day_volume_untracked, volume_change_untracked = get_two_day_percent_change(
        pair.untracked_volume_usd,
        one_day.untracked_volume_usd if one_day else None,
        two_day.untracked_volume_usd if two_day else None,
    )

    # no snapshot means the pair did not exist yet at that block
    if one_day is None:
        one_day_volume_usd = pair.volume_usd
    if one_week is None:
        one_week_volume_usd = pair.volume_usd
    else:
        one_week_volume_usd = pair.volume_usd - one_week.volume_usd

    return EnrichedPair(
        pair=replace(pair, token0=_display_token(pair.token0), token1=_display_token(pair.token1)),
        one_day_volume_usd=one_day_volume_usd,
        one_week_volume_usd=one_week_volume_usd,
        volume_change_usd=volume_change_usd,
        one_day_volume_untracked=one_day_volume_untracked,
        volume_change_untracked=volume_change_untracked,
        tracked_reserve_usd=pair.tracked_reserve_eth * eth_price,
        liquidity_change_usd=get_percent_change(
            pair.reserve_usd,
            one_day.reserve_usd if one_day else None,
        ),
    )
