from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pair_analytics.domain.entities.transactions import (
    Burn,
    Mint,
    PairTransactions,
    Swap,
    TransactionRef,
)
from pair_analytics.infrastructure.mappers.pair_mapper import to_decimal


def _map_transaction_ref(row: Mapping[str, Any]) -> TransactionRef:
    return TransactionRef(id=str(row["id"]), timestamp=int(row["timestamp"]))


def _pair_symbols(row: Mapping[str, Any]) -> tuple[str, str]:
    pair = row.get("pair") or {}
    token0 = pair.get("token0") or {}
    token1 = pair.get("token1") or {}
    return str(token0.get("symbol") or ""), str(token1.get("symbol") or "")


def map_row_to_mint(row: Mapping[str, Any]) -> Mint:
    token0_symbol, token1_symbol = _pair_symbols(row)
    return Mint(
        transaction=_map_transaction_ref(row["transaction"]),
        token0_symbol=token0_symbol,
        token1_symbol=token1_symbol,
        to=row.get("to"),
        liquidity=to_decimal(row.get("liquidity")),
        amount0=to_decimal(row.get("amount0")),
        amount1=to_decimal(row.get("amount1")),
        amount_usd=to_decimal(row.get("amountUSD")),
    )


def map_row_to_burn(row: Mapping[str, Any]) -> Burn:
    token0_symbol, token1_symbol = _pair_symbols(row)
    return Burn(
        transaction=_map_transaction_ref(row["transaction"]),
        token0_symbol=token0_symbol,
        token1_symbol=token1_symbol,
        sender=row.get("sender"),
        liquidity=to_decimal(row.get("liquidity")),
        amount0=to_decimal(row.get("amount0")),
        amount1=to_decimal(row.get("amount1")),
        amount_usd=to_decimal(row.get("amountUSD")),
    )


def map_row_to_swap(row: Mapping[str, Any]) -> Swap:
    token0_symbol, token1_symbol = _pair_symbols(row)
    return Swap(
        id=str(row["id"]),
        transaction=_map_transaction_ref(row["transaction"]),
        token0_symbol=token0_symbol,
        token1_symbol=token1_symbol,
        amount0_in=to_decimal(row.get("amount0In")),
        amount0_out=to_decimal(row.get("amount0Out")),
        amount1_in=to_decimal(row.get("amount1In")),
        amount1_out=to_decimal(row.get("amount1Out")),
        amount_usd=to_decimal(row.get("amountUSD")),
        to=row.get("to"),
    )


def map_payload_to_pair_transactions(data: Mapping[str, Any]) -> PairTransactions:
    return PairTransactions(
        mints=[map_row_to_mint(row) for row in data.get("mints") or []],
        burns=[map_row_to_burn(row) for row in data.get("burns") or []],
        swaps=[map_row_to_swap(row) for row in data.get("swaps") or []],
    )
