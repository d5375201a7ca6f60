from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class TransactionRef:
    id: str
    timestamp: int


@dataclass(frozen=True)
class Mint:
    transaction: TransactionRef
    token0_symbol: str
    token1_symbol: str
    to: str | None
    liquidity: Decimal
    amount0: Decimal
    amount1: Decimal
    amount_usd: Decimal


@dataclass(frozen=True)
class Burn:
    transaction: TransactionRef
    token0_symbol: str
    token1_symbol: str
    sender: str | None
    liquidity: Decimal
    amount0: Decimal
    amount1: Decimal
    amount_usd: Decimal


@dataclass(frozen=True)
class Swap:
    id: str
    transaction: TransactionRef
    token0_symbol: str
    token1_symbol: str
    amount0_in: Decimal
    amount0_out: Decimal
    amount1_in: Decimal
    amount1_out: Decimal
    amount_usd: Decimal
    to: str | None


@dataclass(frozen=True)
class PairTransactions:
    mints: list[Mint] = field(default_factory=list)
    burns: list[Burn] = field(default_factory=list)
    swaps: list[Swap] = field(default_factory=list)
