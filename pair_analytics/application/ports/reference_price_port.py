from __future__ import annotations

from decimal import Decimal
from typing import Protocol


class ReferencePricePort(Protocol):
    async def fetch_eth_price(self) -> Decimal:
        ...
