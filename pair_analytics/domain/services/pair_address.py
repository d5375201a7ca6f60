from __future__ import annotations

from pair_analytics.domain.exceptions import PairDataInputError


def normalize_pair_address(value: str) -> str:
    address = (value or "").strip().lower()
    if not address.startswith("0x"):
        raise PairDataInputError("pair_address must start with 0x.")
    return address
