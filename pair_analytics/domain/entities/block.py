from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Block:
    number: int
    timestamp: int
