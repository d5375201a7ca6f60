from __future__ import annotations

from typing import Protocol

from pair_analytics.domain.entities.block import Block


class BlockLookupPort(Protocol):
    async def get_blocks_from_timestamps(
        self,
        timestamps: list[int],
        *,
        chunk_size: int = 500,
    ) -> list[Block]:
        ...
