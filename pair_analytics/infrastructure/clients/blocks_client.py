from __future__ import annotations

import logging

from pair_analytics.application.ports.block_lookup_port import BlockLookupPort
from pair_analytics.domain.entities.block import Block
from pair_analytics.infrastructure.clients import queries
from pair_analytics.infrastructure.clients.graphql_client import GraphQLClient
from pair_analytics.infrastructure.clients.split_query import split_query


logger = logging.getLogger(__name__)


class BlocksSubgraphClient(BlockLookupPort):
    def __init__(self, client: GraphQLClient, *, subgraph_id: str):
        self._client = client
        self._subgraph_id = subgraph_id

    async def get_blocks_from_timestamps(
        self,
        timestamps: list[int],
        *,
        chunk_size: int = 500,
    ) -> list[Block]:
        """Resolve timestamps to the latest block mined within ten minutes after each one.

        The returned ``Block.timestamp`` is the requested timestamp, so callers
        can map results back onto their inputs. Timestamps without a block are
        dropped.
        """
        unique = sorted({int(timestamp) for timestamp in timestamps})
        if not unique:
            return []

        result = await split_query(
            self._client,
            url=self._client.build_url(self._subgraph_id),
            build_query=queries.blocks_query,
            items=unique,
            chunk_size=chunk_size,
        )

        blocks: list[Block] = []
        for key, rows in result.items():
            timestamp = key.split("t", 1)[-1]
            if not timestamp.isdigit() or not rows:
                continue
            blocks.append(Block(number=int(rows[0]["number"]), timestamp=int(timestamp)))
        blocks.sort(key=lambda block: block.timestamp)

        logger.info(
            "blocks_client: resolved_blocks requested=%s resolved=%s",
            len(unique),
            len(blocks),
        )
        return blocks
