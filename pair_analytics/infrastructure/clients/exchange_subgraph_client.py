from __future__ import annotations

import logging
from decimal import Decimal

from pair_analytics.application.ports.pair_query_port import PairQueryPort
from pair_analytics.application.ports.reference_price_port import ReferencePricePort
from pair_analytics.domain.entities.block import Block
from pair_analytics.domain.entities.pair import Pair, PairSnapshot
from pair_analytics.domain.entities.pair_chart import HourlyRateSample, PairDayData
from pair_analytics.domain.entities.transactions import PairTransactions
from pair_analytics.infrastructure.clients import queries
from pair_analytics.infrastructure.clients.graphql_client import GraphQLClient, SubgraphError
from pair_analytics.infrastructure.clients.split_query import split_query
from pair_analytics.infrastructure.mappers.pair_mapper import (
    map_row_to_hourly_rate_sample,
    map_row_to_pair,
    map_row_to_pair_day_data,
    map_row_to_pair_snapshot,
)
from pair_analytics.infrastructure.mappers.transactions_mapper import (
    map_payload_to_pair_transactions,
)


logger = logging.getLogger(__name__)


class ExchangeSubgraphClient(PairQueryPort, ReferencePricePort):
    def __init__(self, client: GraphQLClient, *, subgraph_id: str):
        self._client = client
        self._subgraph_id = subgraph_id

    @property
    def url(self) -> str:
        return self._client.build_url(self._subgraph_id)

    async def fetch_eth_price(self) -> Decimal:
        data = await self._client.query(url=self.url, query=queries.ETH_PRICE, fetch_policy="no-cache")
        bundle = data.get("bundle")
        if not bundle or bundle.get("ethPrice") is None:
            raise SubgraphError("ETH price not found in subgraph.")
        return Decimal(str(bundle["ethPrice"]))

    async def fetch_top_pair_ids(self) -> list[str]:
        data = await self._client.query(url=self.url, query=queries.PAIRS_CURRENT)
        return [str(row["id"]).lower() for row in data.get("pairs") or []]

    async def fetch_pairs(self, *, pair_ids: list[str]) -> list[Pair]:
        if not pair_ids:
            return []
        data = await self._client.query(
            url=self.url,
            query=queries.PAIRS_BULK,
            variables={"allPairs": pair_ids},
        )
        return [map_row_to_pair(row) for row in data.get("pairs") or []]

    async def fetch_pair_snapshots_at_block(
        self,
        *,
        pair_ids: list[str],
        block_number: int,
    ) -> dict[str, PairSnapshot]:
        if not pair_ids:
            return {}
        data = await self._client.query(
            url=self.url,
            query=queries.PAIRS_HISTORICAL_BULK,
            variables={"allPairs": pair_ids, "block": int(block_number)},
        )
        snapshots = [map_row_to_pair_snapshot(row) for row in data.get("pairs") or []]
        return {snapshot.id: snapshot for snapshot in snapshots}

    async def fetch_pair_snapshot_at_block(
        self,
        *,
        pair_id: str,
        block_number: int,
    ) -> PairSnapshot | None:
        data = await self._client.query(
            url=self.url,
            query=queries.PAIR_DATA,
            variables={"pairAddress": pair_id.lower(), "block": int(block_number)},
        )
        rows = data.get("pairs") or []
        if not rows:
            return None
        return map_row_to_pair_snapshot(rows[0])

    async def fetch_pair_day_datas(
        self,
        *,
        pair_address: str,
        skip: int,
        page_size: int,
    ) -> list[PairDayData]:
        data = await self._client.query(
            url=self.url,
            query=queries.PAIR_CHART,
            variables={"pairAddress": pair_address.lower(), "skip": int(skip), "first": int(page_size)},
        )
        return [map_row_to_pair_day_data(row) for row in data.get("pairDayDatas") or []]

    async def fetch_transactions(self, *, pair_ids: list[str] | None) -> PairTransactions:
        if pair_ids is None:
            data = await self._client.query(
                url=self.url,
                query=queries.ALL_TRANSACTIONS,
                fetch_policy="no-cache",
            )
        else:
            data = await self._client.query(
                url=self.url,
                query=queries.FILTERED_TRANSACTIONS,
                variables={"allPairs": [pair_id.lower() for pair_id in pair_ids]},
                fetch_policy="no-cache",
            )
        return map_payload_to_pair_transactions(data)

    async def fetch_hourly_rates(
        self,
        *,
        pair_address: str,
        blocks: list[Block],
        chunk_size: int,
    ) -> list[HourlyRateSample]:
        if not blocks:
            return []
        result = await split_query(
            self._client,
            url=self.url,
            build_query=queries.hourly_pair_rates_query,
            items=blocks,
            fixed_args=(pair_address.lower(),),
            chunk_size=chunk_size,
        )

        samples: list[HourlyRateSample] = []
        for key, row in result.items():
            timestamp = key.split("t", 1)[-1]
            if not timestamp.isdigit() or not row:
                continue
            samples.append(map_row_to_hourly_rate_sample(int(timestamp), row))
        samples.sort(key=lambda sample: sample.timestamp)

        logger.info(
            "exchange_subgraph_client: fetched_hourly_rates pair=%s blocks=%s samples=%s",
            pair_address,
            len(blocks),
            len(samples),
        )
        return samples
