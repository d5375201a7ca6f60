from __future__ import annotations

from functools import lru_cache

from pair_analytics.application.use_cases.get_all_pair_data import GetAllPairDataUseCase
from pair_analytics.application.use_cases.get_bulk_pair_data import GetBulkPairDataUseCase
from pair_analytics.application.use_cases.get_hourly_rate_data import GetHourlyRateDataUseCase
from pair_analytics.application.use_cases.get_pair_chart_data import GetPairChartDataUseCase
from pair_analytics.application.use_cases.get_pair_transactions import (
    GetAllPairTransactionsUseCase,
    GetPairTransactionsUseCase,
)
from pair_analytics.infrastructure.clients.blocks_client import BlocksSubgraphClient
from pair_analytics.infrastructure.clients.exchange_subgraph_client import ExchangeSubgraphClient
from pair_analytics.infrastructure.clients.graphql_client import (
    GraphQLClient,
    GraphQLClientSettings,
)
from pair_analytics.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_graphql_client() -> GraphQLClient:
    settings = get_settings()
    return GraphQLClient(
        GraphQLClientSettings(
            graph_gateway_base=settings.graph_gateway_base,
            graph_api_key=settings.graph_api_key,
            timeout_seconds=settings.graph_request_timeout_seconds,
            max_retries=settings.graph_max_retries,
            min_interval_ms=settings.graph_min_interval_ms,
            cache_ttl_seconds=settings.graph_cache_ttl_seconds,
        )
    )


@lru_cache(maxsize=1)
def _get_exchange_subgraph_client() -> ExchangeSubgraphClient:
    settings = get_settings()
    return ExchangeSubgraphClient(
        _get_graphql_client(),
        subgraph_id=settings.graph_exchange_subgraph_id,
    )


@lru_cache(maxsize=1)
def _get_blocks_subgraph_client() -> BlocksSubgraphClient:
    settings = get_settings()
    return BlocksSubgraphClient(
        _get_graphql_client(),
        subgraph_id=settings.graph_blocks_subgraph_id,
    )


def get_bulk_pair_data_use_case() -> GetBulkPairDataUseCase:
    return GetBulkPairDataUseCase(
        pair_query_port=_get_exchange_subgraph_client(),
        block_lookup_port=_get_blocks_subgraph_client(),
    )


def get_all_pair_data_use_case() -> GetAllPairDataUseCase:
    exchange = _get_exchange_subgraph_client()
    return GetAllPairDataUseCase(
        pair_query_port=exchange,
        reference_price_port=exchange,
        bulk_pair_data_use_case=get_bulk_pair_data_use_case(),
    )


def get_pair_transactions_use_case() -> GetPairTransactionsUseCase:
    return GetPairTransactionsUseCase(pair_query_port=_get_exchange_subgraph_client())


def get_all_pair_transactions_use_case() -> GetAllPairTransactionsUseCase:
    return GetAllPairTransactionsUseCase(pair_query_port=_get_exchange_subgraph_client())


def get_pair_chart_data_use_case() -> GetPairChartDataUseCase:
    settings = get_settings()
    return GetPairChartDataUseCase(
        pair_query_port=_get_exchange_subgraph_client(),
        lookback_days=settings.chart_lookback_days,
        page_size=settings.chart_page_size,
    )


def get_hourly_rate_data_use_case() -> GetHourlyRateDataUseCase:
    settings = get_settings()
    return GetHourlyRateDataUseCase(
        pair_query_port=_get_exchange_subgraph_client(),
        block_lookup_port=_get_blocks_subgraph_client(),
        chunk_size=settings.hourly_blocks_chunk_size,
    )
