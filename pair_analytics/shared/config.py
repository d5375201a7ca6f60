from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    graph_gateway_base: str
    graph_api_key: str
    graph_exchange_subgraph_id: str
    graph_blocks_subgraph_id: str
    graph_request_timeout_seconds: float
    graph_max_retries: int
    graph_min_interval_ms: int
    graph_cache_ttl_seconds: float
    chart_lookback_days: int
    chart_page_size: int
    hourly_blocks_chunk_size: int
    log_level: str


def get_settings() -> Settings:
    return Settings(
        graph_gateway_base=_env("GRAPH_GATEWAY_BASE", "https://gateway.thegraph.com/api"),
        graph_api_key=_env("GRAPH_API_KEY", ""),
        graph_exchange_subgraph_id=_env(
            "GRAPH_EXCHANGE_SUBGRAPH_ID",
            "https://api.thegraph.com/subgraphs/name/sushiswap/exchange",
        ),
        graph_blocks_subgraph_id=_env(
            "GRAPH_BLOCKS_SUBGRAPH_ID",
            "https://api.thegraph.com/subgraphs/name/blocklytics/ethereum-blocks",
        ),
        graph_request_timeout_seconds=float(_env("GRAPH_REQUEST_TIMEOUT_SECONDS", "10")),
        graph_max_retries=int(_env("GRAPH_MAX_RETRIES", "3")),
        graph_min_interval_ms=int(_env("GRAPH_MIN_INTERVAL_MS", "0")),
        graph_cache_ttl_seconds=float(_env("GRAPH_CACHE_TTL_SECONDS", "300")),
        chart_lookback_days=int(_env("CHART_LOOKBACK_DAYS", "365")),
        chart_page_size=int(_env("CHART_PAGE_SIZE", "1000")),
        hourly_blocks_chunk_size=int(_env("HOURLY_BLOCKS_CHUNK_SIZE", "100")),
        log_level=_env("LOG_LEVEL", "INFO"),
    )
