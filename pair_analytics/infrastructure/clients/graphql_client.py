from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

import httpx

from pair_analytics.domain.exceptions import DataSourceError


logger = logging.getLogger(__name__)

FetchPolicy = Literal["cache-first", "no-cache"]


class SubgraphError(DataSourceError, RuntimeError):
    pass


class SubgraphResolutionError(SubgraphError):
    pass


@dataclass(frozen=True)
class GraphQLClientSettings:
    graph_gateway_base: str
    graph_api_key: str
    timeout_seconds: float
    max_retries: int
    min_interval_ms: int
    cache_ttl_seconds: float


class GraphQLClient:
    """Async GraphQL transport with a per-query read policy.

    ``cache-first`` answers from the in-memory cache when a live entry exists
    and stores fresh responses; ``no-cache`` always goes to the network and
    never stores.
    """

    def __init__(
        self,
        settings: GraphQLClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._settings = settings
        self._transport = transport
        self._clock = clock
        self._rate_lock = asyncio.Lock()
        self._last_request_at = 0.0
        self._cache: dict[str, tuple[float, dict]] = {}

    async def query(
        self,
        *,
        url: str,
        query: str,
        variables: dict | None = None,
        fetch_policy: FetchPolicy = "cache-first",
    ) -> dict:
        variables = variables or {}
        cache_key: str | None = None
        if fetch_policy == "cache-first":
            cache_key = self._cache_key(url=url, query=query, variables=variables)
            cached = self._cache_get(cache_key)
            if cached is not None:
                return cached

        payload = await self._post_graphql(url=url, query=query, variables=variables)
        data = payload.get("data")
        if not isinstance(data, dict):
            raise SubgraphError("GraphQL response has no data.")

        if cache_key is not None:
            self._cache_set(cache_key, data)
        return data

    def build_url(self, subgraph_id: str) -> str:
        subgraph_id = (subgraph_id or "").strip()
        if not subgraph_id:
            raise SubgraphResolutionError("Subgraph id is not configured.")
        if subgraph_id.startswith("http://") or subgraph_id.startswith("https://"):
            return subgraph_id.rstrip("/")
        base = self._settings.graph_gateway_base.rstrip("/")
        api_key = self._settings.graph_api_key.strip()
        if api_key:
            return f"{base}/{api_key}/subgraphs/id/{subgraph_id}"
        return f"{base}/subgraphs/id/{subgraph_id}"

    def clear_cache(self) -> None:
        self._cache.clear()

    async def _post_graphql(self, *, url: str, query: str, variables: dict) -> dict:
        attempts = max(1, self._settings.max_retries)
        delay = 0.25
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            await self._respect_rate_limit()
            try:
                async with httpx.AsyncClient(
                    timeout=self._settings.timeout_seconds,
                    transport=self._transport,
                ) as client:
                    response = await client.post(
                        url,
                        json={"query": query, "variables": variables},
                    )
                    response.raise_for_status()
                    payload = response.json()

                if not isinstance(payload, dict):
                    raise SubgraphError("GraphQL response is not an object.")
                errors = payload.get("errors") or []
                if errors:
                    message = " | ".join(
                        str(err.get("message", err)) if isinstance(err, dict) else str(err)
                        for err in errors
                    )
                    raise SubgraphError(message)

                return payload
            except (httpx.HTTPError, SubgraphError, ValueError) as exc:
                last_exc = exc
                if attempt == attempts:
                    break
                logger.warning(
                    "graphql_client: retry attempt=%s/%s url=%s error=%s",
                    attempt,
                    attempts,
                    url,
                    exc,
                )
                await asyncio.sleep(delay)
                delay *= 2

        raise SubgraphError(f"GraphQL request failed after retries: {last_exc}") from last_exc

    async def _respect_rate_limit(self) -> None:
        min_interval = max(0, self._settings.min_interval_ms) / 1000.0
        if min_interval <= 0:
            return

        async with self._rate_lock:
            now = time.monotonic()
            elapsed = now - self._last_request_at
            if elapsed < min_interval:
                await asyncio.sleep(min_interval - elapsed)
            self._last_request_at = time.monotonic()

    @staticmethod
    def _cache_key(*, url: str, query: str, variables: dict) -> str:
        return json.dumps([url, query, variables], sort_keys=True, default=str)

    def _cache_get(self, key: str) -> dict | None:
        if self._settings.cache_ttl_seconds <= 0:
            return None
        cached = self._cache.get(key)
        if cached is None:
            return None
        expires_at, value = cached
        if expires_at <= self._clock():
            self._cache.pop(key, None)
            return None
        return value

    def _cache_set(self, key: str, value: dict) -> None:
        if self._settings.cache_ttl_seconds <= 0:
            return
        now = self._clock()
        expired = [cached_key for cached_key, (expires_at, _) in self._cache.items() if expires_at <= now]
        for cached_key in expired:
            del self._cache[cached_key]
        self._cache[key] = (now + self._settings.cache_ttl_seconds, value)
