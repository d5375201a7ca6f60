from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from pair_analytics.infrastructure.clients.graphql_client import FetchPolicy, GraphQLClient


async def split_query(
    client: GraphQLClient,
    *,
    url: str,
    build_query: Callable[..., str],
    items: Sequence[Any],
    fixed_args: Sequence[Any] = (),
    chunk_size: int = 100,
    fetch_policy: FetchPolicy = "cache-first",
) -> dict:
    """Run an aliased query template over ``items`` in chunks and merge the keyed results."""
    chunk_size = max(1, chunk_size)
    merged: dict = {}
    for offset in range(0, len(items), chunk_size):
        chunk = list(items[offset : offset + chunk_size])
        data = await client.query(
            url=url,
            query=build_query(*fixed_args, chunk),
            fetch_policy=fetch_policy,
        )
        merged.update(data)
    return merged
