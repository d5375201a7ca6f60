from __future__ import annotations

from collections.abc import Sequence

from pair_analytics.domain.entities.block import Block


PAIR_FIELDS = """
fragment PairFields on Pair {
  id
  txCount
  token0 {
    id
    symbol
    name
    totalLiquidity
    derivedETH
  }
  token1 {
    id
    symbol
    name
    totalLiquidity
    derivedETH
  }
  reserve0
  reserve1
  reserveUSD
  totalSupply
  trackedReserveETH
  reserveETH
  volumeUSD
  untrackedVolumeUSD
  token0Price
  token1Price
  createdAtTimestamp
  createdAtBlockNumber
}
"""

ETH_PRICE = """
query EthPrice {
  bundle(id: "1") {
    ethPrice
  }
}
"""

PAIRS_CURRENT = """
query PairsCurrent {
  pairs(first: 200, orderBy: reserveUSD, orderDirection: desc) {
    id
  }
}
"""

PAIRS_BULK = (
    PAIR_FIELDS
    + """
query PairsBulk($allPairs: [Bytes]!) {
  pairs(first: 500, where: { id_in: $allPairs }, orderBy: trackedReserveETH, orderDirection: desc) {
    ...PairFields
  }
}
"""
)

PAIRS_HISTORICAL_BULK = """
query PairsHistoricalBulk($allPairs: [Bytes]!, $block: Int!) {
  pairs(
    first: 200,
    where: { id_in: $allPairs },
    block: { number: $block },
    orderBy: trackedReserveETH,
    orderDirection: desc
  ) {
    id
    reserveUSD
    trackedReserveETH
    volumeUSD
    untrackedVolumeUSD
  }
}
"""

PAIR_DATA = (
    PAIR_FIELDS
    + """
query PairData($pairAddress: Bytes!, $block: Int!) {
  pairs(block: { number: $block }, where: { id: $pairAddress }) {
    ...PairFields
  }
}
"""
)

PAIR_CHART = """
query PairDayDatas($pairAddress: Bytes!, $skip: Int!, $first: Int!) {
  pairDayDatas(
    first: $first,
    skip: $skip,
    orderBy: date,
    orderDirection: asc,
    where: { pairAddress: $pairAddress }
  ) {
    id
    date
    dailyVolumeToken0
    dailyVolumeToken1
    dailyVolumeUSD
    reserveUSD
  }
}
"""

_TRANSACTION_FIELDS = """
  mints(first: %(mints)s, %(where)s orderBy: timestamp, orderDirection: desc) {
    transaction {
      id
      timestamp
    }
    pair {
      token0 {
        id
        symbol
      }
      token1 {
        id
        symbol
      }
    }
    to
    liquidity
    amount0
    amount1
    amountUSD
  }
  burns(first: %(burns)s, %(where)s orderBy: timestamp, orderDirection: desc) {
    transaction {
      id
      timestamp
    }
    pair {
      token0 {
        id
        symbol
      }
      token1 {
        id
        symbol
      }
    }
    sender
    liquidity
    amount0
    amount1
    amountUSD
  }
  swaps(first: %(swaps)s, %(where)s orderBy: timestamp, orderDirection: desc) {
    transaction {
      id
      timestamp
    }
    id
    pair {
      token0 {
        id
        symbol
      }
      token1 {
        id
        symbol
      }
    }
    amount0In
    amount0Out
    amount1In
    amount1Out
    amountUSD
    to
  }
"""

FILTERED_TRANSACTIONS = (
    "query FilteredTransactions($allPairs: [Bytes]!) {\n"
    + _TRANSACTION_FIELDS % {"mints": 20, "burns": 20, "swaps": 30, "where": "where: { pair_in: $allPairs },"}
    + "}\n"
)

ALL_TRANSACTIONS = (
    "query AllTransactions {\n"
    + _TRANSACTION_FIELDS % {"mints": 100, "burns": 100, "swaps": 100, "where": ""}
    + "}\n"
)


def blocks_query(timestamps: Sequence[int]) -> str:
    """One aliased ``t<timestamp>`` selection per timestamp, latest block within ten minutes after it."""
    selections = "\n".join(
        f"  t{timestamp}: blocks(first: 1, orderBy: timestamp, orderDirection: desc, "
        f"where: {{ timestamp_gt: {timestamp}, timestamp_lt: {timestamp + 600} }}) {{ number }}"
        for timestamp in timestamps
    )
    return f"query blocks {{\n{selections}\n}}\n"


def hourly_pair_rates_query(pair_address: str, blocks: Sequence[Block]) -> str:
    selections = "\n".join(
        f'  t{block.timestamp}: pair(id: "{pair_address}", block: {{ number: {block.number} }}) '
        "{ token0Price token1Price }"
        for block in blocks
    )
    return f"query blocks {{\n{selections}\n}}\n"
