from __future__ import annotations

import logging

from pair_analytics.application.ports.pair_query_port import PairQueryPort
from pair_analytics.domain.entities.transactions import PairTransactions
from pair_analytics.domain.exceptions import FETCH_ERRORS
from pair_analytics.domain.services.pair_address import normalize_pair_address


logger = logging.getLogger(__name__)


class GetPairTransactionsUseCase:
    def __init__(self, *, pair_query_port: PairQueryPort):
        self._pair_query_port = pair_query_port

    async def execute(self, pair_address: str) -> PairTransactions:
        address = normalize_pair_address(pair_address)
        try:
            return await self._pair_query_port.fetch_transactions(pair_ids=[address])
        except FETCH_ERRORS:
            logger.exception("get_pair_transactions: failed pair=%s", address)
            return PairTransactions()


class GetAllPairTransactionsUseCase:
    def __init__(self, *, pair_query_port: PairQueryPort):
        self._pair_query_port = pair_query_port

    async def execute(self) -> PairTransactions:
        try:
            return await self._pair_query_port.fetch_transactions(pair_ids=None)
        except FETCH_ERRORS:
            logger.exception("get_all_pair_transactions: failed")
            return PairTransactions()
