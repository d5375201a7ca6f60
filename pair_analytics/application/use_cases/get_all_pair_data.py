from __future__ import annotations

import logging

from pair_analytics.application.dto.pair_data import GetBulkPairDataInput
from pair_analytics.application.ports.pair_query_port import PairQueryPort
from pair_analytics.application.ports.reference_price_port import ReferencePricePort
from pair_analytics.application.use_cases.get_bulk_pair_data import GetBulkPairDataUseCase
from pair_analytics.domain.entities.pair import EnrichedPair
from pair_analytics.domain.exceptions import FETCH_ERRORS


logger = logging.getLogger(__name__)


class GetAllPairDataUseCase:
    """Enriched data for the top pairs of the exchange, keyed by pair id."""

    def __init__(
        self,
        *,
        pair_query_port: PairQueryPort,
        reference_price_port: ReferencePricePort,
        bulk_pair_data_use_case: GetBulkPairDataUseCase,
    ):
        self._pair_query_port = pair_query_port
        self._reference_price_port = reference_price_port
        self._bulk_pair_data_use_case = bulk_pair_data_use_case

    async def execute(self) -> dict[str, EnrichedPair]:
        try:
            eth_price = await self._reference_price_port.fetch_eth_price()
            pair_ids = await self._pair_query_port.fetch_top_pair_ids()
        except FETCH_ERRORS:
            logger.exception("get_all_pair_data: failed to load pair list")
            return {}

        pairs = await self._bulk_pair_data_use_case.execute(
            GetBulkPairDataInput(pair_ids=pair_ids, eth_price=eth_price)
        )
        if pairs is None:
            return {}
        return {row.pair.id: row for row in pairs}
