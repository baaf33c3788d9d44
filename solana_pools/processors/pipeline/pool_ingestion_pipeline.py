"""
Raydium pool ingestion pipeline.

Pages through the pool listing (sorted by descending 24h volume) and indexes
every pool at or above the volume floor into Redis:

    fetch page -> for each record in API order:
        below floor?  -> stop the whole run (success)
        decode -> upsert mint A -> upsert mint B -> link swappable -> upsert pool
    -> next page while hasNextPage

The index is flushed once at the start of every run.
"""

import logging
import math
from typing import Optional

from ...core.models import IngestionResult, PoolInfo, record_day_volume
from ...core.storage import DocumentStore, MintRegistry, PoolIndex, SwapGraph
from ...fetchers.base import BasePoolFetcher


class PoolIngestionPipeline:
    """Loads the Raydium pool listing into the Redis pool index."""

    def __init__(
        self,
        store: DocumentStore,
        fetcher: BasePoolFetcher,
        mints: Optional[MintRegistry] = None,
        graph: Optional[SwapGraph] = None,
        pools: Optional[PoolIndex] = None,
    ):
        """
        Initialize pipeline.

        Args:
            store: Connected document store; flushed at the start of each run
            fetcher: Pool listing fetcher
            mints: Mint registry (defaults to one on ``store``)
            graph: Swap graph (defaults to one on ``store``)
            pools: Pool index (defaults to one on ``store``)
        """
        self.store = store
        self.fetcher = fetcher
        self.mints = mints or MintRegistry(store)
        self.graph = graph or SwapGraph(store)
        self.pools = pools or PoolIndex(store)
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    async def run(self, min_daily_volume: float) -> IngestionResult:
        """
        Rebuild the index from the remote listing.

        The run stops successfully at the first pool whose 24h volume is below
        ``min_daily_volume``; because the listing is sorted by volume, every
        later pool is assumed to be below the floor too.

        Args:
            min_daily_volume: Minimum 24h volume a pool needs to be imported

        Returns:
            IngestionResult: Pages fetched, pools imported and why the run ended

        Raises:
            ValueError: If min_daily_volume is negative or not a finite number
            TransportError, DecodeError, StorageError: On the first failure;
                the run is aborted and nothing after the failing pool is written
        """
        min_daily_volume = self._validate_floor(min_daily_volume)
        result = IngestionResult()

        await self.store.clear_all()
        self.logger.info(
            f"Starting pool ingestion from {self.fetcher.get_identifier()} "
            f"(min 24h volume: {min_daily_volume:,.2f})"
        )

        page_number = 1
        while True:
            page = await self.fetcher.fetch_page(page_number)
            result.pages_fetched += 1
            result.last_page = page_number
            self.logger.info(f"Fetched {len(page.records)} pools on page {page_number} (total listed: {page.count})")

            for record in page.records:
                # records past the floor are never decoded
                volume = record_day_volume(record)
                if volume < min_daily_volume:
                    self.logger.info(
                        f"Pool {record.get('id')} 24h volume {volume:,.2f} below floor, stopping"
                    )
                    result.stopped_on_volume = True
                    return self._finish(result)

                result.mints_created += await self.add_pool(PoolInfo.from_dict(record))
                result.pools_imported += 1

            if not page.has_next_page:
                return self._finish(result)
            page_number += 1

    async def add_pool(self, pool: PoolInfo) -> int:
        """
        Index one pool: both mints, the swap edge, then the pool record.

        Returns:
            int: Number of mints newly registered (0-2)
        """
        created = 0
        for mint in (pool.mint_a, pool.mint_b):
            if await self.mints.upsert_mint(mint):
                created += 1

        await self.graph.link_swappable(pool.mint_a.address, pool.mint_b.address)
        pool_key = await self.pools.upsert_pool(pool)

        self.logger.debug(
            f"Indexed pool {pool.pool_id} ({pool.mint_a.symbol}/{pool.mint_b.symbol}) under {pool_key}"
        )
        return created

    def _finish(self, result: IngestionResult) -> IngestionResult:
        self.logger.info(
            f"Ingestion finished: {result.pools_imported} pools, {result.mints_created} mints "
            f"from {result.pages_fetched} page(s)"
            + (" (stopped at volume floor)" if result.stopped_on_volume else "")
        )
        return result

    @staticmethod
    def _validate_floor(min_daily_volume: float) -> float:
        if isinstance(min_daily_volume, bool):
            raise ValueError("min_daily_volume must be a number")
        try:
            floor = float(min_daily_volume)
        except (TypeError, ValueError):
            raise ValueError(f"min_daily_volume must be a number, got {min_daily_volume!r}")
        if math.isnan(floor) or math.isinf(floor) or floor < 0:
            raise ValueError(f"min_daily_volume must be a finite, non-negative number, got {min_daily_volume!r}")
        return floor
