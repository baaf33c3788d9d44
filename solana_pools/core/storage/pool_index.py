"""
Pool records indexed by canonical mint pair and pool id.

Layout of the "pools" JSON document::

    {
        "<minMint>:<maxMint>": {
            "<poolId>": { ...pool record... },
            ...
        },
        ...
    }
"""

import logging
from typing import List

from ..errors import DecodeError, NotFoundError
from ..models import PoolInfo, canonical_key
from .base import POOLS_COLLECTION, DocumentStore

logger = logging.getLogger(__name__)


class PoolIndex:
    """Last-writer-wins store of pools grouped under their canonical pair key."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def upsert_pool(self, pool: PoolInfo) -> str:
        """
        Write ``pool`` under its canonical pair key, replacing any prior record
        with the same pool id. Other pools of the same pair are left intact.

        Returns:
            str: The canonical pair key the pool was stored under
        """
        pool_key = pool.pool_key
        await self.store.set_document(POOLS_COLLECTION, [pool_key, pool.pool_id], pool.to_dict())
        logger.debug(f"Stored pool {pool.pool_id} under {pool_key}")
        return pool_key

    async def get_pool(self, pool_key: str, pool_id: str) -> PoolInfo:
        """
        Read one pool record.

        Args:
            pool_key: Canonical pair key (see canonical_key)
            pool_id: Raydium pool id

        Raises:
            NotFoundError: If nothing is stored at that key and id
            DecodeError: If the stored record is not a valid pool
        """
        if not pool_key or not pool_id:
            raise NotFoundError("Pool key and pool id are required")

        document = await self.store.get_document(POOLS_COLLECTION, pool_key, pool_id)
        if document is None:
            raise NotFoundError(f"Pool {pool_id} not found under {pool_key}")

        return self._decode(pool_key, pool_id, document)

    async def get_pools_for_pair(self, address_a: str, address_b: str) -> List[PoolInfo]:
        """Return every stored pool trading ``address_a`` against ``address_b``."""
        pool_key = canonical_key(address_a, address_b)
        document = await self.store.get_document(POOLS_COLLECTION, pool_key)
        if not document:
            return []
        if not isinstance(document, dict):
            raise DecodeError(f"Stored pair {pool_key} is not an object")

        return [
            self._decode(pool_key, pool_id, record)
            for pool_id, record in sorted(document.items())
        ]

    @staticmethod
    def _decode(pool_key: str, pool_id: str, document) -> PoolInfo:
        try:
            return PoolInfo.from_dict(document)
        except DecodeError as e:
            raise DecodeError(f"Stored pool {pool_key}/{pool_id} is malformed: {e}") from e
