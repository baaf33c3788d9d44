"""
Storage layer for the Raydium pool index.

This module provides:
- RedisDocumentStore: Redis + RedisJSON adapter (documents and sets)
- MintRegistry: first-writer-wins mint metadata
- SwapGraph: symmetric "swappable" adjacency sets
- PoolIndex: pools keyed by canonical mint pair and pool id

Usage:
    from solana_pools.core.storage import RedisDocumentStore, PoolIndex

    async with RedisDocumentStore(config) as store:
        pools = PoolIndex(store)
        pool = await pools.get_pool(pool_key, pool_id)
"""

from ..errors import (
    AsymmetryError,
    DecodeError,
    NotFoundError,
    StorageError,
    TransportError,
)
from ..models import canonical_key
from .base import (
    MINTS_COLLECTION,
    POOLS_COLLECTION,
    DocumentStore,
    StorageBase,
    swappable_key,
)
from .mint_registry import MintRegistry
from .pool_index import PoolIndex
from .redis import RedisDocumentStore
from .swap_graph import SwapGraph

__all__ = [
    "StorageBase",
    "DocumentStore",
    "RedisDocumentStore",
    "MintRegistry",
    "SwapGraph",
    "PoolIndex",
    "canonical_key",
    "swappable_key",
    "POOLS_COLLECTION",
    "MINTS_COLLECTION",
    "StorageError",
    "TransportError",
    "DecodeError",
    "NotFoundError",
    "AsymmetryError",
]
