"""
Mint metadata registry backed by the "mints" JSON collection.
"""

import logging

from ..errors import DecodeError, NotFoundError
from ..models import Mint
from .base import MINTS_COLLECTION, DocumentStore

logger = logging.getLogger(__name__)


class MintRegistry:
    """
    Stores one record per mint address.

    Ingestion writes are first-writer-wins: a mint already in the registry is
    never overwritten by a later pool that references it.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def upsert_mint(self, mint: Mint) -> bool:
        """
        Store ``mint`` unless a record for its address already exists.

        Returns:
            bool: True if the mint was written, False if it was already present
        """
        existing = await self.store.get_document(MINTS_COLLECTION, mint.address)
        if existing is not None:
            return False

        await self.store.set_document(MINTS_COLLECTION, [mint.address], mint.to_dict())
        logger.debug(f"Registered mint {mint.symbol or '?'} ({mint.address})")
        return True

    async def set_mint(self, mint: Mint) -> None:
        """Store ``mint``, replacing any existing record for its address."""
        await self.store.set_document(MINTS_COLLECTION, [mint.address], mint.to_dict())

    async def get_mint(self, address: str) -> Mint:
        """
        Look up a mint by address.

        Raises:
            NotFoundError: If the address is empty or has no record
            DecodeError: If the stored record is malformed
        """
        if not address:
            raise NotFoundError("Mint address is empty")

        document = await self.store.get_document(MINTS_COLLECTION, address)
        if document is None:
            raise NotFoundError(f"Mint {address} not found")

        try:
            return Mint.from_dict(document)
        except DecodeError as e:
            raise DecodeError(f"Stored mint {address} is malformed: {e}") from e
