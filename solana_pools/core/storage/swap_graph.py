"""
Swap adjacency between mints, stored as one Redis set per mint.
"""

import logging
from typing import Set

from .base import DocumentStore, swappable_key

logger = logging.getLogger(__name__)


class SwapGraph:
    """Symmetric "swappable with" relation between mint addresses."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def link_swappable(self, address_a: str, address_b: str) -> None:
        """
        Record that ``address_a`` and ``address_b`` trade in a common pool.

        Both directions are written in one transaction. Re-linking an existing
        pair changes nothing.

        Raises:
            ValueError: If an address is empty or both addresses are equal
            AsymmetryError: If only one direction could be written
        """
        if not address_a or not address_b:
            raise ValueError("Cannot link an empty mint address")
        if address_a == address_b:
            raise ValueError(f"Cannot link mint {address_a} with itself")

        await self.store.add_to_sets([
            (swappable_key(address_a), address_b),
            (swappable_key(address_b), address_a),
        ])

    async def neighbors_of(self, address: str) -> Set[str]:
        """Return every mint directly swappable with ``address``."""
        if not address:
            return set()
        return await self.store.members_of(swappable_key(address))
