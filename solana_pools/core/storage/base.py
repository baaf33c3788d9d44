"""
Base classes and interfaces for storage implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Sequence, Set, Tuple
import logging

logger = logging.getLogger(__name__)

POOLS_COLLECTION = "pools"
MINTS_COLLECTION = "mints"
SWAPPABLE_PREFIX = "swappable:"


def swappable_key(address: str) -> str:
    """Name of the Redis set holding every mint swappable with ``address``."""
    return f"{SWAPPABLE_PREFIX}{address}"


class StorageBase(ABC):
    """
    Abstract base class for storage implementations.
    All storage backends must implement these methods.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize storage backend with configuration.

        Args:
            config: Configuration dictionary for the storage backend
        """
        self.config = config
        self.is_connected = False

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to the storage backend."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection to the storage backend."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the storage backend is healthy and accessible.

        Returns:
            bool: True if healthy, False otherwise
        """
        pass

    async def close(self) -> None:
        """Alias of disconnect()."""
        await self.disconnect()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.disconnect()


class DocumentStore(StorageBase):
    """
    Interface for the JSON document + set store backing the pool index.

    Documents live in named top-level collections ("pools", "mints") and are
    addressed by a sequence of key segments below the collection root.
    """

    @abstractmethod
    async def get_document(self, collection: str, *segments: str) -> Optional[Any]:
        """
        Read the JSON value stored at ``collection[segments...]``.

        Returns:
            The stored value, or None if nothing is stored at that path
        """
        pass

    @abstractmethod
    async def set_document(self, collection: str, segments: Sequence[str], value: Any) -> None:
        """
        Write ``value`` at ``collection[segments...]``.

        Missing intermediate containers are created as empty objects; existing
        ones are never overwritten. The leaf itself is fully replaced.
        """
        pass

    @abstractmethod
    async def add_to_set(self, set_key: str, member: str) -> None:
        """Add ``member`` to the set named ``set_key``."""
        pass

    @abstractmethod
    async def add_to_sets(self, memberships: Iterable[Tuple[str, str]]) -> None:
        """
        Apply several ``(set_key, member)`` additions as one transaction.

        Raises:
            AsymmetryError: If some additions were applied and others failed
        """
        pass

    @abstractmethod
    async def members_of(self, set_key: str) -> Set[str]:
        """Return every member of ``set_key`` (empty set if it does not exist)."""
        pass

    @abstractmethod
    async def clear_all(self) -> None:
        """Delete every key in the store. Destructive and unconditional."""
        pass
