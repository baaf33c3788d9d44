"""
Base classes for paginated pool listing fetchers.
"""

from abc import ABC, abstractmethod
import logging

from ..core.models import PoolListPage

logger = logging.getLogger(__name__)


class BasePoolFetcher(ABC):
    """
    Abstract base class for pool listing fetchers.

    KISS principle: Each fetcher handles one remote listing endpoint.
    """

    def __init__(self, base_url: str, page_size: int):
        """
        Initialize fetcher.

        Args:
            base_url: API base URL
            page_size: Records requested per page
        """
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @abstractmethod
    async def fetch_page(self, page: int) -> PoolListPage:
        """
        Fetch and decode one page of the pool listing.

        Args:
            page: 1-based page number

        Returns:
            PoolListPage: Decoded envelope holding the raw pool records

        Raises:
            TransportError: If the request fails
            DecodeError: If the response cannot be decoded
        """
        pass

    async def close(self) -> None:
        """Release network resources held by the fetcher."""
        pass

    def get_identifier(self) -> str:
        """Get unique identifier for this fetcher."""
        return f"{self.__class__.__name__}({self.base_url})"

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
