"""
Raydium v3 pool listing fetcher.

Endpoint:
    GET {base_url}/pools/info/list?poolType=standard&poolSortField=volume24h
        &sortType=desc&pageSize=1000&page=N

Response envelope:
    {"success": true, "id": "...",
     "data": {"count": 123, "hasNextPage": true, "data": [<pool>, ...]}}

Error envelope:
    {"success": false, "id": "...", "msg": "..."}
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from ..config.api import MAX_PAGE_SIZE, ApiConfig
from ..core.errors import DecodeError, TransportError
from ..core.models import PoolListPage
from .base import BasePoolFetcher

POOL_LIST_PATH = "/pools/info/list"


class RaydiumPoolFetcher(BasePoolFetcher):
    """
    Fetches pool listing pages sorted by descending 24h volume.

    One request at a time; no retries. Timeouts surface as TransportError.
    """

    def __init__(
        self,
        base_url: str = "https://api-v3.raydium.io",
        page_size: int = MAX_PAGE_SIZE,
        pool_type: str = "standard",
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize Raydium fetcher.

        Args:
            base_url: Raydium API base URL
            page_size: Records per page, at most 1000
            pool_type: Raydium poolType filter (standard, concentrated, all)
            timeout: Total request timeout in seconds
            session: Existing aiohttp session to reuse (not closed by the fetcher)
        """
        if not 0 < page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")

        super().__init__(base_url, page_size)
        self.pool_type = pool_type
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_config(cls, config: ApiConfig) -> "RaydiumPoolFetcher":
        """Create a fetcher from ApiConfig settings."""
        return cls(
            base_url=config.RAYDIUM_API_BASE_URL,
            page_size=config.RAYDIUM_PAGE_SIZE,
            pool_type=config.RAYDIUM_POOL_TYPE,
            timeout=config.RAYDIUM_REQUEST_TIMEOUT,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}{POOL_LIST_PATH}"

    def build_params(self, page: int) -> Dict[str, Any]:
        """Query parameters for one listing page."""
        return {
            "poolType": self.pool_type,
            "poolSortField": "volume24h",
            "sortType": "desc",
            "pageSize": self.page_size,
            "page": page,
        }

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def fetch_page(self, page: int) -> PoolListPage:
        """
        Fetch one page of the Raydium pool listing.

        Args:
            page: 1-based page number

        Returns:
            PoolListPage with raw pool records in API order

        Raises:
            TransportError: Network failure, timeout, non-200 status or success=false
            DecodeError: Body is not JSON or the envelope does not match the listing shape
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")

        session = self._get_session()
        self.logger.debug(f"Fetching page {page} from {self.url}")

        try:
            async with session.get(self.url, params=self.build_params(page), timeout=self.timeout) as response:
                if response.status != 200:
                    raise TransportError(
                        f"Failed to fetch pools page {page}: HTTP {response.status}"
                    )
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error(f"Failed to fetch pools page {page}: {e!r}")
            raise TransportError(f"Failed to fetch pools page {page}: {e!r}") from e
        except ValueError as e:
            self.logger.error(f"Failed to decode pools page {page}: {e}")
            raise DecodeError(f"Failed to decode pools page {page}: {e}") from e

        # error bodies carry "msg" instead of "data"
        if isinstance(payload, dict) and not payload.get("success", False):
            message = payload.get("msg") or "no message"
            self.logger.error(f"Raydium API reported failure for page {page}: {message}")
            raise TransportError(
                f"Raydium API reported failure for page {page} (id={payload.get('id')}): {message}"
            )

        return PoolListPage.from_dict(payload)

    async def close(self) -> None:
        """Close the aiohttp session if this fetcher created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None
