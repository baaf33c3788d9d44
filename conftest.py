"""Shared test fixtures: in-memory store, scripted fetcher and record factories."""

import copy
from typing import Any, Callable, Dict, List, Optional, Sequence, Set

import pytest

from solana_pools.core.errors import AsymmetryError, StorageError
from solana_pools.core.models import Mint, PoolInfo, PoolListPage, TimeWindowStats
from solana_pools.core.storage.base import DocumentStore
from solana_pools.fetchers.base import BasePoolFetcher


class InMemoryDocumentStore(DocumentStore):
    """DocumentStore double with RedisJSON-like path semantics."""

    def __init__(self):
        super().__init__({})
        self.documents: Dict[str, Any] = {}
        self.sets: Dict[str, Set[str]] = {}
        self.calls: List[tuple] = []
        # operation name -> exception raised on the next call to it
        self.failures: Dict[str, Exception] = {}
        # set keys whose SADD fails inside add_to_sets
        self.failing_set_keys: Set[str] = set()

    def _maybe_fail(self, operation: str) -> None:
        error = self.failures.pop(operation, None)
        if error is not None:
            raise error

    async def connect(self) -> None:
        self.is_connected = True

    async def disconnect(self) -> None:
        self.is_connected = False

    async def health_check(self) -> bool:
        return self.is_connected

    async def get_document(self, collection: str, *segments: str) -> Optional[Any]:
        self.calls.append(("get_document", collection, segments))
        self._maybe_fail("get_document")
        node = self.documents.get(collection)
        for segment in segments:
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return copy.deepcopy(node)

    async def set_document(self, collection: str, segments: Sequence[str], value: Any) -> None:
        segments = list(segments)
        self.calls.append(("set_document", collection, tuple(segments)))
        self._maybe_fail("set_document")
        node = self.documents.setdefault(collection, {})
        for segment in segments[:-1]:
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise StorageError(f"{segment} is not an object")
            node = child
        node[segments[-1]] = copy.deepcopy(value)

    async def add_to_set(self, set_key: str, member: str) -> None:
        self.calls.append(("add_to_set", set_key, member))
        self._maybe_fail("add_to_set")
        self.sets.setdefault(set_key, set()).add(member)

    async def add_to_sets(self, memberships) -> None:
        memberships = list(memberships)
        self.calls.append(("add_to_sets", tuple(memberships)))
        self._maybe_fail("add_to_sets")
        written = []
        for set_key, member in memberships:
            if set_key in self.failing_set_keys:
                if written:
                    raise AsymmetryError(written[0], set_key, StorageError("WRONGTYPE"))
                raise StorageError(f"WRONGTYPE {set_key}")
            self.sets.setdefault(set_key, set()).add(member)
            written.append(set_key)

    async def members_of(self, set_key: str) -> Set[str]:
        self.calls.append(("members_of", set_key))
        self._maybe_fail("members_of")
        return set(self.sets.get(set_key, set()))

    async def clear_all(self) -> None:
        self.calls.append(("clear_all",))
        self._maybe_fail("clear_all")
        self.documents.clear()
        self.sets.clear()

    def writes(self) -> List[tuple]:
        """Calls that modify data, in order."""
        return [call for call in self.calls if call[0] in ("set_document", "add_to_set", "add_to_sets")]


class ScriptedPoolFetcher(BasePoolFetcher):
    """Fetcher returning pre-built pages and recording requested page numbers."""

    def __init__(self, pages: List[PoolListPage]):
        super().__init__("https://raydium.test", 1000)
        self.pages = pages
        self.requested: List[int] = []
        self.error: Optional[Exception] = None
        self.closed = False

    async def fetch_page(self, page: int) -> PoolListPage:
        self.requested.append(page)
        if self.error is not None:
            raise self.error
        return self.pages[page - 1]

    async def close(self) -> None:
        self.closed = True


def build_mint(n: int, **overrides) -> Mint:
    fields = dict(
        address=f"address{n}",
        program_id=f"program{n}",
        symbol=f"symbol{n}",
        name=f"name{n}",
        decimals=n,
    )
    fields.update(overrides)
    return Mint(**fields)


def build_pool(
    pool_id: str,
    mint_a: Mint,
    mint_b: Mint,
    day_volume: float = 10000.0,
    **overrides,
) -> PoolInfo:
    fields = dict(
        pool_id=pool_id,
        mint_a=mint_a,
        mint_b=mint_b,
        price=1.0,
        mint_amount_a=2.0,
        mint_amount_b=3.0,
        fee_rate=0.0025,
        type="Standard",
        day=TimeWindowStats(volume=day_volume, volume_fee=day_volume * 0.0025),
        week=TimeWindowStats(volume=day_volume * 7, volume_fee=day_volume * 7 * 0.0025),
        month=TimeWindowStats(volume=day_volume * 30, volume_fee=day_volume * 30 * 0.0025),
    )
    fields.update(overrides)
    return PoolInfo(**fields)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Provide an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def make_mint() -> Callable[..., Mint]:
    return build_mint


@pytest.fixture
def make_pool() -> Callable[..., PoolInfo]:
    return build_pool


@pytest.fixture
def make_fetcher() -> Callable[[List[PoolListPage]], ScriptedPoolFetcher]:
    return ScriptedPoolFetcher


@pytest.fixture
def sample_pool_payload() -> Dict[str, Any]:
    """One pool record as returned by the Raydium v3 listing."""
    return {
        "type": "Standard",
        "programId": "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8",
        "id": "58oQChx4yWmvKdwLLZzBi4ChoCc2fqCUWBkwMihLYQo2",
        "mintA": {
            "chainId": 101,
            "address": "So11111111111111111111111111111111111111112",
            "programId": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
            "logoURI": "https://img-v1.raydium.io/icon/So11111111111111111111111111111111111111112.png",
            "symbol": "WSOL",
            "name": "Wrapped SOL",
            "decimals": 9,
            "tags": [],
            "extensions": {},
        },
        "mintB": {
            "chainId": 101,
            "address": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
            "programId": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
            "logoURI": "https://img-v1.raydium.io/icon/EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v.png",
            "symbol": "USDC",
            "name": "USD Coin",
            "decimals": 6,
            "tags": ["hasFreeze"],
            "extensions": {},
        },
        "price": 145.12,
        "mintAmountA": 51234.5,
        "mintAmountB": 7435211.25,
        "feeRate": 0.0025,
        "openTime": "0",
        "tvl": 14870000.1,
        "day": {"volume": 52123456.7, "volumeQuote": 52100000.0, "volumeFee": 130308.6, "apr": 31.9},
        "week": {"volume": 301234567.8, "volumeQuote": 301000000.0, "volumeFee": 753086.4, "apr": 26.3},
        "month": {"volume": 1203456789.1, "volumeQuote": 1200000000.0, "volumeFee": 3008641.9, "apr": 24.7},
        "allTime": {"volume": 9876543210.5, "volumeFee": 24691358.0},
        "pooltype": ["OpenBookMarket"],
        "lpMint": {"address": "8HoQnePLqPj4M7PUDzfw8e3Ymdwgc7NLGnaTUapubyvu", "decimals": 9},
        "lpPrice": 51.2,
        "lpAmount": 290321.4,
    }
