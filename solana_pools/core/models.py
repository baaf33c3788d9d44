"""
Core types for the Raydium pool index.

Domain models mirror the camelCase JSON returned by the Raydium v3 listing API
and stored in RedisJSON. Each model converts to and from that shape with
``from_dict()`` / ``to_dict()``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import DecodeError

PAIR_KEY_SEPARATOR = ":"


def canonical_key(address_a: str, address_b: str) -> str:
    """
    Build the order-independent key for a pair of mint addresses.

    The lexicographically smaller address always comes first, so
    ``canonical_key(a, b) == canonical_key(b, a)``.
    """
    if address_a < address_b:
        return f"{address_a}{PAIR_KEY_SEPARATOR}{address_b}"
    return f"{address_b}{PAIR_KEY_SEPARATOR}{address_a}"


def _require(data: Dict[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise DecodeError(f"{kind} is missing required field '{key}'")
    return data[key]


def _as_float(value: Any, key: str, kind: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise DecodeError(f"{kind} field '{key}' is not a number: {value!r}")


@dataclass
class Mint:
    """
    SPL token mint metadata.

    Attributes:
        address: Mint address (primary key in the mints collection)
        program_id: Token program owning the mint
        symbol: Ticker symbol
        name: Display name
        decimals: Number of decimals, never negative
    """

    address: str
    program_id: str = ""
    symbol: str = ""
    name: str = ""
    decimals: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Mint":
        if not isinstance(data, dict):
            raise DecodeError(f"Mint must be an object, got {type(data).__name__}")

        address = _require(data, "address", "Mint")
        if not isinstance(address, str) or not address:
            raise DecodeError(f"Mint address must be a non-empty string: {address!r}")

        try:
            decimals = int(data.get("decimals", 0))
        except (TypeError, ValueError):
            raise DecodeError(f"Mint {address} has invalid decimals: {data.get('decimals')!r}")
        if decimals < 0:
            raise DecodeError(f"Mint {address} has negative decimals: {decimals}")

        return cls(
            address=address,
            program_id=data.get("programId", ""),
            symbol=data.get("symbol", ""),
            name=data.get("name", ""),
            decimals=decimals,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "programId": self.program_id,
            "symbol": self.symbol,
            "name": self.name,
            "decimals": self.decimals,
        }


@dataclass
class TimeWindowStats:
    """Trading volume and fees collected over one time window."""

    volume: float = 0.0
    volume_fee: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TimeWindowStats":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise DecodeError(f"Time window must be an object, got {type(data).__name__}")
        return cls(
            volume=_as_float(data.get("volume", 0.0), "volume", "Time window"),
            volume_fee=_as_float(data.get("volumeFee", 0.0), "volumeFee", "Time window"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"volume": self.volume, "volumeFee": self.volume_fee}


@dataclass
class PoolInfo:
    """
    Raydium liquidity pool record.

    ``month`` holds the all-time window, serialized under the ``allTime`` key
    exactly as the API names it.
    """

    pool_id: str
    mint_a: Mint
    mint_b: Mint
    price: float = 0.0
    mint_amount_a: float = 0.0
    mint_amount_b: float = 0.0
    fee_rate: float = 0.0
    type: str = "Standard"
    day: TimeWindowStats = field(default_factory=TimeWindowStats)
    week: TimeWindowStats = field(default_factory=TimeWindowStats)
    month: TimeWindowStats = field(default_factory=TimeWindowStats)

    @property
    def pool_key(self) -> str:
        """Canonical pair key the pool is indexed under."""
        return canonical_key(self.mint_a.address, self.mint_b.address)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoolInfo":
        if not isinstance(data, dict):
            raise DecodeError(f"Pool must be an object, got {type(data).__name__}")

        pool_id = _require(data, "id", "Pool")
        if not isinstance(pool_id, str) or not pool_id:
            raise DecodeError(f"Pool id must be a non-empty string: {pool_id!r}")

        mint_a = Mint.from_dict(_require(data, "mintA", "Pool"))
        mint_b = Mint.from_dict(_require(data, "mintB", "Pool"))
        if mint_a.address == mint_b.address:
            raise DecodeError(f"Pool {pool_id} pairs mint {mint_a.address} with itself")

        return cls(
            pool_id=pool_id,
            mint_a=mint_a,
            mint_b=mint_b,
            price=_as_float(data.get("price", 0.0), "price", "Pool"),
            mint_amount_a=_as_float(data.get("mintAmountA", 0.0), "mintAmountA", "Pool"),
            mint_amount_b=_as_float(data.get("mintAmountB", 0.0), "mintAmountB", "Pool"),
            fee_rate=_as_float(data.get("feeRate", 0.0), "feeRate", "Pool"),
            type=data.get("type", "Standard"),
            day=TimeWindowStats.from_dict(data.get("day")),
            week=TimeWindowStats.from_dict(data.get("week")),
            month=TimeWindowStats.from_dict(data.get("allTime")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.pool_id,
            "mintA": self.mint_a.to_dict(),
            "mintB": self.mint_b.to_dict(),
            "price": self.price,
            "mintAmountA": self.mint_amount_a,
            "mintAmountB": self.mint_amount_b,
            "feeRate": self.fee_rate,
            "type": self.type,
            "day": self.day.to_dict(),
            "week": self.week.to_dict(),
            "allTime": self.month.to_dict(),
        }


def record_day_volume(record: Any) -> float:
    """
    Read only the 24h volume of a raw listing record.

    A missing ``day`` window counts as zero volume. The rest of the record is
    not looked at, so a record below the floor is never fully decoded.
    """
    if not isinstance(record, dict):
        raise DecodeError(f"Pool must be an object, got {type(record).__name__}")
    return TimeWindowStats.from_dict(record.get("day")).volume


@dataclass
class PoolListPage:
    """
    One page of the Raydium pool listing.

    The envelope is decoded eagerly. Pool records stay raw in ``records`` so
    callers decode them one at a time with ``PoolInfo.from_dict``.
    """

    success: bool
    records: List[Dict[str, Any]]
    has_next_page: bool
    count: int = 0
    request_id: Optional[str] = None

    @classmethod
    def of(cls, pools: List[PoolInfo], has_next_page: bool = False) -> "PoolListPage":
        """Build a successful page from already decoded pools."""
        return cls(
            success=True,
            records=[pool.to_dict() for pool in pools],
            has_next_page=has_next_page,
            count=len(pools),
        )

    @property
    def pools(self) -> List[PoolInfo]:
        """Decode every record on the page; fails on the first bad one."""
        return [PoolInfo.from_dict(record) for record in self.records]

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PoolListPage":
        if not isinstance(payload, dict):
            raise DecodeError(f"Response must be an object, got {type(payload).__name__}")

        data = _require(payload, "data", "Response")
        if not isinstance(data, dict):
            raise DecodeError("Response field 'data' must be an object")

        records = data.get("data") or []
        if not isinstance(records, list):
            raise DecodeError("Response field 'data.data' must be a list")

        try:
            count = int(data.get("count", len(records)))
        except (TypeError, ValueError):
            raise DecodeError(f"Response count is not an integer: {data.get('count')!r}")

        return cls(
            success=bool(payload.get("success", False)),
            records=records,
            has_next_page=bool(data.get("hasNextPage", False)),
            count=count,
            request_id=payload.get("id"),
        )


@dataclass
class IngestionResult:
    """Summary of one ingestion run."""

    pages_fetched: int = 0
    pools_imported: int = 0
    mints_created: int = 0
    stopped_on_volume: bool = False
    last_page: int = 0
