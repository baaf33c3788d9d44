"""
Redis storage implementation for the pool index.

Documents are kept with the RedisJSON module; swap adjacency uses plain Redis sets.
"""

import json
import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Set, Tuple

import redis.asyncio as redis
from redis import exceptions as redis_exceptions
from redis.asyncio import Redis

from ..errors import AsymmetryError, PoolIndexError, StorageError, TransportError
from .base import DocumentStore

logger = logging.getLogger(__name__)


def json_path(*segments: str) -> str:
    """
    Build a JSONPath selecting ``segments`` below the document root.

    Bracket notation keeps keys containing ':' or '.' intact,
    e.g. ``$["A:B"]["pool1"]``.
    """
    return "$" + "".join(f"[{json.dumps(segment)}]" for segment in segments)


class RedisDocumentStore(DocumentStore):
    """
    Redis + RedisJSON storage for pools, mints and swap adjacency sets.

    Features:
    - JSON documents addressed by collection and key segments
    - Intermediate containers created with NX, never overwritten
    - Set membership with MULTI/EXEC for paired writes
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize Redis storage.

        Args:
            config: Configuration with keys:
                - host: Redis host
                - port: Redis port
                - password: Redis password (optional)
                - db: Redis database number (default: 0)
                - decode_responses: Whether to decode responses (default: True)
                - socket_timeout: Socket timeout in seconds (default: 5)
                - socket_connect_timeout: Connect timeout in seconds (optional)
                - connection_pool_kwargs: Additional connection pool arguments
        """
        super().__init__(config)
        self.client: Optional[Redis] = None

    async def connect(self) -> None:
        """Establish connection to Redis."""
        try:
            pool_kwargs = {
                'host': self.config.get('host', 'localhost'),
                'port': self.config.get('port', 6379),
                'db': self.config.get('db', 0),
                'decode_responses': self.config.get('decode_responses', True),
                'socket_timeout': self.config.get('socket_timeout', 5),
                **self.config.get('connection_pool_kwargs', {})
            }
            if self.config.get('socket_connect_timeout') is not None:
                pool_kwargs['socket_connect_timeout'] = self.config['socket_connect_timeout']

            # Only add password if it's actually set
            password = self.config.get('password')
            if password is not None:
                pool_kwargs['password'] = password

            pool = redis.ConnectionPool(**pool_kwargs)
            self.client = redis.Redis(connection_pool=pool)

            await self.client.ping()

            self.is_connected = True
            logger.info(f"Redis connection established ({pool_kwargs['host']}:{pool_kwargs['port']})")

        except (redis_exceptions.RedisError, OSError) as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self.client = None
            raise TransportError(f"Redis connection failed: {e}") from e

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None

        self.is_connected = False
        logger.info("Redis connection closed")

    async def health_check(self) -> bool:
        """Check Redis connection health."""
        if not self.client:
            return False

        try:
            response = await self.client.ping()
            return response is True
        except redis_exceptions.RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    def _require_client(self) -> Redis:
        if not self.client:
            raise TransportError("Not connected to Redis")
        return self.client

    @staticmethod
    def _translate(action: str, error: Exception) -> PoolIndexError:
        """Map a redis-py exception onto the solana_pools error taxonomy."""
        logger.error(f"Failed to {action}: {error}")
        if isinstance(error, (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError)):
            return TransportError(f"Redis unavailable while trying to {action}: {error}")
        return StorageError(f"Redis failed to {action}: {error}")

    # Document operations

    async def get_document(self, collection: str, *segments: str) -> Optional[Any]:
        """
        Read the JSON value at ``collection[segments...]``.

        Args:
            collection: Top-level key ("pools" or "mints")
            *segments: Path below the collection root

        Returns:
            Stored value or None if the key or path does not exist
        """
        client = self._require_client()
        path = json_path(*segments)

        try:
            matches = await client.json().get(collection, path)
        except redis_exceptions.RedisError as e:
            raise self._translate(f"read {collection} {path}", e) from e

        # JSONPath reads return a list of matches, None when the key is missing
        if not matches:
            return None
        return matches[0]

    async def set_document(self, collection: str, segments: Sequence[str], value: Any) -> None:
        """
        Write ``value`` at ``collection[segments...]``.

        The collection root and every intermediate segment are created as
        empty objects with NX, so existing containers are left untouched.

        Args:
            collection: Top-level key ("pools" or "mints")
            segments: Path below the collection root, at least one segment
            value: JSON-serializable value for the leaf
        """
        if not segments:
            raise ValueError("set_document needs at least one path segment")

        client = self._require_client()
        segments = list(segments)
        path = json_path(*segments)

        try:
            await client.json().set(collection, "$", {}, nx=True)
            for depth in range(1, len(segments)):
                await client.json().set(collection, json_path(*segments[:depth]), {}, nx=True)
            await client.json().set(collection, path, value)
        except redis_exceptions.RedisError as e:
            raise self._translate(f"write {collection} {path}", e) from e

    # Set operations

    async def add_to_set(self, set_key: str, member: str) -> None:
        """Add ``member`` to the set ``set_key``."""
        client = self._require_client()

        try:
            await client.sadd(set_key, member)
        except redis_exceptions.RedisError as e:
            raise self._translate(f"add {member} to {set_key}", e) from e

    async def add_to_sets(self, memberships: Iterable[Tuple[str, str]]) -> None:
        """
        Add several set memberships inside one MULTI/EXEC transaction.

        Args:
            memberships: (set_key, member) pairs

        Raises:
            AsymmetryError: If Redis applied some SADDs and rejected others
            StorageError: If every SADD was rejected
            TransportError: If Redis is unreachable
        """
        client = self._require_client()
        memberships = list(memberships)
        if not memberships:
            return

        try:
            async with client.pipeline(transaction=True) as pipe:
                for set_key, member in memberships:
                    pipe.sadd(set_key, member)
                results = await pipe.execute(raise_on_error=False)
        except redis_exceptions.RedisError as e:
            raise self._translate(f"add {len(memberships)} set memberships", e) from e

        failed = [
            (set_key, result)
            for (set_key, _), result in zip(memberships, results)
            if isinstance(result, Exception)
        ]
        if not failed:
            return

        written = [
            set_key
            for (set_key, _), result in zip(memberships, results)
            if not isinstance(result, Exception)
        ]
        failed_key, cause = failed[0]
        if written:
            logger.error(f"Partial set update: {written} written, {failed_key} failed: {cause}")
            raise AsymmetryError(written[0], failed_key, cause)
        raise self._translate(f"add to {failed_key}", cause)

    async def members_of(self, set_key: str) -> Set[str]:
        """Return all members of ``set_key``."""
        client = self._require_client()

        try:
            members = await client.smembers(set_key)
        except redis_exceptions.RedisError as e:
            raise self._translate(f"read members of {set_key}", e) from e

        return set(members or ())

    async def clear_all(self) -> None:
        """Flush the current Redis database."""
        client = self._require_client()

        try:
            await client.flushdb()
        except redis_exceptions.RedisError as e:
            raise self._translate("flush database", e) from e

        logger.info("Redis DB cleared")
