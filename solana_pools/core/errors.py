"""
Error taxonomy shared by the storage layer, fetchers and the ingestion pipeline.
"""


class PoolIndexError(Exception):
    """Base exception for all solana_pools errors."""
    pass


class TransportError(PoolIndexError):
    """Raised when the remote API or the Redis server cannot be reached."""
    pass


class DecodeError(PoolIndexError):
    """Raised when an API response or a stored document cannot be parsed."""
    pass


class NotFoundError(PoolIndexError):
    """Raised when a mint or pool lookup has no stored record."""
    pass


class StorageError(PoolIndexError):
    """Raised when a store command fails for a reason other than transport."""
    pass


class AsymmetryError(StorageError):
    """
    Raised when only one direction of a swap edge was written.

    The swap graph stays asymmetric for that pair until the next full reset.
    """

    def __init__(self, written: str, failed: str, cause: Exception):
        self.written = written
        self.failed = failed
        self.cause = cause
        super().__init__(
            f"Swap edge half-written: {written} updated, {failed} failed ({cause})"
        )
