"""
Remote pool listing fetchers.

KISS: Simple, focused fetchers that page through a market-data API.
"""

from .base import BasePoolFetcher
from .raydium_fetcher import RaydiumPoolFetcher

__all__ = [
    'BasePoolFetcher',
    'RaydiumPoolFetcher',
]
