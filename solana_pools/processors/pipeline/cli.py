#!/usr/bin/env python3
"""
Command-line interface for the Raydium pool ingestion pipeline.

Usage:
    python -m solana_pools.processors.pipeline.cli
    python -m solana_pools.processors.pipeline.cli --config config/config.json
    python -m solana_pools.processors.pipeline.cli --min-volume 5000
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from solana_pools.config import ConfigError, ConfigManager
from solana_pools.config.base import LOG_FORMAT
from solana_pools.core.errors import PoolIndexError
from solana_pools.core.models import IngestionResult
from solana_pools.core.storage import RedisDocumentStore
from solana_pools.fetchers import RaydiumPoolFetcher
from solana_pools.processors.pipeline.pool_ingestion_pipeline import PoolIngestionPipeline

# Configure logging
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def format_ingestion_result(result: IngestionResult) -> None:
    """Format and display ingestion results."""
    logger.info("✅ Pool ingestion completed successfully")
    logger.info(f"📄 Pages fetched: {result.pages_fetched}")
    logger.info(f"💾 Pools imported: {result.pools_imported}")
    logger.info(f"🪙 Mints registered: {result.mints_created}")
    if result.stopped_on_volume:
        logger.info(f"🛑 Stopped at volume floor on page {result.last_page}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load Raydium pools, mints and swap pairs into Redis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load with settings from config/config.json and the environment
  python -m solana_pools.processors.pipeline.cli

  # Explicit config file
  python -m solana_pools.processors.pipeline.cli --config /etc/solana-pools/config.json

  # Only import pools with at least $5,000 of 24h volume
  python -m solana_pools.processors.pipeline.cli --min-volume 5000
        """,
    )
    parser.add_argument("--config", help="Path to the JSON config file")
    parser.add_argument(
        "--min-volume",
        type=float,
        help="Minimum 24h volume for a pool to be imported (default: MIN_POOL_VOLUME)",
    )
    parser.add_argument(
        "--env",
        choices=["local", "dev", "staging", "production"],
        help="Override ENVIRONMENT",
    )
    return parser


async def run_ingestion(config: ConfigManager, min_volume: float) -> IngestionResult:
    """Connect to Redis, run the pipeline and always release connections."""
    store = RedisDocumentStore(config.database.get_redis_connection_kwargs())
    fetcher = RaydiumPoolFetcher.from_config(config.api)

    try:
        await store.connect()
        pipeline = PoolIngestionPipeline(store, fetcher)
        return await pipeline.run(min_volume)
    finally:
        await fetcher.close()
        await store.close()


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI function.

    Returns:
        int: Process exit status (0 success, 1 failure, 130 interrupted)
    """
    args = build_parser().parse_args(argv)

    try:
        logger.info("⚙️  Loading config...")
        config = ConfigManager(environment=args.env, config_file=args.config)
        min_volume = args.min_volume if args.min_volume is not None else config.api.MIN_POOL_VOLUME

        logger.info(f"🚀 Loading Redis DB at {config.database.redis_address}")
        result = await run_ingestion(config, min_volume)

        format_ingestion_result(result)
        return 0

    except KeyboardInterrupt:
        logger.info("⏹️  Ingestion interrupted by user")
        return 130
    except ConfigError as e:
        logger.error(f"❌ Failed to load config: {e}")
        return 1
    except (PoolIndexError, ValueError) as e:
        logger.error(f"❌ Failed to load Redis DB: {e}")
        return 1
    except Exception as e:
        logger.exception(f"💥 Unexpected error: {e}")
        return 1


def run() -> None:
    """Console script entry point."""
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        # Ctrl-C cancels the main task, so the interrupt surfaces here
        logger.info("⏹️  Ingestion interrupted by user")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    run()
