"""
Configuration management for solana_pools.

Use get_config() to access all configuration settings.

Example:
    from solana_pools.config import get_config

    config = get_config(config_file="config/config.json")

    # Redis connection settings
    redis_kwargs = config.database.get_redis_connection_kwargs()

    # Raydium listing settings
    base_url = config.api.RAYDIUM_API_BASE_URL
    floor = config.api.MIN_POOL_VOLUME
"""

from .api import ApiConfig
from .base import BaseConfig, ConfigError
from .database import DatabaseConfig
from .manager import ConfigManager, get_config, reload_config

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ApiConfig",
    "DatabaseConfig",
    "ConfigManager",
    "get_config",
    "reload_config",
]
