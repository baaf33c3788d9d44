"""
Configuration manager for solana_pools.

Combines the environment-driven configuration classes with the static
deployment file (config/config.json by default)::

    {
        "redis_address": "localhost:6379",
        "api_base_url": "https://api-v3.raydium.io",
        "geyser_address": "",
        "min_pool_volume": 1000
    }

Values present in the file take precedence over environment defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import ujson

from .api import ApiConfig
from .base import BaseConfig, ConfigError
from .database import DatabaseConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "SOLANA_POOLS_CONFIG"
DEFAULT_CONFIG_FILE = Path("config") / "config.json"


class ConfigManager:
    """
    Centralized configuration manager that combines all configuration classes.

    This class provides easy access to all configuration settings and ensures
    that configurations are properly initialized and validated.
    """

    def __init__(self, environment: str = None, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            environment: Override the environment (local, dev, staging, production)
            config_file: Path to the JSON deployment file. Falls back to
                $SOLANA_POOLS_CONFIG, then config/config.json if it exists.
        """
        self._environment = environment
        self._config_file = config_file
        self._base_config = None
        self._database_config = None
        self._api_config = None
        self._initialize_configs()

    def _initialize_configs(self):
        """Initialize all configuration objects."""
        try:
            self._base_config = BaseConfig()
            if self._environment:
                self._base_config.ENVIRONMENT = self._environment
                self._base_config._validate_config()

            self._database_config = DatabaseConfig()
            self._api_config = ApiConfig()

            file_settings = self._load_config_file()
            if file_settings:
                self._apply_file_settings(file_settings)

            logger.info(f"Configuration initialized for environment: {self.environment}")

        except ConfigError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}")

    def _resolve_config_file(self) -> Optional[Path]:
        explicit = self._config_file or os.getenv(CONFIG_FILE_ENV)
        if explicit:
            path = Path(explicit)
            if not path.is_file():
                raise ConfigError(f"Config file not found: {path}")
            return path

        if DEFAULT_CONFIG_FILE.is_file():
            return DEFAULT_CONFIG_FILE
        return None

    def _load_config_file(self) -> Dict[str, Any]:
        """Read the JSON deployment file, if one is configured."""
        path = self._resolve_config_file()
        if path is None:
            return {}

        try:
            with open(path, "r") as f:
                settings = ujson.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to read config file {path}: {e}")

        if not isinstance(settings, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")

        logger.info(f"Loaded config file: {path}")
        return settings

    def _apply_file_settings(self, settings: Dict[str, Any]) -> None:
        if settings.get("redis_address"):
            self._database_config.apply_redis_address(str(settings["redis_address"]))
        if settings.get("api_base_url"):
            self._api_config.RAYDIUM_API_BASE_URL = str(settings["api_base_url"]).rstrip("/")
        if settings.get("geyser_address"):
            self._api_config.GEYSER_ADDRESS = str(settings["geyser_address"])
        if settings.get("min_pool_volume") is not None:
            try:
                self._api_config.MIN_POOL_VOLUME = float(settings["min_pool_volume"])
            except (TypeError, ValueError):
                raise ConfigError(f"min_pool_volume must be a number, got: {settings['min_pool_volume']!r}")

        self._database_config._validate_config()
        self._api_config._validate_config()

    @property
    def environment(self) -> str:
        """Get current environment."""
        return self._base_config.ENVIRONMENT

    @property
    def base(self) -> BaseConfig:
        """Get base configuration."""
        return self._base_config

    @property
    def database(self) -> DatabaseConfig:
        """Get database configuration."""
        return self._database_config

    @property
    def api(self) -> ApiConfig:
        """Get Raydium API configuration."""
        return self._api_config

    def to_dict(self) -> Dict[str, Any]:
        """Convert all configurations to dictionary format."""
        return {
            "environment": self.environment,
            "base": self.base.to_dict() if self.base else {},
            "database": self.database.to_dict() if self.database else {},
            "api": self.api.to_dict() if self.api else {},
        }

    def __repr__(self) -> str:
        """String representation of the configuration manager."""
        return f"ConfigManager(environment={self.environment})"


# Global configuration manager instance
_config_manager = None


def get_config(
    environment: str = None,
    config_file: Optional[Union[str, Path]] = None,
    force_reload: bool = False,
) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        environment: Override environment
        config_file: Path to the JSON deployment file
        force_reload: Force reload of configuration

    Returns:
        ConfigManager instance
    """
    global _config_manager

    if _config_manager is None or force_reload:
        _config_manager = ConfigManager(environment=environment, config_file=config_file)

    return _config_manager


def reload_config(environment: str = None, config_file: Optional[Union[str, Path]] = None) -> ConfigManager:
    """
    Reload the global configuration manager.

    Args:
        environment: Override environment
        config_file: Path to the JSON deployment file

    Returns:
        New ConfigManager instance
    """
    return get_config(environment=environment, config_file=config_file, force_reload=True)
