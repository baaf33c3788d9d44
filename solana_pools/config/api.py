"""
Raydium API and ingestion settings for solana_pools.
"""

from dataclasses import dataclass, field

from .base import BaseConfig, ConfigError

# Largest pageSize the Raydium v3 listing accepts
MAX_PAGE_SIZE = 1000


@dataclass
class ApiConfig(BaseConfig):
    """Remote pool listing and volume floor configuration."""

    RAYDIUM_API_BASE_URL: str = field(
        default_factory=lambda: BaseConfig.get_env("RAYDIUM_API_BASE_URL", "https://api-v3.raydium.io")
    )
    RAYDIUM_POOL_TYPE: str = field(default_factory=lambda: BaseConfig.get_env("RAYDIUM_POOL_TYPE", "standard"))
    RAYDIUM_PAGE_SIZE: int = field(default_factory=lambda: BaseConfig.get_env_int("RAYDIUM_PAGE_SIZE", MAX_PAGE_SIZE))
    RAYDIUM_REQUEST_TIMEOUT: float = field(
        default_factory=lambda: BaseConfig.get_env_float("RAYDIUM_REQUEST_TIMEOUT", 30.0)
    )
    MIN_POOL_VOLUME: float = field(default_factory=lambda: BaseConfig.get_env_float("MIN_POOL_VOLUME", 1000.0))

    # Carried from the deployment config file; not used by ingestion
    GEYSER_ADDRESS: str = field(default_factory=lambda: BaseConfig.get_env("GEYSER_ADDRESS", ""))

    def _validate_config(self):
        super()._validate_config()
        if not self.RAYDIUM_API_BASE_URL.startswith(("http://", "https://")):
            raise ConfigError(f"Invalid Raydium API base URL: {self.RAYDIUM_API_BASE_URL}")
        if not 0 < self.RAYDIUM_PAGE_SIZE <= MAX_PAGE_SIZE:
            raise ConfigError(f"RAYDIUM_PAGE_SIZE must be between 1 and {MAX_PAGE_SIZE}, got: {self.RAYDIUM_PAGE_SIZE}")
        if self.RAYDIUM_REQUEST_TIMEOUT <= 0:
            raise ConfigError(f"RAYDIUM_REQUEST_TIMEOUT must be positive, got: {self.RAYDIUM_REQUEST_TIMEOUT}")
        if self.MIN_POOL_VOLUME < 0:
            raise ConfigError(f"MIN_POOL_VOLUME must not be negative, got: {self.MIN_POOL_VOLUME}")
