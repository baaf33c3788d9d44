"""
Redis configuration for solana_pools.
"""

from dataclasses import dataclass, field
from typing import Optional

from .base import BaseConfig, ConfigError


@dataclass
class DatabaseConfig(BaseConfig):
    """Redis connection settings."""

    REDIS_HOST: str = field(default_factory=lambda: BaseConfig.get_env("REDIS_HOST", "localhost"))
    REDIS_PORT: int = field(default_factory=lambda: BaseConfig.get_env_int("REDIS_PORT", 6379))
    REDIS_PASSWORD: Optional[str] = field(default_factory=lambda: BaseConfig.get_env("REDIS_PASSWORD") or None)
    REDIS_DB: int = field(default_factory=lambda: BaseConfig.get_env_int("REDIS_DB", 0))
    CONNECTION_TIMEOUT: int = field(default_factory=lambda: BaseConfig.get_env_int("CONNECTION_TIMEOUT", 30))

    def _validate_config(self):
        super()._validate_config()
        if not 0 < self.REDIS_PORT < 65536:
            raise ConfigError(f"Invalid Redis port: {self.REDIS_PORT}")
        if self.CONNECTION_TIMEOUT <= 0:
            raise ConfigError(f"CONNECTION_TIMEOUT must be positive, got: {self.CONNECTION_TIMEOUT}")

    @property
    def redis_address(self) -> str:
        """Redis address in host:port form."""
        return f"{self.REDIS_HOST}:{self.REDIS_PORT}"

    def apply_redis_address(self, address: str) -> None:
        """
        Override host and port from a "host:port" address string.

        A bare host keeps the configured port.

        Raises:
            ConfigError: If the address is empty or the port is not a valid integer
        """
        address = (address or "").strip()
        if not address:
            raise ConfigError("Redis address is empty")

        host, sep, port = address.rpartition(":")
        if not sep:
            self.REDIS_HOST = address
            return

        try:
            port_number = int(port)
        except ValueError:
            raise ConfigError(f"Invalid Redis address '{address}': port must be an integer")
        if not host or not 0 < port_number < 65536:
            raise ConfigError(f"Invalid Redis address '{address}'")

        self.REDIS_HOST = host
        self.REDIS_PORT = port_number

    def get_redis_connection_kwargs(self) -> dict:
        """Get Redis connection parameters."""
        kwargs = {
            "host": self.REDIS_HOST,
            "port": self.REDIS_PORT,
            "db": self.REDIS_DB,
            "decode_responses": True,
            "socket_timeout": self.CONNECTION_TIMEOUT,
            "socket_connect_timeout": self.CONNECTION_TIMEOUT,
        }

        # Only add password if it's actually set and not empty/whitespace
        if self.REDIS_PASSWORD and self.REDIS_PASSWORD.strip():
            kwargs["password"] = self.REDIS_PASSWORD.strip()

        return kwargs
