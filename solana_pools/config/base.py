"""
Environment-backed settings shared by every solana_pools config section.

Values come from the process environment, after ``.env`` has been loaded by
python-dotenv. Sections subclass ``BaseConfig`` and declare their settings as
dataclass fields whose default factories read the environment.
"""

import os
import logging
from typing import Any, Callable, Dict, Optional, TypeVar
from dataclasses import dataclass, field, fields
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ENVIRONMENTS = ("local", "dev", "staging", "production")

T = TypeVar("T")


class ConfigError(Exception):
    """Raised when a setting is missing, malformed or out of range."""
    pass


def configure_logging(level_name: str) -> int:
    """
    Apply a log level name such as ``"DEBUG"`` to the root logger.

    Returns:
        int: The numeric logging level

    Raises:
        ConfigError: If the name is not a logging level
    """
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ConfigError(f"Invalid log level: {level_name}")
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    return level


@dataclass
class BaseConfig:
    """Deployment environment and log level; parent of all config sections."""

    ENVIRONMENT: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "local"))
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def __post_init__(self):
        configure_logging(self.LOG_LEVEL)
        self._validate_config()

    def _validate_config(self):
        """Check field values; sections extend this and call super()."""
        if self.ENVIRONMENT not in ENVIRONMENTS:
            raise ConfigError(f"Invalid environment: {self.ENVIRONMENT}")

    @staticmethod
    def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Read a raw string setting.

        Raises:
            ConfigError: If ``required`` and the variable is unset with no default
        """
        value = os.getenv(key, default)
        if required and value is None:
            raise ConfigError(f"Required environment variable '{key}' is not set")
        return value

    @staticmethod
    def _get_env_as(key: str, default: Optional[T], required: bool, cast: Callable[[str], T], kind: str) -> T:
        raw = BaseConfig.get_env(key, None if default is None else str(default), required)
        try:
            return cast(raw)
        except (ValueError, TypeError):
            raise ConfigError(f"Environment variable '{key}' must be {kind}, got: {raw}")

    @staticmethod
    def get_env_int(key: str, default: Optional[int] = None, required: bool = False) -> int:
        return BaseConfig._get_env_as(key, default, required, int, "an integer")

    @staticmethod
    def get_env_float(key: str, default: Optional[float] = None, required: bool = False) -> float:
        return BaseConfig._get_env_as(key, default, required, float, "a float")

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
