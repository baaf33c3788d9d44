"""
Tests for the configuration system.
"""

import logging

import pytest

from solana_pools.config import (
    ApiConfig, BaseConfig, ConfigError, ConfigManager, DatabaseConfig, get_config, reload_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's environment and config file."""
    for key in (
        "ENVIRONMENT", "LOG_LEVEL", "REDIS_HOST", "REDIS_PORT", "REDIS_DB", "REDIS_PASSWORD",
        "CONNECTION_TIMEOUT", "RAYDIUM_API_BASE_URL", "RAYDIUM_POOL_TYPE", "RAYDIUM_PAGE_SIZE",
        "RAYDIUM_REQUEST_TIMEOUT", "MIN_POOL_VOLUME", "GEYSER_ADDRESS", "SOLANA_POOLS_CONFIG",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "deploy.json"
    path.write_text(
        '{"redis_address": "redis.internal:6380", '
        '"api_base_url": "https://raydium.test/", '
        '"geyser_address": "geyser.internal:10000", '
        '"min_pool_volume": 2500}'
    )
    return path


class TestDatabaseConfig:
    """Test Redis connection settings."""

    def test_defaults(self):
        config = DatabaseConfig()

        assert config.redis_address == "localhost:6379"
        kwargs = config.get_redis_connection_kwargs()
        assert kwargs["decode_responses"] is True
        assert kwargs["socket_timeout"] == 30
        assert "password" not in kwargs

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("REDIS_HOST", "cache")
        monkeypatch.setenv("REDIS_PORT", "6390")
        monkeypatch.setenv("REDIS_PASSWORD", " hunter2 ")

        kwargs = DatabaseConfig().get_redis_connection_kwargs()

        assert kwargs["host"] == "cache"
        assert kwargs["port"] == 6390
        assert kwargs["password"] == "hunter2"

    def test_non_integer_port(self, monkeypatch):
        monkeypatch.setenv("REDIS_PORT", "sixty")

        with pytest.raises(ConfigError, match="REDIS_PORT"):
            DatabaseConfig()

    @pytest.mark.parametrize("address, host, port", [
        ("10.0.0.5:6380", "10.0.0.5", 6380),
        ("redis", "redis", 6379),
    ])
    def test_apply_redis_address(self, address, host, port):
        config = DatabaseConfig()

        config.apply_redis_address(address)

        assert (config.REDIS_HOST, config.REDIS_PORT) == (host, port)

    @pytest.mark.parametrize("address", ["", "redis:port", ":6379", "redis:70000"])
    def test_invalid_redis_address(self, address):
        with pytest.raises(ConfigError):
            DatabaseConfig().apply_redis_address(address)


class TestApiConfig:
    """Test Raydium API settings."""

    def test_defaults(self):
        config = ApiConfig()

        assert config.RAYDIUM_API_BASE_URL == "https://api-v3.raydium.io"
        assert config.RAYDIUM_PAGE_SIZE == 1000
        assert config.MIN_POOL_VOLUME == 1000.0

    def test_page_size_limit(self, monkeypatch):
        monkeypatch.setenv("RAYDIUM_PAGE_SIZE", "5000")

        with pytest.raises(ConfigError, match="RAYDIUM_PAGE_SIZE"):
            ApiConfig()

    def test_negative_floor(self, monkeypatch):
        monkeypatch.setenv("MIN_POOL_VOLUME", "-5")

        with pytest.raises(ConfigError, match="MIN_POOL_VOLUME"):
            ApiConfig()

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "moon")

        with pytest.raises(ConfigError, match="Invalid environment"):
            ApiConfig()


class TestConfigManager:
    """Test config file loading and precedence."""

    def test_without_config_file(self):
        config = ConfigManager()

        assert config.environment == "local"
        assert config.database.redis_address == "localhost:6379"

    def test_config_file_overrides_env(self, monkeypatch, config_file):
        monkeypatch.setenv("REDIS_HOST", "from-env")
        monkeypatch.setenv("MIN_POOL_VOLUME", "10")

        config = ConfigManager(config_file=config_file)

        assert config.database.redis_address == "redis.internal:6380"
        assert config.api.RAYDIUM_API_BASE_URL == "https://raydium.test"
        assert config.api.GEYSER_ADDRESS == "geyser.internal:10000"
        assert config.api.MIN_POOL_VOLUME == 2500.0

    def test_config_file_from_env_var(self, monkeypatch, config_file):
        monkeypatch.setenv("SOLANA_POOLS_CONFIG", str(config_file))

        assert ConfigManager().database.REDIS_PORT == 6380

    def test_default_config_file(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.json").write_text('{"redis_address": "defaulthost:7000"}')

        assert ConfigManager().database.redis_address == "defaulthost:7000"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigManager(config_file=tmp_path / "missing.json")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{redis_address: ")

        with pytest.raises(ConfigError, match="Failed to read"):
            ConfigManager(config_file=path)

    def test_file_must_hold_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigError, match="JSON object"):
            ConfigManager(config_file=path)

    def test_environment_override(self):
        assert ConfigManager(environment="staging").environment == "staging"

        with pytest.raises(ConfigError):
            ConfigManager(environment="moon")

    def test_get_config_is_cached(self, config_file):
        first = reload_config(config_file=config_file)

        assert get_config() is first
        assert reload_config() is not first


class TestBaseConfig:
    """Test environment and log level handling."""

    def test_log_level_applied_to_root_logger(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        BaseConfig()

        assert logging.getLogger().level == logging.DEBUG

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        with pytest.raises(ConfigError, match="Invalid log level"):
            BaseConfig()

    def test_to_dict(self):
        assert BaseConfig().to_dict() == {"ENVIRONMENT": "local", "LOG_LEVEL": "INFO"}

    def test_required_variable_missing(self):
        with pytest.raises(ConfigError, match="GEYSER_ADDRESS"):
            BaseConfig.get_env("GEYSER_ADDRESS", required=True)
