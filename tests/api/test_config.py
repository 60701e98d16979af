"""Tests for configuration classes."""

import os
import pytest
from decimal import Decimal
from unittest.mock import patch


class TestCORSConfig:
    """Tests for CORSConfig class."""

    def test_cors_default_origins(self):
        """Default origin is the local API host."""
        with patch.dict(os.environ, {}, clear=True):
            from config import CORSConfig

            config = CORSConfig()

            assert config.allowed_origins == ["http://localhost:8000"]

    def test_cors_parses_env_var_with_whitespace(self):
        """Origins are comma separated and stripped."""
        env_origins = "  http://example.com  ,http://localhost:3000,, "
        with patch.dict(os.environ, {"CORS_ORIGINS": env_origins}):
            from config import _parse_cors_origins

            assert _parse_cors_origins() == ["http://example.com", "http://localhost:3000"]

    def test_cors_allows_everything_else(self):
        from config import CORSConfig

        config = CORSConfig()

        assert config.allow_credentials is True
        assert config.allow_methods == ["*"]
        assert config.allow_headers == ["*"]


class TestRateLimitConfig:
    """Tests for RateLimitConfig class."""

    def test_rate_limit_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is True
            assert config.requests_per_minute == 60

    def test_rate_limit_from_env(self):
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": "FALSE", "RATE_LIMIT_RPM": "120"}):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is False
            assert config.requests_per_minute == 120

    @pytest.mark.parametrize("value", ["0", "no", "off"])
    def test_only_true_enables(self, value):
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": value}):
            from config import RateLimitConfig

            assert RateLimitConfig().enabled is False


class TestRedisConfig:
    """Tests for RedisConfig class."""

    def test_redis_url_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import RedisConfig

            assert RedisConfig().url == "redis://localhost:6379/0"

    def test_redis_url_from_env(self):
        env = {
            "REDIS_HOST": "ledger.internal",
            "REDIS_PORT": "6380",
            "REDIS_DB": "2",
            "REDIS_PASSWORD": "hunter2",
        }
        with patch.dict(os.environ, env, clear=True):
            from config import RedisConfig

            assert RedisConfig().url == "redis://:hunter2@ledger.internal:6380/2"


class TestLedgerConfig:
    """Tests for LedgerConfig class."""

    def test_ledger_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import LedgerConfig

            config = LedgerConfig()

            assert config.backend == "memory"
            assert config.starting_gold_coins == Decimal("1000")
            assert config.starting_sweep_coins == Decimal("10")

    def test_ledger_from_env(self):
        env = {
            "LEDGER_BACKEND": "Redis",
            "STARTING_GOLD_COINS": "250.5",
            "STARTING_SWEEP_COINS": "0",
        }
        with patch.dict(os.environ, env, clear=True):
            from config import LedgerConfig

            config = LedgerConfig()

            assert config.backend == "redis"
            assert config.starting_gold_coins == Decimal("250.5")
            assert config.starting_sweep_coins == Decimal("0")


class TestEngineConfig:
    """Tests for EngineConfig class."""

    def test_unseeded_by_default(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import EngineConfig

            assert EngineConfig().seed is None

    def test_blank_seed_is_unseeded(self):
        with patch.dict(os.environ, {"TABLE_GAMES_SEED": "  "}):
            from config import EngineConfig

            assert EngineConfig().seed is None

    def test_seed_from_env(self):
        with patch.dict(os.environ, {"TABLE_GAMES_SEED": "1234"}):
            from config import EngineConfig

            assert EngineConfig().seed == 1234


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_logging_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import LoggingConfig

            config = LoggingConfig()

            assert config.level == "INFO"
            assert "%(name)s" in config.format

    def test_level_is_uppercased(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            from config import LoggingConfig

            assert LoggingConfig().level == "DEBUG"


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_app_config_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import AppConfig

            config = AppConfig()

            assert config.debug is False
            assert config.host == "0.0.0.0"
            assert config.port == 8000

    def test_app_config_debug_from_env(self):
        with patch.dict(os.environ, {"DEBUG": "true"}):
            from config import AppConfig

            assert AppConfig().debug is True

    def test_app_config_has_nested_configs(self):
        from config import (
            AppConfig,
            CORSConfig,
            EngineConfig,
            LedgerConfig,
            LoggingConfig,
            RateLimitConfig,
            RedisConfig,
        )

        config = AppConfig()

        assert isinstance(config.redis, RedisConfig)
        assert isinstance(config.ledger, LedgerConfig)
        assert isinstance(config.engine, EngineConfig)
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.cors, CORSConfig)
        assert isinstance(config.rate_limit, RateLimitConfig)

    def test_app_config_frozen(self):
        import dataclasses

        from config import AppConfig

        config = AppConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 9000
