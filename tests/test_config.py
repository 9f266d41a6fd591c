"""Tests for settings and startup validation."""

import pytest
from unittest.mock import Mock

from stock_portfolio.api.app import create_app
from stock_portfolio.config import ConfigurationError, Settings, validate_settings
from stock_portfolio.data.market.client import FinnhubClient


class TestValidateSettings:
    """Tests for the startup configuration check."""

    @pytest.mark.parametrize("api_key", ["", "   ", "\t\n"])
    def test_missing_key_is_fatal(self, api_key):
        settings = Settings(finnhub_api_key=api_key, _env_file=None)

        with pytest.raises(ConfigurationError, match="FINNHUB_API_KEY"):
            validate_settings(settings)

    def test_present_key_passes(self):
        settings = Settings(finnhub_api_key="abc123", _env_file=None)

        assert validate_settings(settings) is settings

    def test_key_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("FINNHUB_API_KEY", "from-env")

        settings = Settings(_env_file=None)

        assert settings.finnhub_api_key == "from-env"

    def test_app_refuses_to_start_without_key(self):
        """No app is built when the key is missing."""
        settings = Settings(finnhub_api_key="", _env_file=None)

        with pytest.raises(ConfigurationError):
            create_app(settings=settings, market_data=Mock(spec=FinnhubClient))
