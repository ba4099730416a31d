"""
Tests for configuration loading
"""

import json

import pytest

from airbnb_api import ClientConfig, ConfigError


class TestClientConfig:

    def test_defaults(self):
        config = ClientConfig(api_key="k")

        assert config.currency == "USD"
        assert config.locale == "en"
        assert config.availability_count == 3
        assert config.reviews_role == "host"
        assert config.availability_url == "https://www.airbnb.com/api/v2/calendar_months"

    def test_from_file(self, tmp_path):
        path = tmp_path / "secrets.json"
        path.write_text(json.dumps({
            "API_KEY": "secret",
            "DEFAULT_REQUEST_CONFIGS": {
                "headers": {"User-Agent": "test-agent"},
                "proxy": "http://localhost:8080",
                "timeout": 5,
            },
        }))

        config = ClientConfig.from_file(path)

        assert config.api_key == "secret"
        assert config.headers["User-Agent"] == "test-agent"
        assert "Accept" in config.headers
        assert config.proxy == "http://localhost:8080"
        assert config.request_timeout == 5.0

    def test_from_file_missing_key(self, tmp_path):
        path = tmp_path / "secrets.json"
        path.write_text(json.dumps({"DEFAULT_REQUEST_CONFIGS": {}}))

        with pytest.raises(ConfigError):
            ClientConfig.from_file(path)

    def test_from_file_not_found(self, tmp_path):
        with pytest.raises(ConfigError):
            ClientConfig.from_file(tmp_path / "missing.json")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AIRBNB_API_KEY", "env-key")
        monkeypatch.setenv("AIRBNB_CURRENCY", "EUR")
        monkeypatch.setenv("AIRBNB_REQUEST_TIMEOUT", "12.5")
        monkeypatch.delenv("AIRBNB_PROXY", raising=False)

        config = ClientConfig.from_env()

        assert config.api_key == "env-key"
        assert config.currency == "EUR"
        assert config.locale == "en"
        assert config.request_timeout == 12.5
        assert config.proxy is None

    def test_from_env_without_key(self, monkeypatch):
        monkeypatch.delenv("AIRBNB_API_KEY", raising=False)

        with pytest.raises(ConfigError):
            ClientConfig.from_env()

    def test_from_env_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("AIRBNB_API_KEY", "env-key")
        monkeypatch.setenv("AIRBNB_REQUEST_TIMEOUT", "soon")

        with pytest.raises(ConfigError):
            ClientConfig.from_env()
