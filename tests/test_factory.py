"""Tests for exchange client factory."""

import json

import pytest

from cointrack.errors import MalformedCredentialsError, NotFoundError
from cointrack.exchanges.binance import BinanceClient
from cointrack.exchanges.factory import (
    EXCHANGE_CLIENTS,
    create_exchange_client,
    create_exchange_client_from_settings,
)
from cointrack.settings import Settings


class TestExchangeFactory:
    """Tests for exchange client factory."""

    def test_create_binance_client(self, credentials):
        """Test creating Binance client."""
        client = create_exchange_client("binance", credentials)
        assert isinstance(client, BinanceClient)
        assert client.credentials is credentials
        assert client.name == "binance"

    def test_sandbox_mode(self, credentials):
        """Test creating client in sandbox mode."""
        client = create_exchange_client("binance", credentials, sandbox=True)
        assert client.sandbox is True
        assert "testnet" in client.get_base_url()

    def test_proxy_configuration(self, credentials):
        """Test creating client with proxy."""
        proxy_config = {
            "url": "http://127.0.0.1:8080",
            "username": "user",
            "password": "pass",
        }
        client = create_exchange_client("binance", credentials, proxy=proxy_config)
        assert client.proxy.url == "http://127.0.0.1:8080"
        assert "user:pass@" in client.proxy.proxy_url

    def test_unsupported_exchange(self, credentials):
        """Test error for unsupported exchange."""
        with pytest.raises(ValueError, match="Unsupported exchange"):
            create_exchange_client("invalid_exchange", credentials)

    def test_case_insensitive_exchange_names(self, credentials):
        """Test that exchange names are case-insensitive."""
        client1 = create_exchange_client("BINANCE", credentials)
        client2 = create_exchange_client("binance", credentials)
        assert type(client1) == type(client2)

    def test_additional_options(self, credentials):
        """Test passing additional options."""
        client = create_exchange_client("binance", credentials, timeout=3.0, base_url="http://x")
        assert client.timeout == 3.0
        assert client.get_base_url() == "http://x"

    def test_registry(self):
        assert EXCHANGE_CLIENTS["binance"] is BinanceClient


class TestCreateFromSettings:
    """Tests for building clients from settings."""

    def test_loads_keys_from_configured_file(self, keys_file):
        settings = Settings.model_validate(
            {"exchanges": {"binance": {"keys_file": str(keys_file), "sandbox": True, "timeout": 4}}}
        )

        client = create_exchange_client_from_settings(settings, "binance")

        assert client.credentials.api_key.get_secret_value() == "ApiKeyValue"
        assert client.sandbox is True
        assert client.timeout == 4

    def test_keys_file_argument_overrides_settings(self, keys_file):
        settings = Settings.model_validate(
            {"exchanges": {"binance": {"keys_file": "does/not/exist.json"}}}
        )

        client = create_exchange_client_from_settings(settings, "binance", keys_file=str(keys_file))

        assert client.credentials.secret_key.get_secret_value() == "SecretKeyValue"

    def test_proxy_from_settings(self, keys_file):
        settings = Settings.model_validate({
            "proxy": {"enabled": True, "url": "http://proxy:3128", "username": "u", "password": "p"},
            "exchanges": {"binance": {"keys_file": str(keys_file)}},
        })

        client = create_exchange_client_from_settings(settings, "binance")

        assert client.proxy.proxy_url == "http://u:p@proxy:3128"

    def test_missing_keys_file_aborts(self, tmp_path):
        settings = Settings.model_validate(
            {"exchanges": {"binance": {"keys_file": str(tmp_path / "missing.json")}}}
        )
        with pytest.raises(NotFoundError):
            create_exchange_client_from_settings(settings, "binance")

    def test_malformed_keys_file_aborts(self, tmp_path):
        path = tmp_path / "keys.json"
        path.write_text(json.dumps([]))
        settings = Settings.model_validate({"exchanges": {"binance": {"keys_file": str(path)}}})
        with pytest.raises(MalformedCredentialsError):
            create_exchange_client_from_settings(settings, "binance")

    def test_unconfigured_exchange(self):
        with pytest.raises(ValueError, match="not configured"):
            create_exchange_client_from_settings(Settings(), "kraken")

    def test_disabled_exchange(self, keys_file):
        settings = Settings.model_validate(
            {"exchanges": {"binance": {"enabled": False, "keys_file": str(keys_file)}}}
        )
        with pytest.raises(ValueError, match="disabled"):
            create_exchange_client_from_settings(settings, "binance")

    def test_unknown_client_option_rejected(self, credentials):
        with pytest.raises(TypeError):
            create_exchange_client("binance", credentials, timout=3)
