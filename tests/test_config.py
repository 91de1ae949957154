"""Tests for settings loading."""

import os

import pytest
from pydantic import ValidationError

from cointrack.config import load_settings
from cointrack.settings import ExchangeSettings, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("COINTRACK_"):
            monkeypatch.delenv(key, raising=False)


def test_defaults_when_no_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    settings = load_settings()

    assert settings.env == "dev"
    assert settings.exchanges["binance"].timeout == 10.0
    assert settings.exchanges["binance"].keys_file == "keys/keys.json"
    assert settings.wallet.exchange == "binance"


def test_yaml_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(
        "env: prod\n"
        "exchanges:\n"
        "  binance:\n"
        "    sandbox: true\n"
        "    keys_file: /secrets/binance.json\n"
        "    timeout: 5\n"
        "wallet:\n"
        "  coins: [BTC, ETH]\n"
    )

    settings = load_settings(path)

    assert settings.env == "prod"
    assert settings.exchanges["binance"].sandbox is True
    assert settings.exchanges["binance"].keys_file == "/secrets/binance.json"
    assert settings.wallet.coins == ["BTC", "ETH"]


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.yml"
    path.write_text("exchanges:\n  binance:\n    sandbox: false\n")
    monkeypatch.setenv("COINTRACK_EXCHANGES__BINANCE__SANDBOX", "true")
    monkeypatch.setenv("COINTRACK_EXCHANGES__BINANCE__TIMEOUT", "2.5")

    settings = load_settings(path)

    assert settings.exchanges["binance"].sandbox is True
    assert settings.exchanges["binance"].timeout == 2.5


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "other.yml"
    path.write_text("env: staging\n")
    monkeypatch.setenv("COINTRACK_CONFIG", str(path))

    assert load_settings().env == "staging"


def test_explicit_missing_file(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        load_settings(tmp_path / "missing.yml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("env: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_settings(path)


def test_root_must_be_mapping(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_settings(path)


def test_unknown_key_rejected(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("exchanges:\n  binance:\n    api_secret: oops\n")
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_settings(path)


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        ExchangeSettings(timeout=0)


def test_redacted_masks_proxy_password():
    settings = Settings.model_validate(
        {"proxy": {"enabled": True, "url": "http://proxy:3128", "password": "hunter2"}}
    )

    data = settings.redacted()

    assert data["proxy"]["password"] == "***"
    assert "hunter2" not in str(data)


def test_exchange_options_key_rejected(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("exchanges:\n  binance:\n    options:\n      timeout: 3\n")
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_settings(path)


def test_misspelled_exchange_key_rejected():
    with pytest.raises(ValidationError):
        ExchangeSettings.model_validate({"timout": 3})
