"""Pytest configuration and fixtures."""

import json

import pytest
from pydantic import SecretStr

from cointrack.credentials import Credentials


@pytest.fixture
def api_key():
    """Test API key."""
    return "ApiKeyValue"


@pytest.fixture
def api_secret():
    """Test API secret."""
    return "SecretKeyValue"


@pytest.fixture
def credentials(api_key, api_secret):
    """Loaded credentials for the test key pair."""
    return Credentials(api_key=SecretStr(api_key), secret_key=SecretStr(api_secret))


@pytest.fixture
def keys_file(tmp_path, api_key, api_secret):
    """Key file with a single entry."""
    path = tmp_path / "test_false_keys_file.json"
    path.write_text(json.dumps([{"api_key": api_key, "secret_key": api_secret}]))
    return path


@pytest.fixture
def sample_account_response():
    """Sample /api/v3/account response data."""
    return {
        "makerCommission": 0,
        "canTrade": True,
        "accountType": "SPOT",
        "balances": [
            {"asset": "BTC", "free": "0.50000000", "locked": "0.10000000"},
            {"asset": "ETH", "free": "10.00000000", "locked": "2.00000000"},
            {"asset": "USDT", "free": "1000.00000000", "locked": "0.00000000"},
            {"asset": "BNB", "free": "0.00000000", "locked": "0.00000000"},
        ],
        "permissions": ["SPOT"],
    }
