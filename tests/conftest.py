"""Shared pytest fixtures."""

import pytest

from exchange_core.exchange import BinanceExchange
from tests import MockBinanceClient


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "api: marks tests that require API connection"
    )


@pytest.fixture
def mock_binance_api():
    """Provide canned Binance responses."""
    return MockBinanceClient()


@pytest.fixture
def account_client(mock_binance_api):
    return mock_binance_api.as_mock()


@pytest.fixture
def market_client(mock_binance_api):
    return mock_binance_api.as_mock()


@pytest.fixture
def binance(account_client, market_client):
    """Binance adapter wired to mock clients."""
    return BinanceExchange(account_client, market_client)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with none of the hub's variables set."""
    for key in ("EXCHANGE", "EXCHANGE_API_KEY", "EXCHANGE_SECRET_KEY", "EXCHANGE_TESTNET",
                "ENCRYPT_API_KEYS", "STREAM_SYMBOL", "STREAM_QUEUE_SIZE", "LOG_LEVEL",
                "LOG_FILE", "ENVIRONMENT", "DEBUG"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
