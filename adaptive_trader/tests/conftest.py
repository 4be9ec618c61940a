"""Shared pytest fixtures."""

import pytest

from adaptive_trader.config import TraderConfig
from adaptive_trader.storage import SQLiteKVStore, StateStore


@pytest.fixture
def config():
    """Default configuration with dummy credentials."""
    cfg = TraderConfig()
    cfg.credentials.alpaca_api_key = "test-key"
    cfg.credentials.alpaca_secret_key = "test-secret"
    return cfg


@pytest.fixture
def kv(tmp_path):
    """Temporary SQLite key-value store."""
    return SQLiteKVStore(str(tmp_path / "state" / "trader.db"))


@pytest.fixture
def store(kv):
    """StateStore over the temporary KV store."""
    return StateStore(kv, max_trades=100, max_history=1000)
