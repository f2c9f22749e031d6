# tests/conftest.py
"""
Shared Test Fixtures

Provides rate snapshots, a RateStore in a temporary directory and settings
that never read the developer's real environment.

Files that USE this module:
- pytest (fixtures are injected into all test modules)

Files that this module USES:
- fxconvert.domain.models (Currency, RateSnapshot)
- fxconvert.adapters.persistence.file_store (RateStore)
"""
from datetime import datetime, timedelta, timezone

import pytest

from fxconvert.adapters.persistence.file_store import RateStore
from fxconvert.domain.models import Currency, RateSnapshot

TEST_KEYS = {
    "EXCHANGE_RATES_API_KEY": "erapi-test-key-123",
    "OPEN_EXCHANGE_RATES_API_KEY": "oxr-test-app-id-456",
}


@pytest.fixture
def now():
    return datetime.now(timezone.utc)


@pytest.fixture
def usd_snapshot(now):
    return RateSnapshot(
        base_currency=Currency.USD,
        rates={Currency.EUR: 0.85, Currency.GBP: 0.73},
        fetched_at=now,
    )


@pytest.fixture
def stale_snapshot(now):
    return RateSnapshot(
        base_currency=Currency.USD,
        rates={Currency.EUR: 0.80},
        fetched_at=now - timedelta(hours=25),
    )


@pytest.fixture
def store(tmp_path):
    return RateStore(tmp_path / "store.json")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no provider keys in the environment."""
    for name in list(TEST_KEYS) + ["RATES_PROVIDER", "STORE_FILE", "HTTP_TIMEOUT_SECONDS"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings_env(clean_env, monkeypatch):
    """Environment with valid keys and a store file inside tmp_path."""
    for name, value in TEST_KEYS.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setenv("STORE_FILE", str(clean_env / "data" / "store.json"))
    return clean_env
