# tests/test_app.py
"""
CLI Tests - Command Dispatch and Exit Codes

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxconvert.app (main, exit codes)
- fxconvert.adapters.persistence.file_store (RateStore to seed the cache)
- unittest.mock (patching HTTP calls)
- pytest (testing framework)
"""
import threading
from unittest.mock import Mock, patch

import pytest
import requests

from fxconvert.adapters.persistence.file_store import RateStore
from fxconvert.app import EXIT_NO_RATES, EXIT_OK, EXIT_USAGE, _watch, build_converter, main
from fxconvert.application.converter_service import ConverterEvent
from fxconvert.config.settings import load_settings
from fxconvert.domain.models import Currency, Preference


@pytest.fixture
def seeded_store(settings_env, usd_snapshot):
    store = RateStore(settings_env / "data" / "store.json")
    store.save(usd_snapshot)
    return store


class TestMain:
    def test_currencies_needs_no_configuration(self, clean_env, capsys):
        assert main(["currencies"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "USD  US Dollar" in out

    def test_missing_configuration(self, clean_env, capsys):
        assert main(["status"]) == EXIT_USAGE
        assert "Configuration error" in capsys.readouterr().err

    def test_offline_convert_from_cache(self, seeded_store, capsys):
        assert main(["--offline", "convert", "100"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Offline: using cached exchange rates" in out
        assert "100 USD = 85 EUR" in out

    def test_offline_convert_with_pair(self, seeded_store, capsys):
        assert main(["--offline", "convert", "85", "--from", "eur", "--to", "gbp"]) == EXIT_OK
        assert "85 EUR = 73 GBP" in capsys.readouterr().out
        assert seeded_store.load_preference() == Preference(Currency.EUR, Currency.GBP)

    def test_offline_without_cache(self, settings_env, capsys):
        assert main(["--offline", "convert", "100"]) == EXIT_NO_RATES
        assert "No internet connection and no cached data available" in capsys.readouterr().out

    def test_invalid_currency(self, seeded_store, capsys):
        assert main(["--offline", "convert", "100", "--to", "XYZ"]) == EXIT_USAGE
        assert "XYZ" in capsys.readouterr().err

    def test_invalid_amount(self, seeded_store, capsys):
        assert main(["--offline", "convert", "12abc"]) == EXIT_USAGE

    def test_swap(self, seeded_store, capsys):
        assert main(["--offline", "swap"]) == EXIT_OK
        assert "Pair: EUR -> USD" in capsys.readouterr().out

    def test_status(self, seeded_store, capsys):
        assert main(["--offline", "status"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Rates: base USD, 2 currencies" in out
        assert "Provider: Open Exchange Rates API" in out

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    @patch("fxconvert.adapters.connectivity.monitor.requests.head")
    def test_refresh_online(self, mock_head, mock_get, settings_env, capsys):
        mock_head.return_value = Mock(status_code=200)
        response = Mock(status_code=200, content=b"{}",
                        headers={"Content-Type": "application/json"})
        response.json.return_value = {"base": "USD", "rates": {"EUR": 0.9}}
        mock_get.return_value = response

        assert main(["refresh"]) == EXIT_OK

        assert "Online: live exchange rates" in capsys.readouterr().out
        cached = RateStore(settings_env / "data" / "store.json").load()
        assert cached.rates[Currency.EUR] == 0.9

    def test_undecodable_store_does_not_crash(self, settings_env, capsys):
        store_file = settings_env / "data" / "store.json"
        store_file.parent.mkdir(parents=True, exist_ok=True)
        store_file.write_bytes(b"\xff\xfe\x00garbage")

        assert main(["--offline", "status"]) == EXIT_NO_RATES
        assert "No internet connection and no cached data available" in capsys.readouterr().out
        assert store_file.with_suffix(".json.corrupt").exists()


class TestWatch:
    def test_offline_watch_is_rejected(self, seeded_store, capsys):
        assert main(["--offline", "watch"]) == EXIT_USAGE
        assert "watch needs network access" in capsys.readouterr().err

    @patch("fxconvert.adapters.connectivity.monitor.requests.head")
    def test_prints_state_changes_while_running(self, mock_head, seeded_store, capsys):
        mock_head.side_effect = requests.exceptions.ConnectionError("no route")
        converter, probe = build_converter(load_settings())
        converter.start()

        stop = threading.Event()
        converter.subscribe(
            lambda event, conv: stop.set() if event is ConverterEvent.STATUS else None
        )
        guard = threading.Timer(5.0, stop.set)
        guard.start()
        try:
            assert _watch(converter, probe, stop) == EXIT_OK
        finally:
            guard.cancel()

        out = capsys.readouterr().out
        assert "Online: live exchange rates" in out
        assert "Offline: using cached exchange rates" in out
        assert probe._thread is None
