# tests/test_providers.py
"""
Provider Tests - Unit Tests for the HTTP Rate Provider

This module contains unit tests for HttpRateProvider and the provider
catalogue. It tests URL building, request headers, response decoding and the
mapping of every failure to its NetworkError subclass.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxconvert.adapters.providers (ProviderKind, HttpRateProvider, build_provider)
- fxconvert.domain.errors (NetworkError subclasses)
- unittest.mock (Mock for API mocking)
- pytest (testing framework)
"""
from unittest.mock import Mock, patch

import pytest
import requests

from fxconvert.adapters.providers.base import ProviderKind
from fxconvert.adapters.providers.factory import build_provider
from fxconvert.adapters.providers.http_provider import JSON_HEADERS, HttpRateProvider
from fxconvert.config.settings import load_settings
from fxconvert.domain.errors import (
    ExpiredError,
    InvalidDataError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    NoDataError,
    TransportError,
)
from fxconvert.domain.models import Currency


def _response(status_code=200, payload=None, content=b'{"rates": {}}',
              content_type="application/json; charset=utf-8"):
    resp = Mock()
    resp.status_code = status_code
    resp.headers = {"Content-Type": content_type} if content_type else {}
    resp.content = content
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


class TestProviderKind:
    def test_open_exchange_rates_endpoint(self):
        url = ProviderKind.OPEN_EXCHANGE_RATES.latest_endpoint_url("abc")
        assert url == "https://openexchangerates.org/api/latest.json?app_id=abc"
        assert ProviderKind.OPEN_EXCHANGE_RATES.base_currency is Currency.USD

    def test_exchange_rates_api_endpoint(self):
        url = ProviderKind.EXCHANGE_RATES_API.latest_endpoint_url("abc")
        assert url == "https://api.exchangeratesapi.io/latest?api_key=abc"
        assert ProviderKind.EXCHANGE_RATES_API.base_currency is Currency.EUR

    def test_display_names(self):
        assert ProviderKind.EXCHANGE_RATES_API.display_name == "Exchange Rates API"
        assert ProviderKind.OPEN_EXCHANGE_RATES.display_name == "Open Exchange Rates API"


class TestHttpRateProvider:
    def test_init_builds_url_from_key(self):
        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123", timeout=5)
        assert provider.url.endswith("app_id=key-123")
        assert provider.timeout == 5

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_fetch_success(self, mock_get):
        mock_get.return_value = _response(payload={
            "base": "USD",
            "rates": {"EUR": 0.85, "GBP": 0.73, "FAKE": 1.0},
            "timestamp": 1641234567,
        })

        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123")
        snap = provider.fetch()

        assert snap.base_currency is Currency.USD
        assert dict(snap.rates) == {Currency.EUR: 0.85, Currency.GBP: 0.73}
        mock_get.assert_called_once_with(provider.url, headers=JSON_HEADERS, timeout=10)

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_sends_json_headers(self, mock_get):
        mock_get.return_value = _response(payload={"base": "EUR", "rates": {}})
        HttpRateProvider(ProviderKind.EXCHANGE_RATES_API, "key-123").fetch()
        headers = mock_get.call_args.kwargs["headers"]
        assert headers["Accept"] == "application/json"
        assert headers["Content-Type"] == "application/json"

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_unknown_base_uses_provider_default(self, mock_get):
        mock_get.return_value = _response(payload={"base": "XXX", "rates": {"USD": 1.1}})
        snap = HttpRateProvider(ProviderKind.EXCHANGE_RATES_API, "key-123").fetch()
        assert snap.base_currency is Currency.EUR

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_uses_session_when_given(self, mock_get):
        session = Mock()
        session.get.return_value = _response(payload={"base": "USD", "rates": {}})
        HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123", session=session).fetch()
        session.get.assert_called_once()
        mock_get.assert_not_called()

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_empty_key_is_invalid_url(self, mock_get):
        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "")
        with pytest.raises(InvalidURLError, match="app_id"):
            provider.fetch()
        mock_get.assert_not_called()

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_malformed_url(self, mock_get):
        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "k", base_url="not a url")
        with pytest.raises(InvalidURLError):
            provider.fetch()
        mock_get.assert_not_called()

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_transport_error(self, mock_get):
        cause = requests.exceptions.ConnectionError("connection refused")
        mock_get.side_effect = cause

        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123")
        with pytest.raises(TransportError, match="connection refused") as exc_info:
            provider.fetch()
        assert exc_info.value.cause is cause

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_timeout_is_transport_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()
        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123")
        with pytest.raises(TransportError):
            provider.fetch()

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_non_2xx_status(self, mock_get):
        mock_get.return_value = _response(status_code=401, payload={"error": True})
        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123")
        with pytest.raises(InvalidResponseError, match="401"):
            provider.fetch()

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_non_json_content_type(self, mock_get):
        mock_get.return_value = _response(content=b"<html>", content_type="text/html")
        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123")
        with pytest.raises(InvalidResponseError, match="text/html"):
            provider.fetch()

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_empty_body(self, mock_get):
        mock_get.return_value = _response(content=b"")
        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123")
        with pytest.raises(NoDataError):
            provider.fetch()

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_invalid_json(self, mock_get):
        mock_get.return_value = _response(payload=ValueError("Expecting value"))
        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123")
        with pytest.raises(InvalidDataError, match="Could not parse server response"):
            provider.fetch()

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_wrong_shape(self, mock_get):
        mock_get.return_value = _response(payload={"base": "USD"})
        provider = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123")
        with pytest.raises(InvalidDataError):
            provider.fetch()

    @patch("fxconvert.adapters.providers.http_provider.requests.get")
    def test_missing_content_type_is_accepted(self, mock_get):
        mock_get.return_value = _response(payload={"base": "USD", "rates": {"EUR": 0.9}},
                                          content_type=None)
        snap = HttpRateProvider(ProviderKind.OPEN_EXCHANGE_RATES, "key-123").fetch()
        assert snap.rates[Currency.EUR] == 0.9

    def test_all_failures_are_network_errors(self):
        for error in (InvalidURLError, InvalidResponseError, InvalidDataError, NoDataError):
            assert issubclass(error, NetworkError)
        assert issubclass(TransportError, NetworkError)


class TestBuildProvider:
    def test_uses_configured_provider(self, settings_env):
        settings = load_settings(RATES_PROVIDER="exchange_rates_api", HTTP_TIMEOUT_SECONDS=7)
        provider = build_provider(settings)
        assert provider.kind is ProviderKind.EXCHANGE_RATES_API
        assert provider.url.endswith("api_key=erapi-test-key-123")
        assert provider.timeout == 7

    def test_explicit_kind_overrides_settings(self, settings_env):
        settings = load_settings()
        provider = build_provider(settings, ProviderKind.OPEN_EXCHANGE_RATES)
        assert provider.url.endswith("app_id=oxr-test-app-id-456")

    def test_default_messages(self):
        assert str(NoDataError()) == "Server returned no data"
        assert str(ExpiredError()) == "Exchange rates data has expired"
        assert str(InvalidURLError("bad key")) == "bad key"
