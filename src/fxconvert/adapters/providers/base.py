# src/fxconvert/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Providers

This module defines the provider catalogue (which upstream APIs exist, their
endpoints and default base currency) and the abstract base class every
provider implementation follows.

Files that USE this module:
- fxconvert.adapters.providers.http_provider (HttpRateProvider implements RateProvider)
- fxconvert.adapters.providers.factory (builds providers by ProviderKind)
- fxconvert.application.rates_service (depends on the RateProvider interface)
- tests.test_providers (unit tests)

Files that this module USES:
- fxconvert.domain.models (Currency, RateSnapshot)
"""
from abc import ABC, abstractmethod
from enum import Enum

from fxconvert.domain.models import Currency, RateSnapshot


class ProviderKind(str, Enum):
    EXCHANGE_RATES_API = "exchange_rates_api"
    OPEN_EXCHANGE_RATES = "open_exchange_rates"

    @property
    def display_name(self) -> str:
        if self is ProviderKind.EXCHANGE_RATES_API:
            return "Exchange Rates API"
        return "Open Exchange Rates API"

    @property
    def base_currency(self) -> Currency:
        """Base currency the provider quotes against on its free tier."""
        if self is ProviderKind.EXCHANGE_RATES_API:
            return Currency.EUR
        return Currency.USD

    def latest_endpoint_url(self, api_key: str) -> str:
        if self is ProviderKind.EXCHANGE_RATES_API:
            return f"https://api.exchangeratesapi.io/latest?api_key={api_key}"
        return f"https://openexchangerates.org/api/latest.json?app_id={api_key}"


class RateProvider(ABC):
    kind: ProviderKind

    @abstractmethod
    def fetch(self) -> RateSnapshot:
        """
        Fetch the latest rate table.

        Raises:
            NetworkError: Any subclass describing why the fetch failed
        """
        raise NotImplementedError
