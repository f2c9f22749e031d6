# src/fxconvert/application/rates_service.py
"""
Rates Service - Fetching Exchange Rate Snapshots

This module contains the service the converter uses to obtain fresh rates.
It holds one provider per upstream API and issues exactly one network call
per fetch against the selected provider. Errors are not retried or masked
here; the converter decides whether cached data can stand in.

Files that USE this module:
- fxconvert.application.converter_service (CurrencyConverter calls RatesFetcher.fetch)
- fxconvert.app (builds the fetcher from settings)
- tests.test_rates_service (unit tests)

Files that this module USES:
- fxconvert.adapters.providers.base (ProviderKind, RateProvider interface)
- fxconvert.domain.models (RateSnapshot)
"""
from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from fxconvert.adapters.providers.base import ProviderKind, RateProvider
from fxconvert.domain.errors import InvalidURLError
from fxconvert.domain.models import RateSnapshot

log = logging.getLogger(__name__)


class RatesFetcher:
    """
    Fetches rate snapshots from one of the configured providers.
    Tracks which provider answered last.
    """

    def __init__(self, providers: Mapping[ProviderKind, RateProvider],
                 default: ProviderKind = ProviderKind.OPEN_EXCHANGE_RATES):
        """
        Initialize the fetcher.

        Args:
            providers: Provider instance per ProviderKind
            default: Provider used when fetch() is called without one

        Raises:
            ValueError: If the default provider is not configured
        """
        if default not in providers:
            raise ValueError(f"Default provider {default.value} is not configured")
        self.providers: Dict[ProviderKind, RateProvider] = dict(providers)
        self.default = default
        self.last_used_provider: Optional[ProviderKind] = None

    def fetch(self, provider: Optional[ProviderKind] = None) -> RateSnapshot:
        """
        Fetch the latest snapshot from ``provider`` (or the default one).

        Returns:
            Decoded RateSnapshot

        Raises:
            NetworkError: Whatever the provider raised
            InvalidURLError: If the requested provider is not configured
        """
        kind = provider or self.default
        impl = self.providers.get(kind)
        if impl is None:
            raise InvalidURLError(f"No endpoint configured for {kind.display_name}")
        snapshot = impl.fetch()
        self.last_used_provider = kind
        return snapshot

    def get_last_provider(self) -> Optional[ProviderKind]:
        """
        Get the provider that returned the last successful snapshot.

        Returns:
            ProviderKind or None if nothing has been fetched yet
        """
        return self.last_used_provider
