# src/fxconvert/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for external exchange rate APIs.
All providers implement the RateProvider interface.
"""

from fxconvert.adapters.providers.base import ProviderKind, RateProvider
from fxconvert.adapters.providers.decoding import snapshot_from_payload
from fxconvert.adapters.providers.factory import build_provider
from fxconvert.adapters.providers.http_provider import HttpRateProvider

__all__ = [
    "ProviderKind",
    "RateProvider",
    "HttpRateProvider",
    "build_provider",
    "snapshot_from_payload",
]
