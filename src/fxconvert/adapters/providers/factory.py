# src/fxconvert/adapters/providers/factory.py
"""
Provider Factory - Build the configured rate provider

Files that USE this module:
- fxconvert.app (composition root builds the provider from settings)
- tests.test_providers (unit tests)

Files that this module USES:
- fxconvert.adapters.providers.base (ProviderKind)
- fxconvert.adapters.providers.http_provider (HttpRateProvider)
- fxconvert.config.settings (Settings type)
"""
from __future__ import annotations

from typing import Optional

from fxconvert.adapters.providers.base import ProviderKind
from fxconvert.adapters.providers.http_provider import HttpRateProvider
from fxconvert.config.settings import Settings


def build_provider(settings: Settings, kind: Optional[ProviderKind] = None) -> HttpRateProvider:
    """
    Create an HTTP provider for ``kind`` (or the one named by RATES_PROVIDER).

    Args:
        settings: Loaded application settings
        kind: Optional explicit provider, overriding settings.rates_provider

    Returns:
        Configured HttpRateProvider
    """
    kind = kind or ProviderKind(settings.rates_provider)
    return HttpRateProvider(
        kind=kind,
        api_key=settings.api_key_for(kind.value),
        timeout=settings.http_timeout_seconds,
    )
