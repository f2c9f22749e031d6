# src/fxconvert/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic.
No direct I/O dependencies - uses adapters through injected services.
"""

from fxconvert.application.converter_service import (
    ConverterEvent,
    CurrencyConverter,
    NO_CONNECTION_MESSAGE,
)
from fxconvert.application.rates_service import RatesFetcher

__all__ = [
    "ConverterEvent",
    "CurrencyConverter",
    "NO_CONNECTION_MESSAGE",
    "RatesFetcher",
]
