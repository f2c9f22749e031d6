# src/fxconvert/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from fxconvert.domain.models import (
    CachedSnapshot,
    ConnectionStatus,
    Currency,
    NetworkState,
    Preference,
    RateSnapshot,
)
from fxconvert.domain.errors import (
    ConfigurationError,
    DomainError,
    ExpiredError,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidDataError,
    InvalidRateError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    NoConnectionError,
    NoDataError,
    StorageError,
    TransportError,
)

__all__ = [
    "Currency",
    "RateSnapshot",
    "CachedSnapshot",
    "Preference",
    "NetworkState",
    "ConnectionStatus",
    "DomainError",
    "InvalidRateError",
    "InvalidCurrencyError",
    "InvalidAmountError",
    "ConfigurationError",
    "NetworkError",
    "NoConnectionError",
    "InvalidURLError",
    "InvalidResponseError",
    "InvalidDataError",
    "NoDataError",
    "StorageError",
    "ExpiredError",
    "TransportError",
]
