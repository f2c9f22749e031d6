# src/fxconvert/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations, network failures and configuration problems.
Each NetworkError carries the message shown to the user when no cached
data can mask it.
"""
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class InvalidRateError(DomainError):
    """Raised when a rate value is invalid (e.g., negative or zero)."""
    pass


class InvalidCurrencyError(DomainError):
    """Raised when a currency code is not part of the known set."""
    pass


class InvalidAmountError(DomainError):
    """Raised when an amount entered by the user cannot be converted."""
    pass


class ConfigurationError(DomainError):
    """Raised when required settings (API keys) are missing or invalid."""
    pass


class NetworkError(DomainError):
    """Base class for failures while fetching rates."""

    default_message = "Network request failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class NoConnectionError(NetworkError):
    default_message = "No internet connection"


class InvalidURLError(NetworkError):
    default_message = "Invalid URL"


class InvalidResponseError(NetworkError):
    default_message = "Server returned an invalid response"


class InvalidDataError(NetworkError):
    default_message = "Could not parse server response"


class NoDataError(NetworkError):
    default_message = "Server returned no data"


class ExpiredError(NetworkError):
    default_message = "Exchange rates data has expired"


class TransportError(NetworkError):
    """Wraps the underlying transport exception (connection reset, timeout, ...)."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause


class StorageError(DomainError):
    """Raised when the local store cannot be written."""
    pass
