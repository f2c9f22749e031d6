# src/fxconvert/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Currencies (closed set of ISO-4217 codes)
- Exchange rate snapshots and their cached form
- Currency pair preferences
- Network state of the converter

Files that USE this module:
- fxconvert.application.* (converter service works on snapshots and states)
- fxconvert.adapters.* (providers build snapshots, persistence stores them)
- tests.* (tests use domain models for test data)

Files that this module USES:
- fxconvert.domain.errors (InvalidCurrencyError, InvalidRateError)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from fxconvert.domain.errors import ExpiredError, InvalidCurrencyError, InvalidRateError

DEFAULT_EXPIRATION_HOURS = 24


class Currency(str, Enum):
    """Currencies the converter knows about. Anything else is dropped on decode."""

    AED = "AED"
    ARS = "ARS"
    AUD = "AUD"
    BGN = "BGN"
    BRL = "BRL"
    CAD = "CAD"
    CHF = "CHF"
    CLP = "CLP"
    CNY = "CNY"
    COP = "COP"
    CZK = "CZK"
    DKK = "DKK"
    EGP = "EGP"
    EUR = "EUR"
    GBP = "GBP"
    HKD = "HKD"
    HUF = "HUF"
    IDR = "IDR"
    ILS = "ILS"
    INR = "INR"
    ISK = "ISK"
    JPY = "JPY"
    KRW = "KRW"
    KWD = "KWD"
    MAD = "MAD"
    MXN = "MXN"
    MYR = "MYR"
    NGN = "NGN"
    NOK = "NOK"
    NZD = "NZD"
    PHP = "PHP"
    PKR = "PKR"
    PLN = "PLN"
    QAR = "QAR"
    RON = "RON"
    SAR = "SAR"
    SEK = "SEK"
    SGD = "SGD"
    THB = "THB"
    TRY = "TRY"
    TWD = "TWD"
    UAH = "UAH"
    USD = "USD"
    VND = "VND"
    ZAR = "ZAR"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, code: Any) -> Optional["Currency"]:
        """
        Lenient parser used at deserialization boundaries.

        Args:
            code: Raw value read from JSON or storage

        Returns:
            Matching Currency, or None for anything unrecognized (including non-strings)
        """
        if not isinstance(code, str):
            return None
        try:
            return cls(code)
        except ValueError:
            return None

    @classmethod
    def from_code(cls, code: Any) -> "Currency":
        """
        Strict parser for user input.

        Raises:
            InvalidCurrencyError: If the code is not a known currency
        """
        currency = cls.parse(code.upper() if isinstance(code, str) else code)
        if currency is None:
            raise InvalidCurrencyError(f"Unknown currency code: {code!r}")
        return currency

    def __str__(self) -> str:
        return self.value


_DISPLAY_NAMES = {
    Currency.AED: "UAE Dirham",
    Currency.ARS: "Argentine Peso",
    Currency.AUD: "Australian Dollar",
    Currency.BGN: "Bulgarian Lev",
    Currency.BRL: "Brazilian Real",
    Currency.CAD: "Canadian Dollar",
    Currency.CHF: "Swiss Franc",
    Currency.CLP: "Chilean Peso",
    Currency.CNY: "Chinese Yuan",
    Currency.COP: "Colombian Peso",
    Currency.CZK: "Czech Koruna",
    Currency.DKK: "Danish Krone",
    Currency.EGP: "Egyptian Pound",
    Currency.EUR: "Euro",
    Currency.GBP: "British Pound",
    Currency.HKD: "Hong Kong Dollar",
    Currency.HUF: "Hungarian Forint",
    Currency.IDR: "Indonesian Rupiah",
    Currency.ILS: "Israeli New Shekel",
    Currency.INR: "Indian Rupee",
    Currency.ISK: "Icelandic Krona",
    Currency.JPY: "Japanese Yen",
    Currency.KRW: "South Korean Won",
    Currency.KWD: "Kuwaiti Dinar",
    Currency.MAD: "Moroccan Dirham",
    Currency.MXN: "Mexican Peso",
    Currency.MYR: "Malaysian Ringgit",
    Currency.NGN: "Nigerian Naira",
    Currency.NOK: "Norwegian Krone",
    Currency.NZD: "New Zealand Dollar",
    Currency.PHP: "Philippine Peso",
    Currency.PKR: "Pakistani Rupee",
    Currency.PLN: "Polish Zloty",
    Currency.QAR: "Qatari Riyal",
    Currency.RON: "Romanian Leu",
    Currency.SAR: "Saudi Riyal",
    Currency.SEK: "Swedish Krona",
    Currency.SGD: "Singapore Dollar",
    Currency.THB: "Thai Baht",
    Currency.TRY: "Turkish Lira",
    Currency.TWD: "New Taiwan Dollar",
    Currency.UAH: "Ukrainian Hryvnia",
    Currency.USD: "US Dollar",
    Currency.VND: "Vietnamese Dong",
    Currency.ZAR: "South African Rand",
}


@dataclass(frozen=True)
class RateSnapshot:
    """
    One fetched set of exchange rates.

    Attributes:
        base_currency: Currency every rate is expressed against (implicit rate 1.0)
        rates: Currency -> units of that currency per 1 unit of base_currency
        fetched_at: UTC time the snapshot was fetched
    """
    base_currency: Currency
    rates: Mapping[Currency, float]
    fetched_at: datetime

    def __post_init__(self) -> None:
        rates = {}
        for currency, value in dict(self.rates).items():
            if not isinstance(currency, Currency):
                raise InvalidCurrencyError(f"Snapshot rate key is not a Currency: {currency!r}")
            if not math.isfinite(value) or value <= 0:
                raise InvalidRateError(f"Invalid rate for {currency}: {value}")
            rates[currency] = float(value)
        object.__setattr__(self, "rates", MappingProxyType(rates))

    def rate_for(self, currency: Currency) -> Optional[float]:
        """
        Rate of ``currency`` relative to the base currency.

        Returns:
            The listed rate, 1.0 for an unlisted base currency, None otherwise
        """
        if currency in self.rates:
            return self.rates[currency]
        if currency == self.base_currency:
            return 1.0
        return None

    def age(self, now: Optional[datetime] = None) -> timedelta:
        now = now or datetime.now(timezone.utc)
        return now - self.fetched_at


@dataclass(frozen=True)
class CachedSnapshot:
    """
    Rate snapshot as persisted, with its expiry.

    Attributes:
        snapshot: The cached RateSnapshot
        expires_at: fetched_at + expiration window (24h by default)
    """
    snapshot: RateSnapshot
    expires_at: datetime

    @classmethod
    def for_snapshot(cls, snapshot: RateSnapshot,
                     expiration_hours: int = DEFAULT_EXPIRATION_HOURS) -> "CachedSnapshot":
        return cls(
            snapshot=snapshot,
            expires_at=snapshot.fetched_at + timedelta(hours=expiration_hours),
        )

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now < self.expires_at

    def ensure_valid(self, now: Optional[datetime] = None) -> RateSnapshot:
        """
        Return the snapshot if the entry has not expired.

        Raises:
            ExpiredError: If ``now`` is at or past ``expires_at``
        """
        if not self.is_valid(now):
            raise ExpiredError(f"Exchange rates data has expired (at {self.expires_at.isoformat()})")
        return self.snapshot


@dataclass(frozen=True)
class Preference:
    """Currency pair the user converts between."""
    from_currency: Currency = Currency.USD
    to_currency: Currency = Currency.EUR

    def swapped(self) -> "Preference":
        return Preference(from_currency=self.to_currency, to_currency=self.from_currency)


class NetworkState(str, Enum):
    """States of the cache/network decision policy."""
    ONLINE = "online"
    OFFLINE_VALID_CACHE = "offline_valid_cache"
    OFFLINE_STALE_CACHE = "offline_stale_cache"
    ERROR = "error"


@dataclass(frozen=True)
class ConnectionStatus:
    """
    Current network state plus the message shown for ERROR.

    Attributes:
        state: One of the NetworkState values
        message: Human readable error, set only when state is ERROR
    """
    state: NetworkState = NetworkState.ONLINE
    message: Optional[str] = field(default=None)

    @classmethod
    def error(cls, message: str) -> "ConnectionStatus":
        return cls(state=NetworkState.ERROR, message=message)

    @property
    def is_error(self) -> bool:
        return self.state is NetworkState.ERROR
