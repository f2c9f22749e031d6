# src/fxconvert/application/converter_service.py
"""
Converter Service - Cache/Network Policy and Currency Conversion

This module coordinates the converter state: which rate table is in use, the
selected currency pair, the entered amount and the converted result. It also
owns the network policy deciding between live data, cached data, a stale
cache warning and a hard error.

States:
- ONLINE: connected; rates are live or a still-valid cache
- OFFLINE_VALID_CACHE: disconnected (or the fetch failed) and a valid cache is in use
- OFFLINE_STALE_CACHE: disconnected and the cache has expired or is missing
- ERROR(message): no live data and no valid cache

Fetch errors are always compared against the cache first; only the joint
absence of live data and a valid cache surfaces an ERROR.

Files that USE this module:
- fxconvert.app (CLI commands drive the converter)
- tests.test_converter_service (unit tests)

Files that this module USES:
- fxconvert.application.rates_service (RatesFetcher for network fetches)
- fxconvert.adapters.persistence.file_store (RateStore for cache and preferences)
- fxconvert.adapters.connectivity.monitor (ConnectivityMonitor for reachability)
- fxconvert.adapters.formatting.formatter (display formatting of amounts)
- fxconvert.shared.validators (amount parsing)
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, List, Optional

from fxconvert.adapters.connectivity.monitor import ConnectivityMonitor
from fxconvert.adapters.formatting.formatter import format_amount_input, format_converted
from fxconvert.adapters.persistence.file_store import RateStore
from fxconvert.application.rates_service import RatesFetcher
from fxconvert.domain.errors import DomainError, InvalidAmountError, NoConnectionError, StorageError
from fxconvert.domain.models import (
    ConnectionStatus,
    Currency,
    NetworkState,
    Preference,
    RateSnapshot,
)
from fxconvert.shared.validators import normalize_amount, parse_amount

logger = logging.getLogger(__name__)

NO_CONNECTION_MESSAGE = "No internet connection and no cached data available"


class ConverterEvent(str, Enum):
    STATUS = "status"
    SNAPSHOT = "snapshot"
    PREFERENCE = "preference"
    CONVERTED = "converted"


ConverterListener = Callable[[ConverterEvent, "CurrencyConverter"], None]


class CurrencyConverter:
    """
    Converter state holder and network policy.

    Services are injected; nothing here is a global. Listeners registered with
    subscribe() are called synchronously after every change, in registration
    order, with the event kind and the converter itself.
    """

    def __init__(self, fetcher: RatesFetcher, store: RateStore, monitor: ConnectivityMonitor):
        """
        Initialize converter with its collaborators.

        Args:
            fetcher: Service issuing network fetches
            store: Local cache and preference store
            monitor: Connectivity signal source
        """
        self.fetcher = fetcher
        self.store = store
        self.monitor = monitor

        self.snapshot: Optional[RateSnapshot] = None
        self.status = ConnectionStatus()
        self.preference = Preference()
        self.amount: float = 0.0
        self.converted_amount: float = 0.0
        self._amount_text = "0"

        self._listeners: List[ConverterListener] = []
        self._state_lock = threading.RLock()
        self._fetch_lock = threading.Lock()
        self._started = False

    # --- events ---

    def subscribe(self, listener: ConverterListener) -> None:
        self._listeners.append(listener)

    def _emit(self, event: ConverterEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception:
                logger.exception("Converter listener %r failed on %s", listener, event.value)

    def _set_status(self, status: ConnectionStatus) -> None:
        with self._state_lock:
            changed = status != self.status
            self.status = status
        if changed:
            logger.info("Network state: %s%s", status.state.value,
                        f" ({status.message})" if status.message else "")
            self._emit(ConverterEvent.STATUS)

    def _set_snapshot(self, snapshot: RateSnapshot) -> None:
        with self._state_lock:
            self.snapshot = snapshot
        self._emit(ConverterEvent.SNAPSHOT)
        self.convert()

    # --- lifecycle ---

    def start(self) -> ConnectionStatus:
        """
        Resolve the initial state and start listening to connectivity changes.

        1. Load the currency preference (USD -> EUR when absent)
        2. A valid cache is used whatever the connectivity (ONLINE or OFFLINE_VALID_CACHE)
        3. Otherwise fetch when connected, or go to ERROR when not

        Returns:
            The resolved ConnectionStatus
        """
        if self._started:
            return self.status
        self._started = True

        preference = self.store.load_preference()
        if preference is not None:
            self.preference = preference
            logger.info("Loaded currency preference %s -> %s",
                        preference.from_currency, preference.to_currency)
        else:
            logger.info("No stored currency preference, using %s -> %s",
                        self.preference.from_currency, self.preference.to_currency)

        self._load_exchange_rates()
        self.monitor.subscribe(self.on_connectivity_changed)
        return self.status

    def _load_exchange_rates(self) -> None:
        cached = self.store.load()
        if cached is not None:
            logger.info("Using cached rates fetched at %s", cached.fetched_at.isoformat())
            self._set_snapshot(cached)
            self._set_status(ConnectionStatus(
                NetworkState.ONLINE if self.monitor.is_connected else NetworkState.OFFLINE_VALID_CACHE
            ))
            return

        if self.monitor.is_connected:
            self.fetch_rates()
        else:
            self._fall_back_to_cache(NoConnectionError(NO_CONNECTION_MESSAGE))

    # --- network policy ---

    def fetch_rates(self) -> ConnectionStatus:
        """
        Fetch fresh rates, falling back to the cache when that fails.

        At most one fetch runs at a time: a call made while another fetch is in
        flight returns the current status without issuing a request.

        Returns:
            The ConnectionStatus after the fetch
        """
        if not self._fetch_lock.acquire(blocking=False):
            logger.info("Fetch already in progress, ignoring request")
            return self.status
        try:
            if not self.monitor.is_connected:
                self._fall_back_to_cache(NoConnectionError(NO_CONNECTION_MESSAGE))
                return self.status

            try:
                snapshot = self.fetcher.fetch()
            except DomainError as e:
                logger.warning("Fetching rates failed: %s", e)
                self._fall_back_to_cache(e)
                return self.status

            self._set_snapshot(snapshot)
            self._set_status(ConnectionStatus(NetworkState.ONLINE))
            try:
                self.store.save(snapshot)
            except StorageError as e:
                logger.error("Failed to cache rates: %s", e)
            return self.status
        finally:
            self._fetch_lock.release()

    def _fall_back_to_cache(self, error: DomainError) -> None:
        cached = self.store.load()
        if cached is not None:
            logger.info("Falling back to cached rates fetched at %s", cached.fetched_at.isoformat())
            self._set_snapshot(cached)
            self._set_status(ConnectionStatus(NetworkState.OFFLINE_VALID_CACHE))
        else:
            logger.error("No valid cached rates available: %s", error)
            self._set_status(ConnectionStatus.error(str(error)))

    def on_connectivity_changed(self, connected: bool) -> None:
        """
        React to a connectivity transition.

        Going offline picks OFFLINE_VALID_CACHE or OFFLINE_STALE_CACHE depending
        on the cache; coming back online sets ONLINE without fetching.
        """
        if not connected:
            if self.store.load() is not None:
                self._set_status(ConnectionStatus(NetworkState.OFFLINE_VALID_CACHE))
            else:
                self._set_status(ConnectionStatus(NetworkState.OFFLINE_STALE_CACHE))
        else:
            self._set_status(ConnectionStatus(NetworkState.ONLINE))

    # --- conversion ---

    @property
    def from_currency(self) -> Currency:
        return self.preference.from_currency

    @property
    def to_currency(self) -> Currency:
        return self.preference.to_currency

    @property
    def formatted_amount(self) -> str:
        return format_amount_input(self._amount_text)

    @property
    def formatted_converted_amount(self) -> str:
        return format_converted(self.converted_amount)

    def set_amount(self, text: Optional[str]) -> float:
        """
        Set the amount from user input and convert it.

        Args:
            text: Raw input; '.' or ',' as decimal separator, empty means 0

        Returns:
            The converted amount

        Raises:
            InvalidAmountError: If the input is not a non-negative number
        """
        normalized = normalize_amount(text)
        try:
            amount = parse_amount(normalized)
        except ValueError as e:
            raise InvalidAmountError(str(e)) from e
        with self._state_lock:
            self._amount_text = normalized
            self.amount = amount
        return self.convert()

    def convert(self) -> float:
        """
        Recompute the converted amount: (amount / rate[from]) * rate[to].

        - amount 0 gives 0
        - no rate table leaves the previous result untouched
        - a target currency missing from the table leaves the previous result untouched
        - a source currency missing from the table counts as rate 1.0

        Returns:
            The (possibly unchanged) converted amount
        """
        with self._state_lock:
            if self.amount == 0:
                self.converted_amount = 0.0
            elif self.snapshot is None:
                return self.converted_amount
            else:
                target_rate = self.snapshot.rate_for(self.to_currency)
                if target_rate is None:
                    logger.debug("No rate for %s, keeping previous result", self.to_currency)
                    return self.converted_amount
                base_rate = self.snapshot.rate_for(self.from_currency) or 1.0
                self.converted_amount = (self.amount / base_rate) * target_rate
            converted = self.converted_amount
        self._emit(ConverterEvent.CONVERTED)
        return converted

    def _set_preference(self, preference: Preference) -> None:
        with self._state_lock:
            self.preference = preference
        try:
            self.store.save_preference(preference.from_currency, preference.to_currency)
        except StorageError as e:
            logger.error("Failed to save currency preference: %s", e)
        self._emit(ConverterEvent.PREFERENCE)

    def set_from_currency(self, currency: Currency) -> float:
        self._set_preference(Preference(currency, self.to_currency))
        return self.convert()

    def set_to_currency(self, currency: Currency) -> float:
        self._set_preference(Preference(self.from_currency, currency))
        return self.convert()

    def swap_currencies(self) -> float:
        """
        Exchange source and target currencies and convert again.

        Returns:
            The converted amount in the new direction
        """
        self._set_preference(self.preference.swapped())
        return self.convert()
