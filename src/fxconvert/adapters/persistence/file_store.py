# src/fxconvert/adapters/persistence/file_store.py
"""
File Store - Rate Snapshot and Preference Persistence

This module persists the last fetched rate snapshot (with its expiry) and the
user's currency pair in a small JSON key-value document. Writes are atomic
(temp file + rename) and last-write-wins. Reads never raise: a missing,
malformed or expired entry is reported as absent.

Document layout:
    {
      "cached_exchange_rate": {"base": "USD", "rates": {...},
                               "fetched_at": "...", "expires_at": "..."},
      "from_currency": "USD",
      "to_currency": "EUR"
    }

Files that USE this module:
- fxconvert.application.converter_service (CurrencyConverter reads and writes the store)
- fxconvert.app (builds the RateStore from settings)
- tests.test_file_store (unit tests)

Files that this module USES:
- fxconvert.domain.models (Currency, RateSnapshot, CachedSnapshot, Preference)
- fxconvert.domain.errors (StorageError, ExpiredError)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from fxconvert.domain.errors import DomainError, ExpiredError, StorageError
from fxconvert.domain.models import (
    DEFAULT_EXPIRATION_HOURS,
    CachedSnapshot,
    Currency,
    Preference,
    RateSnapshot,
)

log = logging.getLogger(__name__)

EXCHANGE_RATE_KEY = "cached_exchange_rate"
FROM_CURRENCY_KEY = "from_currency"
TO_CURRENCY_KEY = "to_currency"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_ts(raw: Any) -> datetime:
    """Parse an ISO timestamp, accepting both "...Z" and "+00:00"."""
    if not isinstance(raw, str):
        raise ValueError(f"timestamp is not a string: {raw!r}")
    ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def cached_to_json(cached: CachedSnapshot) -> dict:
    """
    Convert a CachedSnapshot to a JSON-serializable dictionary.

    Returns:
        Dictionary with string currency keys and ISO-formatted timestamps
    """
    snap = cached.snapshot
    return {
        "base": snap.base_currency.value,
        "rates": {currency.value: rate for currency, rate in snap.rates.items()},
        "fetched_at": snap.fetched_at.isoformat(),
        "expires_at": cached.expires_at.isoformat(),
    }


def cached_from_json(data: dict) -> CachedSnapshot:
    """
    Create a CachedSnapshot from its stored dictionary.

    Unknown currency codes are dropped, like on the network path.

    Raises:
        KeyError, ValueError, TypeError: If the entry is malformed
    """
    base = Currency.parse(data["base"])
    if base is None:
        raise ValueError(f"Unknown base currency in cache: {data['base']!r}")
    raw_rates = data["rates"]
    if not isinstance(raw_rates, dict):
        raise TypeError("rates is not an object")
    rates = {}
    for code, value in raw_rates.items():
        currency = Currency.parse(code)
        if currency is not None:
            rates[currency] = float(value)
    snapshot = RateSnapshot(
        base_currency=base,
        rates=rates,
        fetched_at=_parse_ts(data["fetched_at"]),
    )
    return CachedSnapshot(snapshot=snapshot, expires_at=_parse_ts(data["expires_at"]))


class RateStore:
    """Key-value store for the cached snapshot and the currency preference."""

    def __init__(self, store_file: Path,
                 expiration_hours: int = DEFAULT_EXPIRATION_HOURS,
                 clock: Callable[[], datetime] = _utcnow):
        """
        Initialize rate store.

        Args:
            store_file: Path to the JSON document
            expiration_hours: Validity window of a cached snapshot
            clock: Returns the current UTC time (injectable for tests)
        """
        self.store_file = Path(store_file)
        self.expiration_hours = expiration_hours
        self.clock = clock

    # --- document I/O ---

    def _read(self) -> Dict[str, Any]:
        """
        Read the whole document.

        A corrupt file is backed up next to the original and treated as empty.
        """
        p = self.store_file
        if not p.exists():
            return {}
        try:
            with p.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            backup_path = p.with_suffix(p.suffix + ".corrupt")
            try:
                shutil.copy2(p, backup_path)
                p.unlink()
                log.warning("Store file corrupted, backed up to %s: %s", backup_path, e)
            except OSError as backup_error:
                log.error("Failed to back up corrupt store file: %s", backup_error)
            return {}
        except OSError as e:
            log.error("Failed to read store file %s: %s", p, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Store file does not contain an object, ignoring it")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        """
        Write the whole document atomically.

        Raises:
            StorageError: If the file cannot be written
        """
        p = self.store_file
        p.parent.mkdir(parents=True, exist_ok=True)

        temp_fd, temp_path = tempfile.mkstemp(suffix=".json.tmp", dir=str(p.parent), text=True)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, str(p))
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Failed to save store file: {e}") from e

    def _update(self, **entries: Any) -> None:
        data = self._read()
        data.update(entries)
        self._write(data)

    # --- rate snapshot ---

    def save(self, snapshot: RateSnapshot) -> CachedSnapshot:
        """
        Cache a snapshot, replacing any previous one.

        Args:
            snapshot: Freshly fetched snapshot

        Returns:
            The CachedSnapshot that was written
        """
        cached = CachedSnapshot.for_snapshot(snapshot, self.expiration_hours)
        self._update(**{EXCHANGE_RATE_KEY: cached_to_json(cached)})
        log.info("Cached rate snapshot (base=%s, expires=%s)",
                 snapshot.base_currency, cached.expires_at.isoformat())
        return cached

    def load_entry(self) -> Optional[CachedSnapshot]:
        """
        Load the cached entry without checking expiry.

        Returns:
            CachedSnapshot if present and well-formed, None otherwise
        """
        raw = self._read().get(EXCHANGE_RATE_KEY)
        if raw is None:
            return None
        try:
            return cached_from_json(raw)
        except (KeyError, ValueError, TypeError, AttributeError, DomainError) as e:
            log.warning("Ignoring malformed cached snapshot: %s", e)
            return None

    def load(self) -> Optional[RateSnapshot]:
        """
        Load the cached snapshot if it is still valid.

        Returns:
            RateSnapshot, or None if missing, malformed or expired
        """
        cached = self.load_entry()
        if cached is None:
            return None
        try:
            return cached.ensure_valid(self.clock())
        except ExpiredError as e:
            log.info("Ignoring cached snapshot: %s", e)
            return None

    # --- preference ---

    def save_preference(self, from_currency: Currency, to_currency: Currency) -> None:
        self._update(**{
            FROM_CURRENCY_KEY: from_currency.value,
            TO_CURRENCY_KEY: to_currency.value,
        })
        log.debug("Saved currency preference %s -> %s", from_currency, to_currency)

    def load_preference(self) -> Optional[Preference]:
        """
        Load the stored currency pair.

        Returns:
            Preference, or None if either code is missing or unparseable
        """
        data = self._read()
        from_currency = Currency.parse(data.get(FROM_CURRENCY_KEY))
        to_currency = Currency.parse(data.get(TO_CURRENCY_KEY))
        if from_currency is None or to_currency is None:
            return None
        return Preference(from_currency=from_currency, to_currency=to_currency)

    def clear(self) -> None:
        """Remove every stored entry."""
        if self.store_file.exists():
            self.store_file.unlink()
            log.info("Store file removed: %s", self.store_file)
