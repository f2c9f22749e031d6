# src/fxconvert/adapters/providers/decoding.py
"""
Rate Payload Decoding

Turns the flat JSON body returned by the rate APIs into a RateSnapshot:

    {"base": "USD", "rates": {"EUR": 0.85, "GBP": 0.73, ...}, "timestamp": ...}

Codes outside the Currency enumeration are dropped instead of failing the
whole decode. An unknown base falls back to the provider's default base.

Files that USE this module:
- fxconvert.adapters.providers.http_provider (decodes response bodies)
- tests.test_decoding (unit tests)

Files that this module USES:
- fxconvert.domain.models (Currency, RateSnapshot)
- fxconvert.domain.errors (InvalidDataError)
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fxconvert.domain.errors import InvalidDataError
from fxconvert.domain.models import Currency, RateSnapshot

log = logging.getLogger(__name__)


def _to_rate(value: Any) -> Optional[float]:
    """
    Convert a raw rate value to a positive float.

    Returns:
        Float rate, or None for booleans, non-numbers and non-positive values
    """
    if isinstance(value, bool):
        return None
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


def decode_rates(raw_rates: Dict[str, Any]) -> Dict[Currency, float]:
    """
    Keep only recognized currencies with usable rate values.

    Args:
        raw_rates: Mapping of code string -> rate as found in the JSON body

    Returns:
        Dictionary keyed by Currency
    """
    rates: Dict[Currency, float] = {}
    dropped = []
    for code, value in raw_rates.items():
        currency = Currency.parse(code)
        rate = _to_rate(value)
        if currency is None or rate is None:
            dropped.append(code)
            continue
        rates[currency] = rate
    if dropped:
        log.debug("Dropped %d unrecognized or invalid rate entries: %s", len(dropped), dropped)
    return rates


def snapshot_from_payload(payload: Any, default_base: Currency = Currency.USD,
                          fetched_at: Optional[datetime] = None) -> RateSnapshot:
    """
    Build a RateSnapshot from a decoded JSON body.

    Args:
        payload: Parsed JSON (expected to be a dict)
        default_base: Base used when the payload's base code is unknown
        fetched_at: Timestamp for the snapshot (defaults to now, UTC)

    Returns:
        RateSnapshot with only recognized currencies

    Raises:
        InvalidDataError: If the payload is not an object or has no rates object
    """
    if not isinstance(payload, dict):
        raise InvalidDataError("Rate payload is not a JSON object")

    raw_rates = payload.get("rates")
    if not isinstance(raw_rates, dict):
        raise InvalidDataError("Rate payload missing 'rates' object")

    base = Currency.parse(payload.get("base"))
    if base is None:
        log.warning("Unknown base currency %r in payload, using %s",
                    payload.get("base"), default_base)
        base = default_base

    return RateSnapshot(
        base_currency=base,
        rates=decode_rates(raw_rates),
        fetched_at=fetched_at or datetime.now(timezone.utc),
    )
