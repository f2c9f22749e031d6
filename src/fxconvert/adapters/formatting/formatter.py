# src/fxconvert/adapters/formatting/formatter.py
"""
Output Formatter - Amounts, Conversions and Status Banners

This module handles all text formatting for the command-line front end:
grouped decimal amounts (at most two fraction digits), scientific notation
for very large converted amounts, conversion lines, snapshot age and the
network state banner.

Files that USE this module:
- fxconvert.application.converter_service (formatted_amount / formatted_converted_amount)
- fxconvert.app (prints conversion results and status)
- tests.test_formatter (unit tests)

Files that this module USES:
- fxconvert.domain.models (ConnectionStatus, NetworkState, Currency, RateSnapshot)
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fxconvert.domain.models import ConnectionStatus, Currency, NetworkState, RateSnapshot

SCIENTIFIC_THRESHOLD = 1_000_000_000_000

STATUS_BANNERS = {
    NetworkState.ONLINE: "Online: live exchange rates",
    NetworkState.OFFLINE_VALID_CACHE: "Offline: using cached exchange rates",
    NetworkState.OFFLINE_STALE_CACHE: "Cached data expired, please connect to the internet to update",
}


def format_number(value: float) -> str:
    """
    Format a number with thousands grouping and up to 2 fraction digits.

    Args:
        value: Number to format

    Returns:
        String like '1,234.5' or '85'
    """
    text = f"{value:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def format_scientific(value: float) -> str:
    """
    Format a number in scientific notation with up to 2 fraction digits.

    Returns:
        String like '1.23e12'
    """
    mantissa, exponent = f"{value:.2e}".split("e")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}e{int(exponent)}"


def format_converted(value: float) -> str:
    """Format a converted amount, switching to scientific notation from 1e12 up."""
    if abs(value) >= SCIENTIFIC_THRESHOLD:
        return format_scientific(value)
    return format_number(value)


def format_amount_input(normalized: str) -> str:
    """
    Format the amount as typed, keeping a trailing decimal separator.

    Args:
        normalized: Input already passed through normalize_amount ("12.", "1000")

    Returns:
        Display string like '12.' or '1,000'
    """
    if normalized.endswith("."):
        integer_part = normalized[:-1] or "0"
        return format_number(float(integer_part)) + "."
    return format_number(float(normalized))


def format_conversion(amount: float, from_currency: Currency,
                      converted: float, to_currency: Currency) -> str:
    """
    Format one conversion result.

    Returns:
        String like '100 USD = 85 EUR'
    """
    return f"{format_number(amount)} {from_currency} = {format_converted(converted)} {to_currency}"


def _fmt_elapsed(seconds: int) -> str:
    """
    Format elapsed time as 'Xh:YYmin' or 'Ymin'.

    Args:
        seconds: Elapsed time in seconds (will be clamped to >= 0)

    Returns:
        Formatted string like '2h:42min' or '5min'
    """
    if seconds < 0:
        seconds = 0
    minutes = seconds // 60
    hours = minutes // 60
    mins_only = minutes % 60
    if hours > 0:
        return f"{hours}h:{mins_only:02d}min"
    return f"{mins_only}min"


def format_status(status: ConnectionStatus) -> str:
    """Banner text for the current network state."""
    if status.is_error:
        return f"Error: {status.message or 'unknown error'}"
    return STATUS_BANNERS[status.state]


def format_snapshot_summary(snapshot: Optional[RateSnapshot],
                            now: Optional[datetime] = None) -> str:
    """
    Describe the rate table currently in use.

    Returns:
        String like 'Rates: base USD, 42 currencies, fetched 1h:05min ago'
    """
    if snapshot is None:
        return "Rates: none loaded"
    now = now or datetime.now(timezone.utc)
    elapsed = _fmt_elapsed(int((now - snapshot.fetched_at).total_seconds()))
    return (
        f"Rates: base {snapshot.base_currency}, "
        f"{len(snapshot.rates)} currencies, fetched {elapsed} ago"
    )
