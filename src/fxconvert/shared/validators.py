# src/fxconvert/shared/validators.py
"""
Input Validation Utilities - Configuration and Amount Validation

This module provides validation functions for API keys and for the amount
typed by the user. Amounts accept either ``.`` or ``,`` as the decimal
separator, the way a numeric keypad produces them.

Files that USE this module:
- fxconvert.config.settings (uses validate_api_key in Settings field validators)
- fxconvert.application.converter_service (normalize_amount, parse_amount)

Files that this module USES:
- None (pure utility functions)
"""
import math
import re
from typing import Optional

_AMOUNT_PATTERN = re.compile(r"^\d*(\.\d*)?$")


def validate_api_key(api_key: str, min_length: int = 10) -> bool:
    """
    Validate API key format.

    Args:
        api_key: API key to validate
        min_length: Minimum length requirement

    Returns:
        True if valid, False otherwise
    """
    if not api_key:
        return False

    return len(api_key) >= min_length and not api_key.isspace() and " " not in api_key


def normalize_amount(text: Optional[str]) -> str:
    """
    Normalize raw amount input.

    - Empty input becomes "0"
    - A lone separator ("." or ",") becomes "0."
    - Commas are replaced by dots

    Args:
        text: Raw input string

    Returns:
        Normalized string (not yet validated)
    """
    if text is None:
        return "0"
    text = text.strip().replace(",", ".")
    if not text:
        return "0"
    if text == ".":
        return "0."
    return text


def validate_numeric_input(value: str, min_val: Optional[float] = None,
                           max_val: Optional[float] = None) -> bool:
    """
    Validate numeric input string.

    Args:
        value: String value to validate (already normalized)
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        True if valid, False otherwise
    """
    if not value or not _AMOUNT_PATTERN.match(value) or value == ".":
        return False

    num_val = float(value)
    if not math.isfinite(num_val):
        return False
    if min_val is not None and num_val < min_val:
        return False
    if max_val is not None and num_val > max_val:
        return False
    return True


def parse_amount(text: Optional[str]) -> float:
    """
    Parse a user-entered amount into a non-negative float.

    Args:
        text: Raw input ("12,5", "0.", "", ...)

    Returns:
        Parsed amount

    Raises:
        ValueError: If the input is not a non-negative decimal number
    """
    normalized = normalize_amount(text)
    if not validate_numeric_input(normalized, min_val=0.0):
        raise ValueError(f"Invalid amount: {text!r}")
    return float(normalized)
