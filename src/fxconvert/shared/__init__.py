# src/fxconvert/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from fxconvert.shared.validators import (
    normalize_amount,
    parse_amount,
    validate_api_key,
    validate_numeric_input,
)

__all__ = [
    "validate_api_key",
    "validate_numeric_input",
    "normalize_amount",
    "parse_amount",
]
