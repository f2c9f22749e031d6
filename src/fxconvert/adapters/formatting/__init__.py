# src/fxconvert/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Formatting

This package contains formatters for amounts, conversions and status text.
"""

from fxconvert.adapters.formatting.formatter import (
    format_amount_input,
    format_conversion,
    format_converted,
    format_number,
    format_snapshot_summary,
    format_status,
)

__all__ = [
    "format_number",
    "format_converted",
    "format_amount_input",
    "format_conversion",
    "format_status",
    "format_snapshot_summary",
]
