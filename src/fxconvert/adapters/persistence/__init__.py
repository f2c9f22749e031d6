# src/fxconvert/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data:
- File-based key-value storage (JSON) for the rate cache and preferences
"""

from fxconvert.adapters.persistence.file_store import RateStore, cached_from_json, cached_to_json

__all__ = [
    "RateStore",
    "cached_from_json",
    "cached_to_json",
]
