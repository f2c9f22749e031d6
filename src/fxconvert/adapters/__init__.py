# src/fxconvert/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (rate APIs)
- Persistence (local key-value storage)
- Connectivity (network reachability)
- Formatting (output)
"""

__all__ = []
