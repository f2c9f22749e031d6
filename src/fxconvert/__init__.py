# src/fxconvert/__init__.py
"""
FXConvert - Offline-Aware Currency Converter

Converts amounts between currencies using rates fetched from Exchange Rates API
or Open Exchange Rates, caching the last snapshot locally for 24 hours so that
conversions keep working without a network connection.
"""

__version__ = "1.0.0"
