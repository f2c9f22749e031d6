# src/fxconvert/config/__init__.py
"""
Configuration Module

Provides centralized configuration management using Pydantic Settings.
Supports environment variables and a local ``.env`` file.
"""

from fxconvert.config.settings import PROVIDER_CHOICES, Settings, load_settings

__all__ = ["PROVIDER_CHOICES", "Settings", "load_settings"]
