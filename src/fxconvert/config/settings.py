# src/fxconvert/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables or a local ``.env`` file. Both
provider API keys are required: a missing key is a fatal startup condition.

Files that USE this module:
- fxconvert.app (loads settings and wires services)
- fxconvert.adapters.providers.factory (API keys, timeout)
- fxconvert.adapters.persistence.file_store (via app: store path, expiry)

Files that this module USES:
- fxconvert.shared.validators (validation functions for settings)
- fxconvert.domain.errors (ConfigurationError)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fxconvert.domain.errors import ConfigurationError
from fxconvert.shared.validators import validate_api_key

PROVIDER_CHOICES = ("open_exchange_rates", "exchange_rates_api")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- API Providers ---
    exchange_rates_api_key: str = Field(..., alias="EXCHANGE_RATES_API_KEY")
    open_exchange_rates_api_key: str = Field(..., alias="OPEN_EXCHANGE_RATES_API_KEY")
    rates_provider: str = Field(default="open_exchange_rates", alias="RATES_PROVIDER")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Cache Settings ---
    cache_expiration_hours: int = Field(default=24, alias="CACHE_EXPIRATION_HOURS", ge=1, le=168)

    # --- Persistence ---
    store_file: Path = Field(default=Path("./data/fxconvert_store.json"), alias="STORE_FILE")

    # --- Connectivity ---
    connectivity_probe_url: str = Field(
        default="https://openexchangerates.org", alias="CONNECTIVITY_PROBE_URL"
    )
    connectivity_probe_seconds: int = Field(
        default=30, alias="CONNECTIVITY_PROBE_SECONDS", ge=1, le=3600
    )

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="FXCONVERT_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("exchange_rates_api_key", "open_exchange_rates_api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate API key format."""
        v = v.strip()
        if not validate_api_key(v):
            raise ValueError("Invalid API key format")
        return v

    @field_validator("rates_provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Validate provider name."""
        v = v.strip().lower()
        if v not in PROVIDER_CHOICES:
            raise ValueError(f"RATES_PROVIDER must be one of {', '.join(PROVIDER_CHOICES)}")
        return v

    def api_key_for(self, provider_name: str) -> str:
        """
        Return the API key for a provider.

        Args:
            provider_name: One of PROVIDER_CHOICES

        Returns:
            API key string
        """
        if provider_name == "exchange_rates_api":
            return self.exchange_rates_api_key
        return self.open_exchange_rates_api_key

    def model_post_init(self, __context) -> None:
        """Post-initialization validation."""
        # Ensure data directory exists
        self.store_file.parent.mkdir(parents=True, exist_ok=True)


def load_settings(**overrides) -> Settings:
    """
    Build Settings, turning validation failures into ConfigurationError.

    Args:
        **overrides: Field values (by alias) taking precedence over the environment

    Raises:
        ConfigurationError: If API keys are missing or any setting is invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = ", ".join(
            str(err["loc"][0]) for err in e.errors() if err.get("loc")
        )
        raise ConfigurationError(f"Invalid or missing configuration: {fields}") from e
