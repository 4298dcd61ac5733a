from __future__ import annotations

import os

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Optional proxy template for provider requests.
    # Supports "{urlEncoded}" / "{url}" placeholders; otherwise the encoded target URL is appended.
    INFLATION_PROXY_URL: str | None = None

    # Defaults used when the CLI is invoked without explicit flags.
    INFLATION_SOURCE: str = "worldBank"  # worldBank|imf|dbnomics
    INFLATION_COUNTRY: str = "US"
    INFLATION_METRIC: str | None = None

    INFLATION_HTTP_TIMEOUT: float = 30.0
    INFLATION_LOG_LEVEL: str = "WARNING"

    # Snake-case accessors used across the codebase.
    @property
    def proxy_url(self) -> str | None:
        v = (self.INFLATION_PROXY_URL or "").strip()
        return v or None

    @property
    def source(self) -> str:
        return (self.INFLATION_SOURCE or "worldBank").strip()

    @property
    def country(self) -> str:
        return (self.INFLATION_COUNTRY or "US").strip()

    @property
    def metric(self) -> str | None:
        return self.INFLATION_METRIC

    @property
    def http_timeout(self) -> float:
        return float(self.INFLATION_HTTP_TIMEOUT)

    @property
    def log_level(self) -> str:
        return (self.INFLATION_LOG_LEVEL or "WARNING").strip().upper()

class FetchConfig(BaseModel):
    """Per-call options handed to provider adapters."""

    proxy_url: str | None = None
    timeout: float = 30.0

def load_settings() -> Settings:
    return Settings()

def safe_load_settings() -> Settings | None:
    """
    Load settings with graceful fallback.

    If .env is unreadable (e.g., sandbox), construct Settings directly from environment variables.
    Returns None if settings cannot be constructed.
    """
    try:
        return load_settings()
    except Exception:
        try:
            return Settings.model_construct(
                INFLATION_PROXY_URL=os.getenv("INFLATION_PROXY_URL"),
                INFLATION_SOURCE=os.getenv("INFLATION_SOURCE", "worldBank"),
                INFLATION_COUNTRY=os.getenv("INFLATION_COUNTRY", "US"),
                INFLATION_METRIC=os.getenv("INFLATION_METRIC"),
                INFLATION_HTTP_TIMEOUT=float(os.getenv("INFLATION_HTTP_TIMEOUT", "30")),
                INFLATION_LOG_LEVEL=os.getenv("INFLATION_LOG_LEVEL", "WARNING"),
            )
        except Exception:
            return None

def fetch_config_from(settings: Settings | None) -> FetchConfig:
    if settings is None:
        return FetchConfig()
    return FetchConfig(proxy_url=settings.proxy_url, timeout=settings.http_timeout)
