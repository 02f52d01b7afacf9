"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class ExternalHTTPSettings:
    """
    Shared HTTP behavior for provider adapters.

    timeout_seconds bounds every outbound call and the resolver fan-out as a
    whole. Retries default to zero on the interactive search path.
    """

    timeout_seconds: float = 3.0
    max_retries: int = 0
    backoff_initial_seconds: float = 0.25
    backoff_multiplier: float = 2.0


@dataclass(frozen=True)
class ClearbitSettings:
    """
    Company-suggestion (Clearbit autocomplete) provider settings.
    """

    enabled: bool = True
    base_url: str = "https://autocomplete.clearbit.com"
    logo_base_url: str = "https://logo.clearbit.com"


@dataclass(frozen=True)
class AppStoreSettings:
    """
    iTunes App Store software search provider settings.
    """

    enabled: bool = True
    base_url: str = "https://itunes.apple.com"
    limit: int = 5
    country: str = "US"


@dataclass(frozen=True)
class BrandfetchSettings:
    """
    Brandfetch brand search settings; the provider stays off without a key.
    """

    enabled: bool = False
    api_key: str | None = None
    base_url: str = "https://api.brandfetch.io"


@dataclass(frozen=True)
class CatalogSettings:
    """
    Listing and fallback behavior for the catalog endpoints.
    """

    page_size: int = 20
    download_proxy_timeout_seconds: float = 10.0
    download_proxy_max_bytes: int = 5 * 1024 * 1024


@dataclass(frozen=True)
class AdminSettings:
    """
    HTTP Basic credentials for the admin API.
    """

    username: str | None = None
    password: str | None = None

    @property
    def configured(self) -> bool:
        return bool(self.username and self.password)


@lru_cache(maxsize=1)
def get_external_http_settings() -> ExternalHTTPSettings:
    """
    Return shared provider HTTP settings from environment variables.
    """

    return ExternalHTTPSettings(
        timeout_seconds=max(0.5, _get_float_env("EXTERNAL_HTTP_TIMEOUT_SECONDS", 3.0)),
        max_retries=max(0, _get_int_env("EXTERNAL_HTTP_MAX_RETRIES", 0)),
        backoff_initial_seconds=max(0.05, _get_float_env("EXTERNAL_HTTP_BACKOFF_INITIAL_SECONDS", 0.25)),
        backoff_multiplier=max(1.0, _get_float_env("EXTERNAL_HTTP_BACKOFF_MULTIPLIER", 2.0)),
    )


@lru_cache(maxsize=1)
def get_clearbit_settings() -> ClearbitSettings:
    return ClearbitSettings(
        enabled=_get_bool_env("CLEARBIT_ENABLED", True),
        base_url=_get_str_env("CLEARBIT_BASE_URL", "https://autocomplete.clearbit.com"),
        logo_base_url=_get_str_env("CLEARBIT_LOGO_BASE_URL", "https://logo.clearbit.com"),
    )


@lru_cache(maxsize=1)
def get_app_store_settings() -> AppStoreSettings:
    return AppStoreSettings(
        enabled=_get_bool_env("APP_STORE_ENABLED", True),
        base_url=_get_str_env("APP_STORE_BASE_URL", "https://itunes.apple.com"),
        limit=max(1, _get_int_env("APP_STORE_LIMIT", 5)),
        country=_get_str_env("APP_STORE_COUNTRY", "US"),
    )


@lru_cache(maxsize=1)
def get_brandfetch_settings() -> BrandfetchSettings:
    api_key = _get_optional_str_env("BRANDFETCH_API_KEY")
    return BrandfetchSettings(
        enabled=_get_bool_env("BRANDFETCH_ENABLED", api_key is not None),
        api_key=api_key,
        base_url=_get_str_env("BRANDFETCH_BASE_URL", "https://api.brandfetch.io"),
    )


@lru_cache(maxsize=1)
def get_catalog_settings() -> CatalogSettings:
    return CatalogSettings(
        page_size=max(1, _get_int_env("CATALOG_PAGE_SIZE", 20)),
        download_proxy_timeout_seconds=max(1.0, _get_float_env("DOWNLOAD_PROXY_TIMEOUT_SECONDS", 10.0)),
        download_proxy_max_bytes=max(1024, _get_int_env("DOWNLOAD_PROXY_MAX_BYTES", 5 * 1024 * 1024)),
    )


@lru_cache(maxsize=1)
def get_admin_settings() -> AdminSettings:
    return AdminSettings(
        username=_get_optional_str_env("ADMIN_USERNAME"),
        password=_get_optional_str_env("ADMIN_PASSWORD"),
    )
