"""Configuration package for runtime settings, logging and startup validation."""

from .logging_setup import config_configure_logging
from .settings import (
    AppSettings,
    DatabaseSettings,
    SettingsLoadError,
    config_build_database_url,
    config_load_settings,
    config_service_urls,
)

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "SettingsLoadError",
    "config_build_database_url",
    "config_configure_logging",
    "config_load_settings",
    "config_service_urls",
]
