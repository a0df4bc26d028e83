"""Configuration modules for the SATUSEHAT client."""

from satusehat.config.environment import BASE_URLS, Environment, EnvironmentURLs, get_base_urls
from satusehat.config.logging import configure_logging, get_logger
from satusehat.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "BASE_URLS",
    "Environment",
    "EnvironmentURLs",
    "get_base_urls",
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
