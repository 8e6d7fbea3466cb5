"""Nekorekten checker configuration.

Settings are read once at startup and handed to the outbound clients.
Nothing below the app factory reads the environment directly.
"""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Environment-driven settings for the checker service."""

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Nekorekten registry
    nekorekten_api_key: str = ""
    nekorekten_api_url: str = "https://api.nekorekten.com"
    nekorekten_search_mode: str = "all"

    # Shopify Admin REST API
    shopify_store_domain: str = ""
    shopify_admin_token: str = ""
    shopify_api_version: str = "2025-10"

    flag_tag: str = "nekorekten-flagged"
    home_country_code: str = "359"
    http_timeout_seconds: float = 10.0

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def shopify_configured(self) -> bool:
        return bool(self.shopify_store_domain and self.shopify_admin_token)


def load_settings() -> Settings:
    """Build settings from the environment (and .env, if present)."""
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Install a single timestamped stream handler on the root logger."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT, force=True)
