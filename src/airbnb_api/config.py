"""
Client configuration
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120.0.0.0",
    "Accept": "application/json, text/html;q=0.9",
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass
class ClientConfig:
    """
    Client configuration.

    Attributes:
        api_key: Airbnb web API key, sent as the ``key`` query parameter
        base_url: Site root all endpoints hang off
        currency: Default currency for availability requests
        locale: Default locale for availability requests
        availability_count: Months of calendar fetched per availability call
        availability_format: Calendar response format
        reviews_role: Default review role, 'host' or 'guest'
        request_timeout: HTTP request timeout (seconds)
        headers: Headers sent with every request
        proxy: Optional proxy URL
        http2: Negotiate HTTP/2
    """
    api_key: str
    base_url: str = "https://www.airbnb.com"
    currency: str = "USD"
    locale: str = "en"
    availability_count: int = 3
    availability_format: str = "with_conditions"
    reviews_role: str = "host"
    request_timeout: float = 30.0
    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    proxy: Optional[str] = None
    http2: bool = True

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/search/search_results"

    @property
    def availability_url(self) -> str:
        return f"{self.base_url}/api/v2/calendar_months"

    @property
    def listing_info_url(self) -> str:
        return f"{self.base_url}/api/v1/listings"

    @property
    def listing_page_url(self) -> str:
        return f"{self.base_url}/rooms"

    @property
    def user_reviews_url(self) -> str:
        return f"{self.base_url}/users/review_page"

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ClientConfig":
        """
        Load configuration from a JSON secrets file.

        Expected layout::

            {
                "API_KEY": "...",
                "DEFAULT_REQUEST_CONFIGS": {
                    "headers": {"User-Agent": "..."},
                    "proxy": "http://localhost:8080",
                    "timeout": 10
                }
            }
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                secrets = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        api_key = secrets.get("API_KEY")
        if not api_key:
            raise ConfigError(f"No API_KEY in {path}")

        request_configs = secrets.get("DEFAULT_REQUEST_CONFIGS") or {}
        headers = dict(DEFAULT_HEADERS)
        headers.update(request_configs.get("headers") or {})

        config = cls(api_key=api_key, headers=headers, proxy=request_configs.get("proxy"))
        if request_configs.get("timeout") is not None:
            config.request_timeout = float(request_configs["timeout"])

        logger.debug(f"[CONFIG] Loaded configuration from {path}")
        return config

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from AIRBNB_* environment variables."""
        api_key = os.environ.get("AIRBNB_API_KEY")
        if not api_key:
            raise ConfigError("AIRBNB_API_KEY is not set")

        config = cls(api_key=api_key)
        config.currency = os.environ.get("AIRBNB_CURRENCY", config.currency)
        config.locale = os.environ.get("AIRBNB_LOCALE", config.locale)
        config.proxy = os.environ.get("AIRBNB_PROXY") or None

        timeout = os.environ.get("AIRBNB_REQUEST_TIMEOUT")
        if timeout:
            try:
                config.request_timeout = float(timeout)
            except ValueError as e:
                raise ConfigError(f"Invalid AIRBNB_REQUEST_TIMEOUT: {timeout}") from e

        return config
