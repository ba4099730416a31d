"""
Exceptions raised or reported by the Airbnb API client
"""

from typing import Optional


class AirbnbAPIError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ConfigError(AirbnbAPIError):
    """Configuration could not be loaded."""


class ArgumentError(AirbnbAPIError, ValueError):
    """A required argument is missing or has the wrong type.

    Raised before any request is made.
    """


class TransportError(AirbnbAPIError):
    """The request did not complete."""


class HTTPStatusError(TransportError):
    """The request completed with a non-200 status."""

    def __init__(self, status_code: int, url: str = ""):
        self.url = url
        super().__init__(f"Unexpected status {status_code} for {url}", status_code)


class ParseError(AirbnbAPIError):
    """The response body did not have the expected shape."""
