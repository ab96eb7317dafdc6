"""
Series errors.
Raised by providers and the fallback chain, mapped to HTTP status by the API.
"""

from __future__ import annotations

from typing import Optional


class SeriesError(Exception):
    """Base class for failures while building a country series."""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class UpstreamUnavailable(SeriesError):
    """Transport failure, non-success status, or no usable data upstream."""


class UnknownCountry(SeriesError):
    """No provider mapping exists for the requested country key."""

    def __init__(self, country_key: str):
        super().__init__(f"Unknown country: {country_key}")
        self.country_key = country_key


class MalformedResponse(SeriesError):
    """Upstream payload does not match the expected schema."""
