"""
Shared JSON-over-HTTP plumbing for upstream data sources.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from covid_gdp.domain.errors import MalformedResponse, UpstreamUnavailable

logger = logging.getLogger(__name__)


class JsonHttpProvider:
    source_name = "http"

    def __init__(self, timeout_seconds: float = 30.0):
        self.timeout_seconds = timeout_seconds

    async def _request_json(self, url: str, params: Optional[dict] = None) -> Any:
        """
        Single GET returning decoded JSON.

        Raises UpstreamUnavailable on transport errors or non-2xx status and
        MalformedResponse when the body is not JSON.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
                response = await client.get(url, params=params, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            logger.debug(f"{self.source_name} request failed for {url}: {exc}")
            raise UpstreamUnavailable(
                f"{self.source_name} request failed: {exc.__class__.__name__}",
                provider=self.source_name,
            ) from exc

        if not response.is_success:
            logger.debug(f"{self.source_name} status {response.status_code} for {url}")
            raise UpstreamUnavailable(
                f"{self.source_name} returned HTTP {response.status_code}",
                provider=self.source_name,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse(
                f"{self.source_name} returned a non-JSON payload",
                provider=self.source_name,
            ) from exc
