"""
Trading Economics GDP Provider
Token-gated secondary source keyed by country name.
Reports growth directly or GDP levels that need derivation.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Optional
from urllib.parse import quote

from covid_gdp.domain.errors import MalformedResponse, UpstreamUnavailable
from covid_gdp.domain.models import Country, GdpPoint, GdpProviderName, GdpValueKind
from covid_gdp.domain.services.series_joiner import derive_growth_from_levels, sort_gdp_series
from covid_gdp.infrastructure.data_sources.http_client import JsonHttpProvider

logger = logging.getLogger(__name__)


class TradingEconomicsProvider(JsonHttpProvider):
    name = GdpProviderName.TRADINGECONOMICS
    source_name = "tradingeconomics"

    def __init__(
        self,
        api_base_url: str,
        api_key: Optional[str] = None,
        timeout_seconds: float = 30.0,
    ):
        super().__init__(timeout_seconds=timeout_seconds)
        self.api_base_url = api_base_url.rstrip("/")
        self.api_key = (api_key or "").strip() or None

    def is_configured(self) -> bool:
        return self.api_key is not None

    def supports(self, country: Country) -> bool:
        return country.tradingeconomics is not None

    async def fetch_gdp_series(self, country: Country) -> List[GdpPoint]:
        mapping = country.tradingeconomics
        if mapping is None:
            raise UpstreamUnavailable(f"No Trading Economics mapping for {country.key}", provider=self.source_name)
        if self.api_key is None:
            raise UpstreamUnavailable("Trading Economics API key missing", provider=self.source_name)

        url = (
            f"{self.api_base_url}/historical/country/{quote(mapping.name)}"
            f"/indicator/{quote(mapping.indicator)}"
        )
        payload = await self._request_json(url, params={"c": self.api_key, "f": "json"})
        if not isinstance(payload, list):
            raise MalformedResponse("Trading Economics payload is not a list", provider=self.source_name)

        observations = sorted(
            (self._parse_observation(row) for row in payload),
            key=lambda obs: obs[0],
        )

        if mapping.value_kind == GdpValueKind.LEVEL:
            points = derive_growth_from_levels(observations, self.name)
        else:
            points = [
                GdpPoint(date=day, growth_percent=value, source_provider=self.name)
                for day, value in observations
                if value is not None
            ]

        if not points:
            raise UpstreamUnavailable(
                f"Trading Economics returned no usable data for {mapping.name}",
                provider=self.source_name,
            )
        return sort_gdp_series(points)

    def _parse_observation(self, row: Any):
        try:
            day = datetime.fromisoformat(str(row["DateTime"]).replace("Z", "")).date()
            raw = row.get("Value")
            value = None if raw is None else float(raw)
            return day, value
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise MalformedResponse(f"Invalid Trading Economics row: {exc}", provider=self.source_name) from exc
