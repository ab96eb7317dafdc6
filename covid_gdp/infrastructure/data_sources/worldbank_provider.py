"""
World Bank GDP Growth Provider
Primary GDP source: annual real GDP growth (%) keyed by ISO-3 code
"""

from __future__ import annotations

import calendar
import logging
import re
from datetime import date
from typing import Any, List

from covid_gdp.domain.errors import MalformedResponse, UpstreamUnavailable
from covid_gdp.domain.models import Country, GdpPoint, GdpProviderName
from covid_gdp.domain.services.series_joiner import sort_gdp_series
from covid_gdp.infrastructure.data_sources.http_client import JsonHttpProvider

logger = logging.getLogger(__name__)

_QUARTER = re.compile(r"^(\d{4})Q([1-4])$")
_MONTH = re.compile(r"^(\d{4})M(\d{2})$")
_YEAR = re.compile(r"^(\d{4})$")


def period_end(period: str) -> date:
    """
    Last calendar day of a World Bank period label.

    "2020" -> 2020-12-31, "2020Q2" -> 2020-06-30, "2020M02" -> 2020-02-29
    """
    period = str(period).strip()

    match = _YEAR.match(period)
    if match:
        return date(int(match.group(1)), 12, 31)

    match = _QUARTER.match(period)
    if match:
        year, quarter = int(match.group(1)), int(match.group(2))
        month = quarter * 3
        return date(year, month, calendar.monthrange(year, month)[1])

    match = _MONTH.match(period)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
        return date(year, month, calendar.monthrange(year, month)[1])

    raise ValueError(f"Unrecognised period: {period!r}")


class WorldBankProvider(JsonHttpProvider):
    """
    Primary GDP provider

    Always configured and mapped for every supported country, so it is the
    terminal attempt of the fallback chain.
    """

    name = GdpProviderName.WORLDBANK
    source_name = "worldbank"

    def __init__(
        self,
        api_base_url: str,
        indicator: str = "NY.GDP.MKTP.KD.ZG",
        timeout_seconds: float = 30.0,
        per_page: int = 100,
    ):
        super().__init__(timeout_seconds=timeout_seconds)
        self.api_base_url = api_base_url.rstrip("/")
        self.indicator = indicator
        self.per_page = per_page

    def is_configured(self) -> bool:
        return True

    def supports(self, country: Country) -> bool:
        return bool(country.iso3)

    async def fetch_gdp_series(self, country: Country) -> List[GdpPoint]:
        url = f"{self.api_base_url}/country/{country.iso3}/indicator/{self.indicator}"
        payload = await self._request_json(url, params={"format": "json", "per_page": self.per_page})
        rows = self._extract_rows(payload)

        points: List[GdpPoint] = []
        for row in rows:
            try:
                value = row.get("value")
                if value is None:
                    continue
                points.append(
                    GdpPoint(
                        date=period_end(row["date"]),
                        growth_percent=float(value),
                        source_provider=self.name,
                    )
                )
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise MalformedResponse(f"Invalid World Bank row: {exc}", provider=self.source_name) from exc

        if not points:
            raise UpstreamUnavailable(
                f"World Bank returned no GDP growth for {country.iso3}",
                provider=self.source_name,
            )
        return sort_gdp_series(points)

    def _extract_rows(self, payload: Any) -> List[Any]:
        # Success: [metadata, rows]; error: [{"message": [...]}]
        if not isinstance(payload, list) or not payload:
            raise MalformedResponse("World Bank payload is not a list", provider=self.source_name)

        if len(payload) == 1 and isinstance(payload[0], dict) and "message" in payload[0]:
            messages = payload[0].get("message") or []
            detail = "; ".join(str(m.get("value", m)) for m in messages if isinstance(m, dict)) or "error"
            raise UpstreamUnavailable(f"World Bank error: {detail}", provider=self.source_name)

        if len(payload) < 2:
            raise MalformedResponse("World Bank payload has no data section", provider=self.source_name)

        rows = payload[1]
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise MalformedResponse("World Bank data section is not a list", provider=self.source_name)
        return rows
