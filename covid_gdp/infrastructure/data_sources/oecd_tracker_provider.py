"""
OECD Weekly Tracker Provider (via DB.nomics)
Weekly GDP growth estimates, usable without derivation.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date, timedelta
from typing import Any, List, Optional

from covid_gdp.domain.errors import MalformedResponse, UpstreamUnavailable
from covid_gdp.domain.models import Country, GdpPoint, GdpProviderName
from covid_gdp.domain.services.series_joiner import sort_gdp_series
from covid_gdp.infrastructure.data_sources.http_client import JsonHttpProvider

logger = logging.getLogger(__name__)

_ISO_WEEK = re.compile(r"^(\d{4})-W(\d{1,2})$")


def week_end(period: str, period_start: Optional[str] = None) -> date:
    """Sunday closing the ISO week of a weekly observation."""
    if period_start:
        return date.fromisoformat(period_start) + timedelta(days=6)
    match = _ISO_WEEK.match(str(period).strip())
    if not match:
        raise ValueError(f"Unrecognised weekly period: {period!r}")
    return date.fromisocalendar(int(match.group(1)), int(match.group(2)), 7)


class OecdTrackerProvider(JsonHttpProvider):
    name = GdpProviderName.OECD
    source_name = "oecd"

    def __init__(
        self,
        api_base_url: str,
        dataset: str = "OECD/WEEKLY_TRACKER",
        timeout_seconds: float = 30.0,
    ):
        super().__init__(timeout_seconds=timeout_seconds)
        self.api_base_url = api_base_url.rstrip("/")
        self.dataset = dataset.strip("/")

    def is_configured(self) -> bool:
        return True

    def supports(self, country: Country) -> bool:
        return country.oecd is not None

    async def fetch_gdp_series(self, country: Country) -> List[GdpPoint]:
        if country.oecd is None:
            raise UpstreamUnavailable(f"No OECD tracker mapping for {country.key}", provider=self.source_name)

        url = f"{self.api_base_url}/series/{self.dataset}/{country.oecd.series_code}"
        payload = await self._request_json(url, params={"observations": 1, "format": "json"})
        doc = self._extract_doc(payload)
        if doc is None:
            raise UpstreamUnavailable(
                f"OECD tracker returned no series for {country.oecd.series_code}",
                provider=self.source_name,
            )

        periods = doc.get("period") or []
        starts = doc.get("period_start_day") or [None] * len(periods)
        values = doc.get("value") or []
        if not (len(periods) == len(values) == len(starts)):
            raise MalformedResponse("OECD tracker arrays differ in length", provider=self.source_name)

        points: List[GdpPoint] = []
        for period, start, value in zip(periods, starts, values):
            if value is None or value == "NA":
                continue
            try:
                growth = float(value)
                period_end = week_end(period, start)
            except (TypeError, ValueError) as exc:
                raise MalformedResponse(f"Invalid OECD tracker observation: {exc}", provider=self.source_name) from exc
            if not math.isfinite(growth):
                continue
            points.append(GdpPoint(date=period_end, growth_percent=growth, source_provider=self.name))

        if not points:
            raise UpstreamUnavailable(
                f"OECD tracker returned no observations for {country.oecd.series_code}",
                provider=self.source_name,
            )
        return sort_gdp_series(points)

    def _extract_doc(self, payload: Any) -> Optional[dict]:
        if not isinstance(payload, dict):
            raise MalformedResponse("OECD tracker payload is not an object", provider=self.source_name)
        series = payload.get("series")
        if not isinstance(series, dict) or not isinstance(series.get("docs"), list):
            raise MalformedResponse("OECD tracker payload missing series docs", provider=self.source_name)
        docs = series["docs"]
        if not docs:
            return None
        if not isinstance(docs[0], dict):
            raise MalformedResponse("OECD tracker series doc is not an object", provider=self.source_name)
        return docs[0]
