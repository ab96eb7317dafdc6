"""
COVID-19 Case Series Provider
Daily cumulative confirmed/deaths/recovered per country (pomber time series)
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from covid_gdp.domain.errors import MalformedResponse, UpstreamUnavailable
from covid_gdp.domain.models import CaseRecord, Country
from covid_gdp.domain.services.series_joiner import compute_daily_deltas
from covid_gdp.infrastructure.data_sources.http_client import JsonHttpProvider

logger = logging.getLogger(__name__)


def _parse_day(raw: Any) -> date:
    # Upstream dates are not zero padded ("2020-1-22")
    return datetime.strptime(str(raw), "%Y-%m-%d").date()


def _parse_count(raw: Any, field: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"{field} is not numeric: {raw!r}")
    value = int(raw)
    if value < 0:
        raise ValueError(f"{field} is negative: {raw!r}")
    return value


class CovidTimeseriesProvider(JsonHttpProvider):
    """
    Case-series provider

    The upstream document holds every country; the configured covid_key
    selects one series from it.
    """

    source_name = "covid_timeseries"

    def __init__(self, url: str, timeout_seconds: float = 30.0):
        super().__init__(timeout_seconds=timeout_seconds)
        self.url = url

    async def fetch_case_series(self, country: Country) -> List[CaseRecord]:
        payload = await self._request_json(self.url)
        if not isinstance(payload, dict):
            raise MalformedResponse("Case series payload is not an object", provider=self.source_name)

        rows = payload.get(country.covid_key)
        if rows is None or rows == []:
            raise UpstreamUnavailable(
                f"No case series for country key: {country.covid_key}",
                provider=self.source_name,
            )
        if not isinstance(rows, list):
            raise MalformedResponse(
                f"Case series for {country.covid_key} is not a list",
                provider=self.source_name,
            )

        parsed = sorted((self._parse_row(row) for row in rows), key=lambda r: r[0])
        records = compute_daily_deltas(parsed)
        logger.info(f"✅ Case series for {country.key}: {len(records)} days")
        return records

    def _parse_row(self, row: Any) -> Tuple[date, int, int, Optional[int]]:
        try:
            recovered_raw = row.get("recovered")
            return (
                _parse_day(row["date"]),
                _parse_count(row["confirmed"], "confirmed"),
                _parse_count(row["deaths"], "deaths"),
                None if recovered_raw is None else _parse_count(recovered_raw, "recovered"),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise MalformedResponse(f"Invalid case row: {exc}", provider=self.source_name) from exc
