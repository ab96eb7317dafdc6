"""
Series service.
Fetches case and GDP series for one country and joins them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Mapping, Optional

from covid_gdp.domain.models import (
    CaseRecord,
    Country,
    GdpFetchResult,
    GdpProviderName,
    JoinedSeries,
)
from covid_gdp.domain.services.config_engine import CountryRegistry
from covid_gdp.domain.services.series_joiner import join_series, sort_gdp_series
from covid_gdp.infrastructure.data_sources.provider_chain import build_gdp_chain
from covid_gdp.infrastructure.data_sources.types import CaseSeriesProvider, GdpSeriesProvider

logger = logging.getLogger(__name__)


class SeriesService:
    """
    Joined COVID/GDP series for a country.

    Stateless between calls: every request re-fetches from the providers.
    """

    def __init__(
        self,
        registry: CountryRegistry,
        case_provider: CaseSeriesProvider,
        gdp_providers: Mapping[GdpProviderName, GdpSeriesProvider],
        default_country_fallback: bool = False,
        default_country_key: Optional[str] = None,
    ):
        self.registry = registry
        self.case_provider = case_provider
        self.gdp_providers = gdp_providers
        self.default_country_fallback = default_country_fallback
        self.default_country_key = default_country_key

    def resolve(self, country_key: str) -> Country:
        return self.registry.resolve(country_key)

    def _default_country(self) -> Country:
        if self.default_country_key:
            return self.registry.resolve(self.default_country_key)
        return self.registry.default_country

    async def fetch_case_series(self, country_key: str) -> List[CaseRecord]:
        country = self.resolve(country_key)
        return await self.case_provider.fetch_case_series(country)

    async def fetch_gdp_series(
        self,
        country_key: str,
        preferred_provider: Optional[GdpProviderName] = None,
    ) -> GdpFetchResult:
        country = self.resolve(country_key)
        default_country = self._default_country() if self.default_country_fallback else None
        chain = build_gdp_chain(
            country,
            self.gdp_providers,
            preferred=preferred_provider,
            default_country=default_country,
        )
        result = await chain.fetch()
        if result.country_iso3 != country.iso3:
            logger.warning(f"⚠️ GDP for {country.key} substituted with {result.country_iso3} data")
        return result

    async def get_joined_series(
        self,
        country_key: str,
        preferred_provider: Optional[GdpProviderName] = None,
    ) -> JoinedSeries:
        """
        Fetch both series concurrently, then join GDP growth onto case dates.

        Raises:
            UnknownCountry: no mapping for the key
            UpstreamUnavailable / MalformedResponse: case fetch failed or
                every GDP provider failed
        """
        country = self.resolve(country_key)

        case_task = asyncio.ensure_future(self.case_provider.fetch_case_series(country))
        gdp_task = asyncio.ensure_future(self.fetch_gdp_series(country.key, preferred_provider))
        try:
            case_series, gdp_result = await asyncio.gather(case_task, gdp_task)
        finally:
            # One side failed: stop the other from hitting upstream
            for task in (case_task, gdp_task):
                if not task.done():
                    task.cancel()
        gdp_series = sort_gdp_series(gdp_result.points)
        joined = join_series(case_series, gdp_series)

        logger.info(
            f"📈 Joined series for {country.key}: {len(joined)} days, "
            f"{len(gdp_series)} GDP points from {gdp_result.provider.value}"
        )
        return JoinedSeries(
            country=country,
            case_series=case_series,
            gdp_series=gdp_series,
            joined_series=joined,
            gdp_provider=gdp_result.provider,
            gdp_country_iso3=gdp_result.country_iso3,
            attempts=gdp_result.attempts,
        )
