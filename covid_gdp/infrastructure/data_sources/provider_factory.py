"""
Data source provider factory (settings-driven).
"""

from __future__ import annotations

from typing import Dict, Optional

from covid_gdp.config import Settings, settings as default_settings
from covid_gdp.domain.models import GdpProviderName
from covid_gdp.infrastructure.data_sources.covid_timeseries_provider import CovidTimeseriesProvider
from covid_gdp.infrastructure.data_sources.oecd_tracker_provider import OecdTrackerProvider
from covid_gdp.infrastructure.data_sources.tradingeconomics_provider import TradingEconomicsProvider
from covid_gdp.infrastructure.data_sources.types import CaseSeriesProvider, GdpSeriesProvider
from covid_gdp.infrastructure.data_sources.worldbank_provider import WorldBankProvider


def get_case_provider(settings: Optional[Settings] = None) -> CaseSeriesProvider:
    settings = settings or default_settings
    return CovidTimeseriesProvider(
        url=settings.COVID_TIMESERIES_URL,
        timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
    )


def _build_gdp_provider(name: GdpProviderName, settings: Settings) -> GdpSeriesProvider:
    if name == GdpProviderName.TRADINGECONOMICS:
        # Built even without a key; the chain skips it via is_configured()
        return TradingEconomicsProvider(
            api_base_url=settings.TRADINGECONOMICS_API_URL,
            api_key=settings.TRADINGECONOMICS_API_KEY,
            timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        )
    if name == GdpProviderName.OECD:
        return OecdTrackerProvider(
            api_base_url=settings.OECD_TRACKER_API_URL,
            dataset=settings.OECD_TRACKER_DATASET,
            timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        )
    return WorldBankProvider(
        api_base_url=settings.WORLDBANK_API_URL,
        indicator=settings.WORLDBANK_GDP_INDICATOR,
        timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
    )


def get_gdp_providers(settings: Optional[Settings] = None) -> Dict[GdpProviderName, GdpSeriesProvider]:
    settings = settings or default_settings
    return {name: _build_gdp_provider(name, settings) for name in GdpProviderName}
