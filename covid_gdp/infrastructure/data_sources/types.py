"""
Data source provider protocols for type hints.
"""

from __future__ import annotations

from typing import List, Protocol

from covid_gdp.domain.models import CaseRecord, Country, GdpPoint, GdpProviderName


class CaseSeriesProvider(Protocol):
    async def fetch_case_series(self, country: Country) -> List[CaseRecord]:
        ...


class GdpSeriesProvider(Protocol):
    name: GdpProviderName

    def is_configured(self) -> bool:
        """False when credentials the provider needs are missing."""
        ...

    def supports(self, country: Country) -> bool:
        """False when the provider has no mapping for the country."""
        ...

    async def fetch_gdp_series(self, country: Country) -> List[GdpPoint]:
        """Return growth points sorted ascending by date, or raise SeriesError."""
        ...
