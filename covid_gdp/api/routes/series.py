"""
Series API Routes
Countries, joined COVID/GDP series and CSV export
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from covid_gdp.api.deps import get_series_service, http_error_for
from covid_gdp.api.schemas import CountryInfo, SeriesResponse, country_info, series_response
from covid_gdp.domain.errors import SeriesError
from covid_gdp.domain.models import GdpProviderName
from covid_gdp.services.export_service import joined_to_csv
from covid_gdp.services.series_service import SeriesService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/countries", response_model=List[CountryInfo])
async def list_countries(service: SeriesService = Depends(get_series_service)):
    """List supported countries and their GDP providers."""
    return [country_info(country) for country in service.registry.countries]


@router.get("/series/{country_key}", response_model=SeriesResponse)
async def get_series(
    country_key: str,
    provider: Optional[GdpProviderName] = Query(None, description="Preferred GDP provider"),
    rolling_window: int = Query(7, ge=1, le=90),
    service: SeriesService = Depends(get_series_service),
):
    """
    Case series, GDP series and their step-function join for one country.
    """
    try:
        series = await service.get_joined_series(country_key, provider)
    except SeriesError as exc:
        logger.warning(f"Series request for {country_key} failed: {exc}")
        raise http_error_for(exc)
    return series_response(series, rolling_window=rolling_window)


@router.get("/series/{country_key}/export.csv", response_class=PlainTextResponse)
async def export_series_csv(
    country_key: str,
    provider: Optional[GdpProviderName] = Query(None, description="Preferred GDP provider"),
    service: SeriesService = Depends(get_series_service),
):
    """Joined series as CSV."""
    try:
        series = await service.get_joined_series(country_key, provider)
    except SeriesError as exc:
        logger.warning(f"CSV export for {country_key} failed: {exc}")
        raise http_error_for(exc)

    filename = f"covid_gdp_{series.country.key.lower()}.csv"
    return PlainTextResponse(
        joined_to_csv(series.joined_series),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
