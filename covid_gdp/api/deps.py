"""
Route dependencies - services live on app.state, wired in the lifespan.
"""

from fastapi import HTTPException, Request

from covid_gdp.domain.errors import SeriesError, UnknownCountry
from covid_gdp.services.selection_tracker import SelectionTracker
from covid_gdp.services.series_service import SeriesService


def get_series_service(request: Request) -> SeriesService:
    service = getattr(request.app.state, "series_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Series service not initialized")
    return service


def get_selection_tracker(request: Request) -> SelectionTracker:
    tracker = getattr(request.app.state, "selection_tracker", None)
    if tracker is None:
        raise HTTPException(status_code=503, detail="Selection tracker not initialized")
    return tracker


def http_error_for(exc: SeriesError) -> HTTPException:
    if isinstance(exc, UnknownCountry):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(
        status_code=502,
        detail={"error": exc.__class__.__name__, "message": str(exc), "provider": exc.provider},
    )
