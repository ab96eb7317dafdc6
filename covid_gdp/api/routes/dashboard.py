"""
Dashboard API Routes
Country selection with latest-selection-wins ordering
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from covid_gdp.api.deps import get_selection_tracker, http_error_for
from covid_gdp.api.schemas import series_response
from covid_gdp.domain.errors import SeriesError
from covid_gdp.services.selection_tracker import SelectionTracker

logger = logging.getLogger(__name__)
router = APIRouter()


class SelectionRequest(BaseModel):
    country: str = Field(..., min_length=2)


@router.post("/select")
async def select_country(
    payload: SelectionRequest,
    tracker: SelectionTracker = Depends(get_selection_tracker),
):
    """
    Select a country. A selection superseded by a later one before its data
    arrives reports `applied: false` and leaves the visible series untouched.
    """
    try:
        result = await tracker.select(payload.country)
    except SeriesError as exc:
        raise http_error_for(exc)

    return {
        "country": payload.country,
        "applied": result is not None,
        "generation": tracker.generation,
    }


@router.get("/current")
async def current_selection(tracker: SelectionTracker = Depends(get_selection_tracker)):
    """Visible series of the most recent applied selection."""
    if tracker.current is None:
        raise HTTPException(status_code=404, detail="No country selected yet")
    return {
        "selected": tracker.selected_key,
        "generation": tracker.generation,
        "series": series_response(tracker.current),
    }
