"""
SERIES JOINER
Normalize and align case and GDP series

RESPONSIBILITIES:
- Derive daily deltas from cumulative counts
- Derive growth from level-reporting GDP feeds
- Step-function join of GDP growth onto case dates

RULES:
❌ No I/O
✅ Pure calculation
✅ Deterministic output
"""

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from covid_gdp.domain.models import (
    CaseRecord,
    GdpPoint,
    GdpProviderName,
    JoinedRecord,
)


def _delta(current: int, previous: Optional[int]) -> int:
    if previous is None:
        return current
    return max(0, current - previous)


def compute_daily_deltas(
    rows: Iterable[Tuple[date, int, int, Optional[int]]],
) -> List[CaseRecord]:
    """
    Build case records from cumulative rows.

    Args:
        rows: (date, cumulative_confirmed, cumulative_deaths, recovered), oldest first

    Returns:
        Case records whose first delta equals its own cumulative value and
        whose later deltas are clamped at zero on downward revisions.
    """
    records: List[CaseRecord] = []
    prev_confirmed: Optional[int] = None
    prev_deaths: Optional[int] = None

    for day, confirmed, deaths, recovered in rows:
        records.append(
            CaseRecord(
                date=day,
                cumulative_confirmed=confirmed,
                cumulative_deaths=deaths,
                recovered=recovered,
                new_cases=_delta(confirmed, prev_confirmed),
                new_deaths=_delta(deaths, prev_deaths),
            )
        )
        prev_confirmed = confirmed
        prev_deaths = deaths

    return records


def derive_growth_from_levels(
    levels: Sequence[Tuple[date, Optional[float]]],
    provider: GdpProviderName,
) -> List[GdpPoint]:
    """
    Convert level observations into period-over-period growth percentages.

    The first level has no growth. A point whose previous level is zero or
    missing is dropped.
    """
    points: List[GdpPoint] = []
    previous: Optional[float] = None

    for day, value in levels:
        if previous is not None and value is not None and previous != 0:
            points.append(
                GdpPoint(
                    date=day,
                    growth_percent=(value - previous) / previous * 100,
                    source_provider=provider,
                )
            )
        previous = value

    return points


def sort_gdp_series(points: Iterable[GdpPoint]) -> List[GdpPoint]:
    # Total order so same-date points land identically for any input permutation
    return sorted(points, key=lambda p: (p.date, p.source_provider.value, p.growth_percent))


def join_series(
    case_series: Sequence[CaseRecord],
    gdp_series: Sequence[GdpPoint],
) -> List[JoinedRecord]:
    """
    Attach to every case date the growth of the latest GDP point dated on
    or before it.

    Both inputs must be sorted ascending by date. The GDP pointer only moves
    forward, so the cost is O(n + m).
    """
    joined: List[JoinedRecord] = []
    pointer = -1
    gdp_count = len(gdp_series)

    for record in case_series:
        while pointer + 1 < gdp_count and gdp_series[pointer + 1].date <= record.date:
            pointer += 1

        growth = gdp_series[pointer].growth_percent if pointer >= 0 else None
        joined.append(
            JoinedRecord(
                date=record.date,
                new_cases=record.new_cases,
                cumulative_confirmed=record.cumulative_confirmed,
                cumulative_deaths=record.cumulative_deaths,
                gdp_growth_percent=growth,
            )
        )

    return joined
