"""
CSV export of joined series.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from covid_gdp.domain.models import JoinedRecord

EXPORT_COLUMNS = [
    "date",
    "new_cases",
    "cumulative_confirmed",
    "cumulative_deaths",
    "gdp_growth_percent",
]


def joined_to_frame(rows: Sequence[JoinedRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "date": row.date.isoformat(),
                "new_cases": row.new_cases,
                "cumulative_confirmed": row.cumulative_confirmed,
                "cumulative_deaths": row.cumulative_deaths,
                "gdp_growth_percent": row.gdp_growth_percent,
            }
            for row in rows
        ],
        columns=EXPORT_COLUMNS,
    )


def joined_to_csv(rows: Sequence[JoinedRecord]) -> str:
    """Absent GDP growth is written as an empty field."""
    return joined_to_frame(rows).to_csv(index=False)
