"""
SUMMARY ENGINE
Headline metrics for a joined country series

RESPONSIBILITIES:
- Peak daily new cases
- Worst GDP growth
- Correlation between new cases and GDP growth
"""

import math
from typing import Optional, Sequence

import pandas as pd

from covid_gdp.domain.models import JoinedRecord, SummaryMetrics


class SummaryEngine:
    """
    Summary Engine
    Pure calculation over an already joined series
    """

    def compute(
        self,
        joined: Sequence[JoinedRecord],
        case_records: int,
        gdp_records: int,
    ) -> Optional[SummaryMetrics]:
        """
        Compute summary metrics

        Args:
            joined: joined series, oldest first
            case_records: size of the source case series
            gdp_records: size of the source GDP series

        Returns:
            SummaryMetrics, or None for an empty series
        """
        if not joined:
            return None

        peak = joined[0]
        for row in joined:
            if row.new_cases > peak.new_cases:
                peak = row

        with_gdp = [row for row in joined if row.gdp_growth_percent is not None]
        worst = None
        for row in with_gdp:
            if worst is None or row.gdp_growth_percent < worst.gdp_growth_percent:
                worst = row

        return SummaryMetrics(
            peak_new_cases=peak.new_cases,
            peak_new_cases_date=peak.date,
            worst_gdp_growth=worst.gdp_growth_percent if worst else None,
            worst_gdp_growth_date=worst.date if worst else None,
            correlation=self._correlation(with_gdp),
            case_records=case_records,
            gdp_records=gdp_records,
        )

    @staticmethod
    def _correlation(rows: Sequence[JoinedRecord]) -> Optional[float]:
        """Pearson correlation; None with fewer than two rows or zero variance."""
        if len(rows) < 2:
            return None

        cases = pd.Series([float(row.new_cases) for row in rows])
        growth = pd.Series([float(row.gdp_growth_percent) for row in rows])
        if cases.var() == 0 or growth.var() == 0:
            return None

        value = cases.corr(growth)
        if value is None or math.isnan(value):
            return None
        return float(value)
