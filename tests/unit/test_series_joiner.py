import random
from datetime import date

import pytest

from covid_gdp.domain.models import GdpProviderName, JoinedRecord
from covid_gdp.domain.services.series_joiner import (
    compute_daily_deltas,
    derive_growth_from_levels,
    join_series,
    sort_gdp_series,
)

from conftest import cases, gdp


def test_join_carries_gdp_forward_onto_case_dates():
    case_series = cases(("2020-01-01", 10), ("2020-01-02", 15))
    gdp_series = [gdp("2020-01-01", -2.5)]

    joined = join_series(case_series, gdp_series)

    assert joined == [
        JoinedRecord(date(2020, 1, 1), new_cases=10, cumulative_confirmed=10, cumulative_deaths=0, gdp_growth_percent=-2.5),
        JoinedRecord(date(2020, 1, 2), new_cases=5, cumulative_confirmed=15, cumulative_deaths=0, gdp_growth_percent=-2.5),
    ]


def test_first_delta_is_baseline_and_corrections_clamp_to_zero():
    records = cases(("2020-03-01", 40, 2), ("2020-03-02", 55, 1), ("2020-03-03", 50, 4), ("2020-03-04", 70, 4))

    assert [r.new_cases for r in records] == [40, 15, 0, 20]
    assert [r.new_deaths for r in records] == [2, 0, 3, 0]


def test_recovered_is_kept_as_reported():
    records = compute_daily_deltas([
        (date(2020, 3, 1), 5, 0, None),
        (date(2020, 3, 2), 8, 1, 2),
    ])
    assert records[0].recovered is None
    assert records[1].recovered == 2


def test_case_dates_before_first_gdp_point_have_no_growth():
    case_series = cases(("2020-06-29", 1), ("2020-06-30", 2), ("2020-07-01", 3))
    joined = join_series(case_series, [gdp("2020-06-30", 1.2)])

    assert [r.gdp_growth_percent for r in joined] == [None, 1.2, 1.2]


def test_last_gdp_value_carries_to_end_of_case_series():
    case_series = cases(*[(f"2021-01-{day:02d}", day) for day in range(1, 11)])
    gdp_series = [gdp("2019-12-31", 2.3), gdp("2020-12-31", -3.4)]

    joined = join_series(case_series, gdp_series)

    assert all(r.gdp_growth_percent == -3.4 for r in joined)


def test_pointer_skips_several_gdp_points_between_case_dates():
    case_series = cases(("2020-01-01", 1), ("2020-03-01", 2))
    gdp_series = [
        gdp("2020-01-05", 1.0),
        gdp("2020-01-12", 2.0),
        gdp("2020-01-19", 3.0),
        gdp("2020-03-08", 4.0),
    ]

    joined = join_series(case_series, gdp_series)

    assert [r.gdp_growth_percent for r in joined] == [None, 3.0]


def test_empty_gdp_series_leaves_growth_absent():
    joined = join_series(cases(("2020-01-01", 1), ("2020-01-02", 3)), [])
    assert [r.gdp_growth_percent for r in joined] == [None, None]


def test_empty_case_series_joins_to_nothing():
    assert join_series([], [gdp("2020-01-01", 1.0)]) == []


def test_join_is_stable_under_resorting_gdp_series():
    case_series = cases(*[(f"2020-{month:02d}-15", month * 10) for month in range(1, 13)])
    gdp_series = sort_gdp_series([
        gdp("2020-03-31", -1.0),
        gdp("2020-06-30", -9.0),
        gdp("2020-06-30", -8.5, GdpProviderName.TRADINGECONOMICS),
        gdp("2020-09-30", 7.5),
    ])
    expected = join_series(case_series, gdp_series)

    rng = random.Random(7)
    for _ in range(10):
        shuffled = list(gdp_series)
        rng.shuffle(shuffled)
        assert join_series(case_series, sort_gdp_series(shuffled)) == expected


def test_derive_growth_from_levels_drops_first_zero_and_missing_previous():
    levels = [
        (date(2020, 3, 31), 100.0),
        (date(2020, 6, 30), 110.0),
        (date(2020, 9, 30), None),
        (date(2020, 12, 31), 121.0),
        (date(2021, 3, 31), 0.0),
        (date(2021, 6, 30), 5.0),
    ]

    points = derive_growth_from_levels(levels, GdpProviderName.TRADINGECONOMICS)

    assert [p.date for p in points] == [date(2020, 6, 30), date(2021, 3, 31)]
    assert points[0].growth_percent == pytest.approx(10.0)
    assert points[1].growth_percent == pytest.approx(-100.0)
    assert all(p.source_provider == GdpProviderName.TRADINGECONOMICS for p in points)


def test_derive_growth_from_single_level_is_empty():
    assert derive_growth_from_levels([(date(2020, 1, 1), 50.0)], GdpProviderName.TRADINGECONOMICS) == []
