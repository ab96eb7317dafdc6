"""
API response models and converters from domain dataclasses.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from covid_gdp.domain.indicators.trend import compute_trend, rolling_average
from covid_gdp.domain.models import (
    CaseRecord,
    Country,
    GdpPoint,
    JoinedRecord,
    JoinedSeries,
    ProviderAttempt,
    SummaryMetrics,
    Trend,
)
from covid_gdp.domain.services.summary_engine import SummaryEngine


class CountryInfo(BaseModel):
    key: str
    iso3: str
    name: str
    preferred_gdp_provider: str
    gdp_providers: List[str]


class CaseRecordOut(BaseModel):
    date: date
    cumulative_confirmed: int
    cumulative_deaths: int
    recovered: Optional[int] = None
    new_cases: int
    new_deaths: Optional[int] = None


class GdpPointOut(BaseModel):
    date: date
    growth_percent: float
    source_provider: str


class JoinedRecordOut(BaseModel):
    date: date
    new_cases: int
    cumulative_confirmed: int
    cumulative_deaths: int
    gdp_growth_percent: Optional[float] = None


class ProviderAttemptOut(BaseModel):
    provider: str
    country_iso3: str
    outcome: str
    detail: Optional[str] = None


class SummaryOut(BaseModel):
    peak_new_cases: int
    peak_new_cases_date: date
    worst_gdp_growth: Optional[float] = None
    worst_gdp_growth_date: Optional[date] = None
    correlation: Optional[float] = None
    case_records: int
    gdp_records: int


class TrendOut(BaseModel):
    direction: str
    change: float
    pct: Optional[float] = None


class SeriesResponse(BaseModel):
    country: CountryInfo
    gdp_provider: str
    gdp_country_iso3: str
    attempts: List[ProviderAttemptOut]
    case_series: List[CaseRecordOut]
    gdp_series: List[GdpPointOut]
    joined_series: List[JoinedRecordOut]
    summary: Optional[SummaryOut] = None
    new_cases_rolling_average: List[Optional[float]]
    new_cases_trend: Optional[TrendOut] = None


def country_info(country: Country) -> CountryInfo:
    providers = ["worldbank"]
    if country.tradingeconomics is not None:
        providers.append("tradingeconomics")
    if country.oecd is not None:
        providers.append("oecd")
    return CountryInfo(
        key=country.key,
        iso3=country.iso3,
        name=country.name,
        preferred_gdp_provider=country.preferred_gdp_provider.value,
        gdp_providers=providers,
    )


def _case_out(record: CaseRecord) -> CaseRecordOut:
    return CaseRecordOut(
        date=record.date,
        cumulative_confirmed=record.cumulative_confirmed,
        cumulative_deaths=record.cumulative_deaths,
        recovered=record.recovered,
        new_cases=record.new_cases,
        new_deaths=record.new_deaths,
    )


def _gdp_out(point: GdpPoint) -> GdpPointOut:
    return GdpPointOut(
        date=point.date,
        growth_percent=point.growth_percent,
        source_provider=point.source_provider.value,
    )


def _joined_out(record: JoinedRecord) -> JoinedRecordOut:
    return JoinedRecordOut(
        date=record.date,
        new_cases=record.new_cases,
        cumulative_confirmed=record.cumulative_confirmed,
        cumulative_deaths=record.cumulative_deaths,
        gdp_growth_percent=record.gdp_growth_percent,
    )


def _attempt_out(attempt: ProviderAttempt) -> ProviderAttemptOut:
    return ProviderAttemptOut(
        provider=attempt.provider.value,
        country_iso3=attempt.country_iso3,
        outcome=attempt.outcome.value,
        detail=attempt.detail,
    )


def _summary_out(summary: Optional[SummaryMetrics]) -> Optional[SummaryOut]:
    if summary is None:
        return None
    return SummaryOut(
        peak_new_cases=summary.peak_new_cases,
        peak_new_cases_date=summary.peak_new_cases_date,
        worst_gdp_growth=summary.worst_gdp_growth,
        worst_gdp_growth_date=summary.worst_gdp_growth_date,
        correlation=summary.correlation,
        case_records=summary.case_records,
        gdp_records=summary.gdp_records,
    )


def _trend_out(trend: Optional[Trend]) -> Optional[TrendOut]:
    if trend is None:
        return None
    return TrendOut(direction=trend.direction, change=trend.change, pct=trend.pct)


def series_response(series: JoinedSeries, rolling_window: int = 7) -> SeriesResponse:
    new_cases = [row.new_cases for row in series.joined_series]
    summary = SummaryEngine().compute(
        series.joined_series,
        case_records=len(series.case_series),
        gdp_records=len(series.gdp_series),
    )
    return SeriesResponse(
        country=country_info(series.country),
        gdp_provider=series.gdp_provider.value,
        gdp_country_iso3=series.gdp_country_iso3,
        attempts=[_attempt_out(a) for a in series.attempts],
        case_series=[_case_out(r) for r in series.case_series],
        gdp_series=[_gdp_out(p) for p in series.gdp_series],
        joined_series=[_joined_out(r) for r in series.joined_series],
        summary=_summary_out(summary),
        new_cases_rolling_average=rolling_average(new_cases, rolling_window),
        new_cases_trend=_trend_out(compute_trend(new_cases, rolling_window)),
    )
