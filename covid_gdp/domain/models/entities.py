"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class GdpProviderName(str, Enum):
    """Upstream GDP data source"""
    WORLDBANK = "worldbank"
    TRADINGECONOMICS = "tradingeconomics"
    OECD = "oecd"


class GdpValueKind(str, Enum):
    """What a provider's raw values represent"""
    GROWTH = "growth"
    LEVEL = "level"


class AttemptOutcome(str, Enum):
    """Result of one provider attempt inside the fallback chain"""
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CaseRecord:
    """One day of a cumulative case series with derived daily deltas"""
    date: date
    cumulative_confirmed: int
    cumulative_deaths: int
    new_cases: int
    recovered: Optional[int] = None
    new_deaths: Optional[int] = None

    def __post_init__(self):
        if self.cumulative_confirmed < 0:
            raise ValueError("Cumulative confirmed cannot be negative")
        if self.cumulative_deaths < 0:
            raise ValueError("Cumulative deaths cannot be negative")
        if self.new_cases < 0:
            raise ValueError("New cases cannot be negative")


@dataclass(frozen=True)
class GdpPoint:
    """GDP growth observation dated at the end of its reporting period"""
    date: date
    growth_percent: float
    source_provider: GdpProviderName


@dataclass(frozen=True)
class JoinedRecord:
    """Case record with the GDP growth in force on that day"""
    date: date
    new_cases: int
    cumulative_confirmed: int
    cumulative_deaths: int
    gdp_growth_percent: Optional[float] = None


@dataclass(frozen=True)
class TradingEconomicsMapping:
    name: str
    indicator: str
    value_kind: GdpValueKind


@dataclass(frozen=True)
class OecdMapping:
    series_code: str


@dataclass(frozen=True)
class Country:
    """Country definition with per-provider identifiers - Immutable"""
    key: str
    iso3: str
    name: str
    covid_key: str
    preferred_gdp_provider: GdpProviderName
    tradingeconomics: Optional[TradingEconomicsMapping] = None
    oecd: Optional[OecdMapping] = None

    def __post_init__(self):
        if not self.key:
            raise ValueError("Country key cannot be empty")
        if len(self.iso3) != 3:
            raise ValueError(f"Invalid ISO-3 code for {self.key}: {self.iso3!r}")


@dataclass(frozen=True)
class ProviderAttempt:
    provider: GdpProviderName
    country_iso3: str
    outcome: AttemptOutcome
    detail: Optional[str] = None


@dataclass(frozen=True)
class GdpFetchResult:
    """
    Outcome of the GDP fallback chain.

    `attempts` lists every provider considered, in order, including the
    ones that were skipped or failed before the winning provider.
    """
    points: List[GdpPoint]
    provider: GdpProviderName
    country_iso3: str
    attempts: List[ProviderAttempt] = field(default_factory=list)


@dataclass(frozen=True)
class JoinedSeries:
    country: Country
    case_series: List[CaseRecord]
    gdp_series: List[GdpPoint]
    joined_series: List[JoinedRecord]
    gdp_provider: GdpProviderName
    gdp_country_iso3: str
    attempts: List[ProviderAttempt] = field(default_factory=list)


@dataclass(frozen=True)
class SummaryMetrics:
    """Headline figures for a joined series"""
    peak_new_cases: int
    peak_new_cases_date: date
    worst_gdp_growth: Optional[float]
    worst_gdp_growth_date: Optional[date]
    correlation: Optional[float]
    case_records: int
    gdp_records: int


@dataclass(frozen=True)
class Trend:
    direction: str
    change: float
    pct: Optional[float]
