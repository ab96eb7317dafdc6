"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    AttemptOutcome,
    GdpProviderName,
    GdpValueKind,

    # Entities
    CaseRecord,
    Country,
    GdpFetchResult,
    GdpPoint,
    JoinedRecord,
    JoinedSeries,
    OecdMapping,
    ProviderAttempt,
    SummaryMetrics,
    TradingEconomicsMapping,
    Trend,
)
from .simulation import SimulationParams, SimulationState

__all__ = [
    # Enums
    "AttemptOutcome",
    "GdpProviderName",
    "GdpValueKind",

    # Entities
    "CaseRecord",
    "Country",
    "GdpFetchResult",
    "GdpPoint",
    "JoinedRecord",
    "JoinedSeries",
    "OecdMapping",
    "ProviderAttempt",
    "SummaryMetrics",
    "TradingEconomicsMapping",
    "Trend",

    # Simulation
    "SimulationParams",
    "SimulationState",
]
