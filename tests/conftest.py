import asyncio
from datetime import date
from typing import AsyncGenerator, Iterable, List, Optional

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from covid_gdp.api.routes import dashboard, health, series, simulation
from covid_gdp.domain.models import CaseRecord, GdpPoint, GdpProviderName
from covid_gdp.domain.services.config_engine import ConfigEngine
from covid_gdp.domain.services.series_joiner import compute_daily_deltas
from covid_gdp.services.selection_tracker import SelectionTracker
from covid_gdp.services.series_service import SeriesService


class FakeCaseProvider:
    def __init__(self, records: Optional[List[CaseRecord]] = None, error: Optional[Exception] = None):
        self.records = records or []
        self.error = error
        self.calls: List[str] = []

    async def fetch_case_series(self, country):
        self.calls.append(country.key)
        if self.error is not None:
            raise self.error
        return list(self.records)


class FakeGdpProvider:
    def __init__(
        self,
        name: GdpProviderName,
        points: Optional[List[GdpPoint]] = None,
        error: Optional[Exception] = None,
        configured: bool = True,
        supported: bool = True,
        fail_for: Iterable[str] = (),
        log: Optional[List[str]] = None,
    ):
        self.name = name
        self.points = points or []
        self.error = error
        self.configured = configured
        self.supported = supported
        self.fail_for = set(fail_for)
        self.log = log if log is not None else []
        self.calls: List[str] = []

    def is_configured(self) -> bool:
        return self.configured

    def supports(self, country) -> bool:
        return self.supported

    async def fetch_gdp_series(self, country):
        self.calls.append(country.iso3)
        self.log.append(f"{self.name.value}:start")
        await asyncio.sleep(0)
        self.log.append(f"{self.name.value}:end")
        if self.error is not None and (not self.fail_for or country.iso3 in self.fail_for):
            raise self.error
        return list(self.points)


def gdp(day: str, growth: float, provider: GdpProviderName = GdpProviderName.WORLDBANK) -> GdpPoint:
    return GdpPoint(date=date.fromisoformat(day), growth_percent=growth, source_provider=provider)


def cases(*rows) -> List[CaseRecord]:
    """rows: (iso date, cumulative confirmed[, cumulative deaths])"""
    return compute_daily_deltas(
        (date.fromisoformat(row[0]), row[1], row[2] if len(row) > 2 else 0, None)
        for row in rows
    )


@pytest.fixture(scope="session")
def registry():
    engine = ConfigEngine()
    engine.load_all()
    return engine.registry


@pytest.fixture()
def case_records() -> List[CaseRecord]:
    return cases(
        ("2020-12-30", 100, 1),
        ("2020-12-31", 130, 2),
        ("2021-01-01", 125, 2),
        ("2021-01-02", 160, 3),
    )


@pytest.fixture()
def worldbank_points() -> List[GdpPoint]:
    return [gdp("2019-12-31", 2.3), gdp("2020-12-31", -3.4)]


@pytest.fixture()
def case_provider(case_records) -> FakeCaseProvider:
    return FakeCaseProvider(records=case_records)


@pytest.fixture()
def gdp_providers(worldbank_points):
    return {
        GdpProviderName.WORLDBANK: FakeGdpProvider(GdpProviderName.WORLDBANK, points=worldbank_points),
        GdpProviderName.TRADINGECONOMICS: FakeGdpProvider(GdpProviderName.TRADINGECONOMICS, configured=False),
        GdpProviderName.OECD: FakeGdpProvider(
            GdpProviderName.OECD,
            points=[gdp("2020-12-27", -1.5, GdpProviderName.OECD)],
        ),
    }


@pytest.fixture()
def series_service(registry, case_provider, gdp_providers) -> SeriesService:
    return SeriesService(registry=registry, case_provider=case_provider, gdp_providers=gdp_providers)


@pytest.fixture()
async def app(series_service) -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(series.router, prefix="/api/v1", tags=["Series"])
    app.include_router(simulation.router, prefix="/api/v1/simulation", tags=["Simulation"])
    app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])

    app.state.series_service = series_service
    app.state.selection_tracker = SelectionTracker(series_service.get_joined_series, resolver=series_service.resolve)
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
