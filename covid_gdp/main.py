"""
FastAPI Main Application
COVID-19 case series joined with GDP growth, plus the healthy/infected simulator
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from covid_gdp.config import settings
from covid_gdp.core.logging import get_logger, setup_logging
from covid_gdp.domain.services.config_engine import ConfigEngine
from covid_gdp.infrastructure.data_sources.provider_factory import get_case_provider, get_gdp_providers
from covid_gdp.services.selection_tracker import SelectionTracker
from covid_gdp.services.series_service import SeriesService

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


def build_series_service(config_engine: ConfigEngine) -> SeriesService:
    return SeriesService(
        registry=config_engine.registry,
        case_provider=get_case_provider(settings),
        gdp_providers=get_gdp_providers(settings),
        default_country_fallback=settings.GDP_DEFAULT_COUNTRY_FALLBACK,
        default_country_key=settings.DEFAULT_COUNTRY,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Loads static configuration once and wires services onto app.state
    """
    logger.info("="*60)
    logger.info("🚀 Starting COVID-GDP Series Service")
    logger.info("="*60)

    # 1. Load configuration
    logger.info("⚙️  Step 1/2: Loading country configuration...")
    config_engine = ConfigEngine()
    config_engine.load_all()
    logger.info(f"✅ {len(config_engine.registry.countries)} countries loaded")

    # 2. Initialize services
    logger.info("🏗️  Step 2/2: Initializing data sources...")
    series_service = build_series_service(config_engine)
    app.state.config_engine = config_engine
    app.state.series_service = series_service
    app.state.selection_tracker = SelectionTracker(series_service.get_joined_series, resolver=series_service.resolve)

    te_status = "configured" if settings.TRADINGECONOMICS_API_KEY else "no API key, skipped"
    logger.info(f"   📊 Trading Economics: {te_status}")
    logger.info(f"   🔁 Default-country GDP fallback: {'Enabled' if settings.GDP_DEFAULT_COUNTRY_FALLBACK else 'Disabled'}")
    logger.info("✅ Services initialized")

    yield

    logger.info("👋 COVID-GDP Series Service shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="COVID-19 vs GDP Growth",
    description="Daily COVID-19 cases joined with GDP growth from fallback providers",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "COVID-19 vs Economic Activity",
        "version": "1.0.0",
        "docs": "/docs"
    }


# Import and include routers
from covid_gdp.api.routes import dashboard, health, series, simulation

app.include_router(health.router, tags=["Health"])
app.include_router(series.router, prefix="/api/v1", tags=["Series"])
app.include_router(simulation.router, prefix="/api/v1/simulation", tags=["Simulation"])
app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("covid_gdp.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
