"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # ======================
    # Transport
    # ======================
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # ======================
    # Case series (pomber COVID-19 time series)
    # ======================
    COVID_TIMESERIES_URL: str = "https://pomber.github.io/covid19/timeseries.json"

    # ======================
    # GDP providers
    # ======================
    WORLDBANK_API_URL: str = "https://api.worldbank.org/v2"
    WORLDBANK_GDP_INDICATOR: str = "NY.GDP.MKTP.KD.ZG"

    TRADINGECONOMICS_API_URL: str = "https://api.tradingeconomics.com"
    TRADINGECONOMICS_API_KEY: Optional[str] = None

    OECD_TRACKER_API_URL: str = "https://api.db.nomics.world/v22"
    OECD_TRACKER_DATASET: str = "OECD/WEEKLY_TRACKER"

    # ======================
    # Fallback policy
    # ======================
    DEFAULT_COUNTRY: str = "US"
    GDP_DEFAULT_COUNTRY_FALLBACK: bool = False

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
