"""
CONFIG ENGINE
Load, validate, and expose the static country/provider tables

RESPONSIBILITIES:
- Load countries.yml once
- Validate provider mappings
- Expose read-only typed objects

RULES:
❌ No mutation after load
✅ Fail fast on invalid config
✅ Every country has a World Bank (primary) mapping
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple
from dataclasses import dataclass

import yaml

from covid_gdp.domain.errors import UnknownCountry
from covid_gdp.domain.models import (
    Country,
    GdpProviderName,
    GdpValueKind,
    OecdMapping,
    TradingEconomicsMapping,
)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


@dataclass(frozen=True)
class CountryRegistry:
    """Immutable lookup of supported countries"""
    countries: Tuple[Country, ...]
    default_key: str
    _by_alias: Mapping[str, Country]

    def resolve(self, country_key: str) -> Country:
        """
        Resolve a country by ISO-2 key, ISO-3 code, display name or
        case-series key (case-insensitive).
        """
        country = self._by_alias.get((country_key or "").strip().upper())
        if country is None:
            raise UnknownCountry(country_key)
        return country

    @property
    def default_country(self) -> Country:
        return self.resolve(self.default_key)


class ConfigEngine:
    """
    Configuration Engine
    Single source of truth for provider-selection tables
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize with config directory"""
        self.config_dir = config_dir or DEFAULT_CONFIG_DIR
        self._registry: Optional[CountryRegistry] = None

    def load_all(self) -> None:
        """Load all configuration files"""
        self._load_countries()

    def _load_countries(self) -> None:
        """Load countries from countries.yml"""
        countries_file = self.config_dir / "countries.yml"
        if not countries_file.exists():
            raise FileNotFoundError(f"Country config not found: {countries_file}")

        with open(countries_file, 'r') as f:
            data = yaml.safe_load(f) or {}

        countries = [self._parse_country(entry) for entry in data.get('countries', [])]
        if not countries:
            raise ValueError("No countries configured")

        by_alias: Dict[str, Country] = {}
        for country in countries:
            aliases = {country.key, country.iso3, country.name, country.covid_key}
            for alias in aliases:
                alias_key = alias.upper()
                existing = by_alias.get(alias_key)
                if existing is not None and existing is not country:
                    raise ValueError(f"Duplicate country alias in configuration: {alias}")
                by_alias[alias_key] = country

        default_key = str(data.get('default_country', countries[0].key))
        if default_key.upper() not in by_alias:
            raise ValueError(f"Default country not configured: {default_key}")

        self._registry = CountryRegistry(
            countries=tuple(countries),
            default_key=default_key,
            _by_alias=MappingProxyType(by_alias),
        )

    @staticmethod
    def _parse_country(entry: Dict) -> Country:
        te_cfg = entry.get('tradingeconomics')
        oecd_cfg = entry.get('oecd')

        tradingeconomics = None
        if te_cfg:
            tradingeconomics = TradingEconomicsMapping(
                name=te_cfg['name'],
                indicator=te_cfg.get('indicator', 'gdp growth rate'),
                value_kind=GdpValueKind(te_cfg.get('value_kind', 'growth')),
            )

        oecd = OecdMapping(series_code=oecd_cfg['series_code']) if oecd_cfg else None

        country = Country(
            key=entry['key'].upper(),
            iso3=entry['iso3'].upper(),
            name=entry['name'],
            covid_key=entry.get('covid_key', entry['name']),
            preferred_gdp_provider=GdpProviderName(
                entry.get('preferred_gdp_provider', GdpProviderName.WORLDBANK.value)
            ),
            tradingeconomics=tradingeconomics,
            oecd=oecd,
        )

        if country.preferred_gdp_provider == GdpProviderName.TRADINGECONOMICS and tradingeconomics is None:
            raise ValueError(f"{country.key}: preferred provider tradingeconomics has no mapping")
        if country.preferred_gdp_provider == GdpProviderName.OECD and oecd is None:
            raise ValueError(f"{country.key}: preferred provider oecd has no mapping")
        return country

    # Public getters

    @property
    def registry(self) -> CountryRegistry:
        """Get country registry"""
        if self._registry is None:
            raise RuntimeError("Config not loaded. Call load_all() first")
        return self._registry
