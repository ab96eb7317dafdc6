"""
Provider chain - try preferred, then fallbacks, strictly in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from covid_gdp.domain.errors import SeriesError, UpstreamUnavailable
from covid_gdp.domain.models import (
    AttemptOutcome,
    Country,
    GdpFetchResult,
    GdpProviderName,
    ProviderAttempt,
)
from covid_gdp.infrastructure.data_sources.types import GdpSeriesProvider


@dataclass(frozen=True)
class ChainStep:
    provider: GdpSeriesProvider
    country: Country


class GdpProviderChain:
    """
    Ordered GDP provider attempts.

    Each step runs only after the previous one has failed. Skipped and
    failed steps are recorded in the result's attempts; the error of the
    last attempted step propagates when nothing succeeds.
    """

    def __init__(self, steps: List[ChainStep]):
        if not steps:
            raise ValueError("GDP provider chain needs at least one step")
        self.steps = steps

    @property
    def provider_names(self) -> List[GdpProviderName]:
        return [step.provider.name for step in self.steps]

    async def fetch(self) -> GdpFetchResult:
        attempts: List[ProviderAttempt] = []
        last_error: Optional[SeriesError] = None

        for step in self.steps:
            provider = step.provider
            if not provider.is_configured():
                attempts.append(self._attempt(step, AttemptOutcome.SKIPPED, "not configured"))
                continue
            if not provider.supports(step.country):
                attempts.append(self._attempt(step, AttemptOutcome.SKIPPED, "no country mapping"))
                continue

            try:
                points = await provider.fetch_gdp_series(step.country)
            except SeriesError as exc:
                attempts.append(self._attempt(step, AttemptOutcome.FAILED, str(exc)))
                last_error = exc
                continue

            if not points:
                last_error = UpstreamUnavailable(
                    f"{provider.name.value} returned an empty series",
                    provider=provider.name.value,
                )
                attempts.append(self._attempt(step, AttemptOutcome.FAILED, str(last_error)))
                continue

            attempts.append(self._attempt(step, AttemptOutcome.SUCCEEDED))
            return GdpFetchResult(
                points=points,
                provider=provider.name,
                country_iso3=step.country.iso3,
                attempts=attempts,
            )

        if last_error is not None:
            raise last_error
        raise UpstreamUnavailable("No GDP provider could be attempted")

    @staticmethod
    def _attempt(step: ChainStep, outcome: AttemptOutcome, detail: Optional[str] = None) -> ProviderAttempt:
        return ProviderAttempt(
            provider=step.provider.name,
            country_iso3=step.country.iso3,
            outcome=outcome,
            detail=detail,
        )


def build_gdp_chain(
    country: Country,
    providers: Mapping[GdpProviderName, GdpSeriesProvider],
    preferred: Optional[GdpProviderName] = None,
    primary: GdpProviderName = GdpProviderName.WORLDBANK,
    default_country: Optional[Country] = None,
) -> GdpProviderChain:
    """
    Preferred provider first, primary provider last.

    With `default_country` set, a final primary attempt for that country is
    appended after the requested country's primary attempt.
    """
    if primary not in providers:
        raise ValueError(f"Primary GDP provider not registered: {primary.value}")

    preferred = preferred or country.preferred_gdp_provider
    steps: List[ChainStep] = []
    if preferred != primary and preferred in providers:
        steps.append(ChainStep(providers[preferred], country))
    steps.append(ChainStep(providers[primary], country))

    if default_country is not None and default_country.iso3 != country.iso3:
        steps.append(ChainStep(providers[primary], default_country))

    return GdpProviderChain(steps)
