import pytest

from covid_gdp.domain.errors import MalformedResponse, UpstreamUnavailable
from covid_gdp.domain.models import AttemptOutcome, GdpProviderName
from covid_gdp.infrastructure.data_sources.provider_chain import build_gdp_chain

from conftest import FakeGdpProvider, gdp

WB = GdpProviderName.WORLDBANK
TE = GdpProviderName.TRADINGECONOMICS
OECD = GdpProviderName.OECD


def _providers():
    providers = {
        WB: FakeGdpProvider(WB, points=[gdp("2020-12-31", -3.4)]),
        TE: FakeGdpProvider(TE, points=[gdp("2020-06-30", -9.0, TE)]),
        OECD: FakeGdpProvider(OECD, points=[gdp("2020-05-03", -12.0, OECD)]),
    }
    return providers


async def test_secondary_without_token_only_calls_primary(registry):
    providers = _providers()
    providers[TE] = FakeGdpProvider(TE, points=[gdp("2020-06-30", -9.0, TE)], configured=False)
    country = registry.resolve("US")

    result = await build_gdp_chain(country, providers, preferred=TE).fetch()

    assert providers[TE].calls == []
    assert providers[WB].calls == ["USA"]
    assert result.provider == WB
    assert [a.outcome for a in result.attempts] == [AttemptOutcome.SKIPPED, AttemptOutcome.SUCCEEDED]


async def test_secondary_without_country_mapping_is_skipped(registry):
    providers = _providers()
    providers[TE] = FakeGdpProvider(TE, supported=False)

    result = await build_gdp_chain(registry.resolve("JP"), providers, preferred=TE).fetch()

    assert providers[TE].calls == []
    assert result.provider == WB
    assert result.attempts[0].detail == "no country mapping"


async def test_failing_secondary_falls_back_to_primary(registry):
    providers = _providers()
    providers[TE] = FakeGdpProvider(TE, error=UpstreamUnavailable("HTTP 503", provider="tradingeconomics"))

    result = await build_gdp_chain(registry.resolve("US"), providers, preferred=TE).fetch()

    assert result.provider == WB
    assert result.points == [gdp("2020-12-31", -3.4)]
    assert result.attempts[0].outcome == AttemptOutcome.FAILED
    assert "HTTP 503" in result.attempts[0].detail


async def test_malformed_secondary_falls_back_to_primary(registry):
    providers = _providers()
    providers[OECD] = FakeGdpProvider(OECD, error=MalformedResponse("missing series docs"))

    result = await build_gdp_chain(registry.resolve("DE"), providers, preferred=OECD).fetch()

    assert result.provider == WB
    assert providers[WB].calls == ["DEU"]


async def test_empty_secondary_falls_back_to_primary(registry):
    providers = _providers()
    providers[OECD] = FakeGdpProvider(OECD, points=[])

    result = await build_gdp_chain(registry.resolve("DE"), providers, preferred=OECD).fetch()

    assert result.provider == WB
    assert result.attempts[0].outcome == AttemptOutcome.FAILED


async def test_successful_secondary_stops_the_chain(registry):
    providers = _providers()

    result = await build_gdp_chain(registry.resolve("DE"), providers, preferred=OECD).fetch()

    assert result.provider == OECD
    assert providers[WB].calls == []


async def test_fallback_attempts_run_sequentially(registry):
    log = []
    providers = {
        WB: FakeGdpProvider(WB, points=[gdp("2020-12-31", -3.4)], log=log),
        TE: FakeGdpProvider(TE, error=UpstreamUnavailable("down"), log=log),
        OECD: FakeGdpProvider(OECD, log=log),
    }

    await build_gdp_chain(registry.resolve("US"), providers, preferred=TE).fetch()

    assert log == ["tradingeconomics:start", "tradingeconomics:end", "worldbank:start", "worldbank:end"]


async def test_primary_failure_propagates(registry):
    providers = _providers()
    providers[WB] = FakeGdpProvider(WB, error=UpstreamUnavailable("World Bank returned HTTP 500"))

    with pytest.raises(UpstreamUnavailable, match="HTTP 500"):
        await build_gdp_chain(registry.resolve("IT"), providers).fetch()


async def test_primary_malformed_response_propagates(registry):
    providers = _providers()
    providers[TE] = FakeGdpProvider(TE, configured=False)
    providers[WB] = FakeGdpProvider(WB, error=MalformedResponse("World Bank payload is not a list"))

    with pytest.raises(MalformedResponse):
        await build_gdp_chain(registry.resolve("US"), providers).fetch()


async def test_primary_empty_series_is_not_returned(registry):
    providers = _providers()
    providers[WB] = FakeGdpProvider(WB, points=[])

    with pytest.raises(UpstreamUnavailable):
        await build_gdp_chain(registry.resolve("FR"), providers).fetch()


async def test_preferred_primary_is_a_single_attempt(registry):
    chain = build_gdp_chain(registry.resolve("IT"), _providers(), preferred=WB)
    assert chain.provider_names == [WB]


async def test_default_country_fallback_reports_substitution(registry):
    providers = _providers()
    providers[WB] = FakeGdpProvider(WB, points=[gdp("2020-12-31", -3.4)], error=UpstreamUnavailable("down"), fail_for={"ITA"})

    result = await build_gdp_chain(
        registry.resolve("IT"),
        providers,
        default_country=registry.default_country,
    ).fetch()

    assert providers[WB].calls == ["ITA", "USA"]
    assert result.country_iso3 == "USA"
    assert [a.country_iso3 for a in result.attempts] == ["ITA", "USA"]
