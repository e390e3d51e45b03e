"""Tests for the flight resolver chain."""

from __future__ import annotations

import asyncio
import random
import time

import httpx

from skylog.contracts.enums import DataSource
from skylog.contracts.flight import PartialFlight
from skylog.services.errors import TransientSourceError
from skylog.services.flight_data.resolver import (
    FlightResolver,
    ResolverSettings,
    build_default_resolver,
)
from skylog.services.flight_data.synthetic import SyntheticFlightSource


class StubSource:
    """Configurable FlightSource double that records its calls."""

    def __init__(self, name, source=DataSource.STRUCTURED_API, result=None, error=None,
                 delay=0.0, configured=True, fail_times=0, block=0.0):
        self.name = name
        self.source = source
        self._result = result
        self._error = error
        self._delay = delay
        self._configured = configured
        self._fail_times = fail_times
        self._block = block
        self.calls = 0

    @property
    def is_configured(self):
        return self._configured

    async def lookup(self, flight_number, date=None):
        self.calls += 1
        if self._block:
            # Holds the event loop, so no timeout can interrupt it.
            time.sleep(self._block)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self.calls <= self._fail_times:
            raise TransientSourceError("flaky")
        if self._error is not None:
            raise self._error
        return self._result


def _partial(source=DataSource.STRUCTURED_API, dep="DEL", arr="BOM"):
    return PartialFlight(source=source, flight_number="QP1457", departure_iata=dep, arrival_iata=arr)


FAST = ResolverSettings(source_timeout=0.2, live_budget=1.0)


class TestFlightResolver:
    async def test_first_usable_source_wins(self):
        first = StubSource("first", result=_partial(dep="DEL", arr="BOM"))
        second = StubSource("second", result=_partial(dep="BOM", arr="BLR"))
        flight = await FlightResolver([first, second], FAST).resolve("QP1457")
        assert flight.route.departure.iata == "DEL"
        assert second.calls == 0

    async def test_unconfigured_source_skipped(self):
        skipped = StubSource("off", result=_partial(), configured=False)
        fallback = SyntheticFlightSource(rng=random.Random(0))
        flight = await FlightResolver([skipped, fallback], FAST).resolve("QP1457")
        assert skipped.calls == 0
        assert flight.source == DataSource.SYNTHETIC.value

    async def test_failing_source_does_not_abort_chain(self):
        broken = StubSource("broken", error=RuntimeError("boom"))
        empty = StubSource("empty", result=None)
        fallback = SyntheticFlightSource(rng=random.Random(0))
        flight = await FlightResolver([broken, empty, fallback], FAST).resolve("qp 1457")
        assert flight.flight_number == "QP1457"
        assert (flight.route.departure.iata, flight.route.arrival.iata) == ("BOM", "BLR")
        assert flight.route.distance_km == 865
        assert flight.aircraft.type == "Airbus A320neo"

    async def test_unusable_partial_falls_through(self):
        no_route = StubSource("no-route", result=PartialFlight(source=DataSource.LIVE_SCRAPE, flight_number="QP1457"))
        good = StubSource("good", result=_partial())
        flight = await FlightResolver([no_route, good], FAST).resolve("QP1457")
        assert flight is not None
        assert good.calls == 1

    async def test_transient_error_retried_once(self):
        flaky = StubSource("flaky", result=_partial(), fail_times=1)
        flight = await FlightResolver([flaky], FAST).resolve("QP1457")
        assert flight is not None
        assert flaky.calls == 2

    async def test_transient_error_twice_gives_up(self):
        flaky = StubSource("flaky", result=_partial(), fail_times=5)
        assert await FlightResolver([flaky], FAST).resolve("QP1457") is None
        assert flaky.calls == 2

    async def test_slow_source_times_out(self):
        slow = StubSource("slow", result=_partial(), delay=5.0)
        fallback = SyntheticFlightSource(rng=random.Random(0))
        flight = await FlightResolver([slow, fallback], FAST).resolve("QP1457")
        assert flight.source == DataSource.SYNTHETIC.value

    async def test_live_budget_skips_remaining_live_sources(self):
        settings = ResolverSettings(source_timeout=0.2, live_budget=0.1)
        slow = StubSource("slow", result=None, block=0.15)
        never = StubSource("never", result=_partial())
        fallback = SyntheticFlightSource(rng=random.Random(0))
        flight = await FlightResolver([slow, never, fallback], settings).resolve("QP1457")
        assert never.calls == 0
        assert flight.source == DataSource.SYNTHETIC.value

    async def test_invalid_input_resolves_to_none(self):
        source = StubSource("any", result=_partial())
        resolver = FlightResolver([source], FAST)
        assert await resolver.resolve("not a flight") is None
        assert await resolver.resolve("QP1457", "14/03/2026") is None
        assert source.calls == 0

    async def test_nothing_found(self):
        assert await FlightResolver([StubSource("empty")], FAST).resolve("QP1457") is None


class TestResolverSettings:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AVIATIONSTACK_API_KEY", "secret")
        monkeypatch.setenv("SKYLOG_LIVE_SCRAPE", "0")
        monkeypatch.setenv("SKYLOG_OPENSKY", "yes")
        monkeypatch.setenv("SKYLOG_SOURCE_TIMEOUT", "1.5")
        monkeypatch.setenv("SKYLOG_LIVE_BUDGET", "nope")
        settings = ResolverSettings.from_env()
        assert settings.aviationstack_api_key == "secret"
        assert settings.live_scrape_enabled is False
        assert settings.opensky_enabled is True
        assert settings.source_timeout == 1.5
        assert settings.live_budget == 6.0

    async def test_default_chain_order(self):
        async with httpx.AsyncClient() as http:
            resolver = build_default_resolver(ResolverSettings(), http_client=http)
        assert [s.name for s in resolver.sources] == ["aviationstack", "live-scrape", "opensky", "synthetic"]
        assert not resolver.sources[0].is_configured

    async def test_default_chain_offline(self):
        settings = ResolverSettings(live_scrape_enabled=False, opensky_enabled=False)
        async with httpx.AsyncClient() as http:
            flight = await build_default_resolver(settings, http_client=http).resolve("QP1457")
        assert flight.source == DataSource.SYNTHETIC.value
        assert flight.route.arrival.iata == "BLR"
