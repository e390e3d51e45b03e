"""Flight resolver chain.

Tries sources in priority order and returns the first usable result as a
``NormalizedFlight``:

1. AviationStack structured API (skipped without ``AVIATIONSTACK_API_KEY``)
2. Live search-page scrape
3. OpenSky network tracking
4. Deterministic synthetic generator

A failing source never aborts the chain.  Each live call is bounded by a
per-source timeout, and all live sources share one time budget; once it is
spent the chain goes straight to the synthetic generator.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Sequence

import httpx

from skylog.contracts.enums import DataSource
from skylog.contracts.flight import NormalizedFlight
from skylog.services.errors import TransientSourceError, ValidationError
from skylog.services.flight_data.aviation_api import AviationStackSource
from skylog.services.flight_data.base import FlightSource
from skylog.services.flight_data.live_scrape import LiveScrapeSource
from skylog.services.flight_data.normalize import normalize_partial, validate_date, validate_flight_number
from skylog.services.flight_data.opensky import OpenSkySource
from skylog.services.flight_data.synthetic import SyntheticFlightSource

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_TIMEOUT = 3.0
DEFAULT_LIVE_BUDGET = 6.0


def _env_flag(name: str, default: bool = True) -> bool:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, value, default)
        return default


@dataclass(frozen=True)
class ResolverSettings:
    aviationstack_api_key: str | None = None
    live_scrape_enabled: bool = True
    opensky_enabled: bool = True
    source_timeout: float = DEFAULT_SOURCE_TIMEOUT
    live_budget: float = DEFAULT_LIVE_BUDGET

    @classmethod
    def from_env(cls) -> "ResolverSettings":
        return cls(
            aviationstack_api_key=os.environ.get("AVIATIONSTACK_API_KEY") or None,
            live_scrape_enabled=_env_flag("SKYLOG_LIVE_SCRAPE"),
            opensky_enabled=_env_flag("SKYLOG_OPENSKY"),
            source_timeout=_env_float("SKYLOG_SOURCE_TIMEOUT", DEFAULT_SOURCE_TIMEOUT),
            live_budget=_env_float("SKYLOG_LIVE_BUDGET", DEFAULT_LIVE_BUDGET),
        )


class FlightResolver:
    """Ordered chain of ``FlightSource`` strategies."""

    def __init__(self, sources: Sequence[FlightSource], settings: ResolverSettings | None = None):
        self._sources = list(sources)
        self._settings = settings or ResolverSettings()

    @property
    def sources(self) -> list[FlightSource]:
        return list(self._sources)

    async def resolve(self, flight_number: str, date: str | None = None) -> NormalizedFlight | None:
        """Resolve a flight, or None when the input is invalid or every source fails."""
        try:
            fn = validate_flight_number(flight_number)
            date = validate_date(date)
        except ValidationError as exc:
            logger.info("Not resolving %r: %s", flight_number, exc)
            return None

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._settings.live_budget

        for source in self._sources:
            if not source.is_configured:
                logger.debug("Skipping unconfigured source %s", source.name)
                continue

            is_fallback = source.source == DataSource.SYNTHETIC
            if not is_fallback and loop.time() >= deadline:
                logger.warning("Live lookup budget spent, skipping %s for %s", source.name, fn)
                continue

            flight = await self._try_source(source, fn, date, None if is_fallback else deadline)
            if flight is not None:
                logger.info("Resolved %s via %s", fn, source.name)
                return flight

        logger.warning("No source could resolve %s", fn)
        return None

    async def _try_source(
        self,
        source: FlightSource,
        flight_number: str,
        date: str | None,
        deadline: float | None,
    ) -> NormalizedFlight | None:
        """Run one source with timeout and a single retry on transient errors."""
        loop = asyncio.get_running_loop()
        for attempt in (1, 2):
            timeout = self._settings.source_timeout
            if deadline is not None:
                timeout = min(timeout, deadline - loop.time())
                if timeout <= 0:
                    return None
            try:
                partial = await asyncio.wait_for(source.lookup(flight_number, date), timeout=timeout)
            except TransientSourceError as exc:
                if attempt == 1:
                    logger.warning("%s transient failure for %s, retrying: %s", source.name, flight_number, exc)
                    continue
                logger.warning("%s failed twice for %s: %s", source.name, flight_number, exc)
                return None
            except asyncio.TimeoutError:
                logger.warning("%s timed out after %.1fs for %s", source.name, timeout, flight_number)
                return None
            except Exception:
                logger.exception("%s lookup failed for %s", source.name, flight_number)
                return None

            if partial is None:
                logger.debug("%s has no data for %s", source.name, flight_number)
                return None
            return normalize_partial(partial)
        return None


def build_default_resolver(
    settings: ResolverSettings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FlightResolver:
    """The production chain, configured from the environment by default."""
    settings = settings or ResolverSettings.from_env()
    return FlightResolver(
        [
            AviationStackSource(api_key=settings.aviationstack_api_key or "", http_client=http_client),
            LiveScrapeSource(enabled=settings.live_scrape_enabled, http_client=http_client),
            OpenSkySource(enabled=settings.opensky_enabled, http_client=http_client),
            SyntheticFlightSource(),
        ],
        settings,
    )
