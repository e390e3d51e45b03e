"""OpenSky Network source: route from the routes endpoint, live telemetry from state vectors.

OpenSky works with ICAO callsigns (``AKJ1457``), so the IATA flight number is
translated through the airline table first.  Airports come back as ICAO
codes and are mapped to IATA via the airport table; unknown airports make
the result unusable.
"""

from __future__ import annotations

import logging

import httpx

from skylog.contracts.enums import DataSource, FlightStatus
from skylog.contracts.flight import PartialFlight, Position
from skylog.reference.airlines import get_airline, split_flight_number
from skylog.reference.airports import get_airport
from skylog.services.errors import TransientSourceError

logger = logging.getLogger(__name__)

BASE_URL = "https://opensky-network.org/api"
MS_TO_KMH = 3.6


def to_callsign(flight_number: str) -> str:
    """``QP1457`` → ``AKJ1457`` when the airline's ICAO code is known."""
    split = split_flight_number(flight_number)
    if split is None:
        return flight_number
    airline = get_airline(split[0])
    if airline is None or not airline.icao:
        return flight_number
    return f"{airline.icao}{split[1]}"


class OpenSkySource:
    """Anonymous OpenSky REST client; enabled unless ``SKYLOG_OPENSKY=0``."""

    name = "opensky"
    source = DataSource.NETWORK_TRACKING

    def __init__(self, enabled: bool = True, http_client: httpx.AsyncClient | None = None):
        self._enabled = enabled
        self._client = http_client or httpx.AsyncClient(timeout=10.0)

    @property
    def is_configured(self) -> bool:
        return self._enabled

    async def _get(self, path: str, params: dict) -> httpx.Response:
        try:
            resp = await self._client.get(f"{BASE_URL}{path}", params=params)
        except httpx.TransportError as exc:
            raise TransientSourceError(f"OpenSky unreachable: {exc}") from exc
        if resp.status_code == 429 or resp.status_code >= 500:
            raise TransientSourceError(f"OpenSky returned {resp.status_code}")
        return resp

    async def lookup(self, flight_number: str, date: str | None = None) -> PartialFlight | None:
        callsign = to_callsign(flight_number)

        resp = await self._get("/routes", {"callsign": callsign})
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        route = (resp.json() or {}).get("route") or []
        if len(route) < 2:
            return None

        dep = get_airport(route[0])
        arr = get_airport(route[-1])
        if dep is None or arr is None:
            logger.info("OpenSky route %s for %s has unmapped airports", route, callsign)
            return None

        position = await self._position(callsign)
        status = FlightStatus.AIRBORNE if position is not None else None

        return PartialFlight(
            source=DataSource.NETWORK_TRACKING,
            flight_number=flight_number,
            departure_iata=dep.iata,
            arrival_iata=arr.iata,
            status=status,
            position=position,
        )

    async def _position(self, callsign: str) -> Position | None:
        """Current state vector for the callsign, if it is airborne."""
        try:
            resp = await self._get("/states/all", {})
            resp.raise_for_status()
        except (TransientSourceError, httpx.HTTPStatusError) as exc:
            logger.warning("OpenSky states unavailable for %s: %s", callsign, exc)
            return None

        for state in (resp.json() or {}).get("states") or []:
            if not state or len(state) < 11:
                continue
            if (state[1] or "").strip().upper() != callsign:
                continue
            lon, lat, on_ground = state[5], state[6], state[8]
            if on_ground or lat is None or lon is None:
                return None
            velocity = state[9]
            return Position(
                latitude=lat,
                longitude=lon,
                altitude_m=state[7],
                speed_kmh=round(velocity * MS_TO_KMH, 1) if velocity is not None else None,
                heading_deg=state[10],
            )
        return None
