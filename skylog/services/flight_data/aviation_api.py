"""AviationStack structured flight API source.

Requires ``AVIATIONSTACK_API_KEY``; the source reports itself unconfigured
(and the resolver skips it) when the key is missing.
"""

from __future__ import annotations

import logging
import os

import httpx

from skylog.contracts.enums import DataSource, FlightStatus
from skylog.contracts.flight import PartialFlight
from skylog.services.errors import TransientSourceError

logger = logging.getLogger(__name__)

BASE_URL = "http://api.aviationstack.com/v1/flights"

_STATUS_MAP = {
    "scheduled": FlightStatus.SCHEDULED,
    "active": FlightStatus.AIRBORNE,
    "landed": FlightStatus.LANDED,
    "cancelled": FlightStatus.CANCELLED,
    "incident": FlightStatus.CANCELLED,
    "diverted": FlightStatus.AIRBORNE,
}


class AviationStackSource:
    """Async client for the AviationStack ``/flights`` endpoint."""

    name = "aviationstack"
    source = DataSource.STRUCTURED_API

    def __init__(self, api_key: str | None = None, http_client: httpx.AsyncClient | None = None):
        self._api_key = api_key if api_key is not None else os.environ.get("AVIATIONSTACK_API_KEY")
        self._client = http_client or httpx.AsyncClient(timeout=10.0)

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def lookup(self, flight_number: str, date: str | None = None) -> PartialFlight | None:
        params = {"access_key": self._api_key, "flight_iata": flight_number, "limit": 1}
        if date:
            params["flight_date"] = date
        try:
            resp = await self._client.get(BASE_URL, params=params)
        except httpx.TransportError as exc:
            raise TransientSourceError(f"AviationStack unreachable: {exc}") from exc

        if resp.status_code == 429 or resp.status_code >= 500:
            raise TransientSourceError(f"AviationStack returned {resp.status_code}")
        resp.raise_for_status()

        payload = resp.json()
        if "error" in payload:
            logger.warning("AviationStack error for %s: %s", flight_number, payload["error"])
            return None
        data = payload.get("data") or []
        if not data:
            return None
        return _parse_flight(data[0], flight_number)


def _parse_flight(raw: dict, flight_number: str) -> PartialFlight:
    """Map one AviationStack flight entry onto a PartialFlight."""
    dep = raw.get("departure") or {}
    arr = raw.get("arrival") or {}
    airline = raw.get("airline") or {}
    aircraft = raw.get("aircraft") or {}
    live = raw.get("live") or {}

    position = None
    if live.get("latitude") is not None and live.get("longitude") is not None:
        position = {
            "latitude": live["latitude"],
            "longitude": live["longitude"],
            "altitude_m": live.get("altitude"),
            "speed_kmh": live.get("speed_horizontal"),
            "heading_deg": live.get("direction"),
        }

    return PartialFlight(
        source=DataSource.STRUCTURED_API,
        flight_number=flight_number,
        airline_name=airline.get("name"),
        airline_code=airline.get("iata"),
        aircraft_type=aircraft.get("iata") or aircraft.get("icao"),
        registration=aircraft.get("registration"),
        departure_iata=dep.get("iata"),
        departure_name=dep.get("airport"),
        arrival_iata=arr.get("iata"),
        arrival_name=arr.get("airport"),
        departure_iso=dep.get("scheduled"),
        arrival_iso=arr.get("scheduled"),
        status=_STATUS_MAP.get((raw.get("flight_status") or "").lower()),
        position=position,
    )
