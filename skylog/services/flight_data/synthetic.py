"""Deterministic synthetic flight generator, the last link of the resolver chain.

Route and aircraft are picked from per-airline tables indexed by the numeric
part of the flight number, so the same flight number always resolves to the
same route and aircraft.  Only the schedule and the cosmetic ``delayed``
status are randomized.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from skylog.contracts.enums import DataSource, FlightStatus
from skylog.contracts.flight import PartialFlight
from skylog.reference.aircraft import guess_manufacturer
from skylog.services.geo import estimate_duration_minutes

logger = logging.getLogger(__name__)

_PARSE_RE = re.compile(r"^([A-Z0-9]{2,3})(\d+)$")
DELAY_PROBABILITY = 0.1


@dataclass(frozen=True)
class SyntheticRoute:
    origin: str
    destination: str
    distance_km: int


@dataclass(frozen=True)
class SyntheticAirline:
    name: str
    country: str
    hubs: tuple[str, ...]
    fleet: tuple[str, ...]
    routes: tuple[SyntheticRoute, ...] = ()


def _routes(*specs: tuple[str, str, int]) -> tuple[SyntheticRoute, ...]:
    return tuple(SyntheticRoute(o, d, km) for o, d, km in specs)


KNOWN_AIRLINES: dict[str, SyntheticAirline] = {
    "QP": SyntheticAirline(
        name="Akasa Air",
        country="IN",
        hubs=("BOM", "BLR", "DEL"),
        fleet=("Boeing 737 MAX 8", "Airbus A320neo"),
        routes=_routes(("DEL", "BOM", 1140), ("BOM", "BLR", 865), ("BLR", "DEL", 1700), ("BOM", "GOI", 430)),
    ),
    "6E": SyntheticAirline(
        name="IndiGo",
        country="IN",
        hubs=("DEL", "BOM", "BLR"),
        fleet=("Airbus A320neo", "Airbus A321neo"),
        routes=_routes(("DEL", "BOM", 1140), ("BOM", "BLR", 840), ("DEL", "BLR", 1740), ("DEL", "MAA", 1765)),
    ),
    "AI": SyntheticAirline(
        name="Air India",
        country="IN",
        hubs=("DEL", "BOM"),
        fleet=("Boeing 787-8", "Boeing 777-300ER", "Airbus A320neo"),
        routes=_routes(("DEL", "LHR", 6720), ("BOM", "LHR", 7190), ("DEL", "JFK", 11760)),
    ),
    "EK": SyntheticAirline(
        name="Emirates",
        country="AE",
        hubs=("DXB",),
        fleet=("Airbus A380-800", "Boeing 777-300ER", "Boeing 777-200LR"),
        routes=_routes(
            ("DXB", "LHR", 5490), ("DXB", "JFK", 11000), ("DXB", "BOM", 1930),
            ("DXB", "DEL", 2200), ("DXB", "SIN", 5840), ("DXB", "CDG", 5250),
        ),
    ),
    "QR": SyntheticAirline(
        name="Qatar Airways",
        country="QA",
        hubs=("DOH",),
        fleet=("Boeing 787-8", "Airbus A350-900", "Boeing 777-300ER", "Airbus A380-800"),
        routes=_routes(
            ("DOH", "DXB", 380), ("DOH", "LHR", 5230), ("DOH", "JFK", 10780), ("DOH", "BOM", 2540),
            ("DOH", "DEL", 2940), ("DOH", "BLR", 3120), ("DOH", "SIN", 6300), ("DOH", "CDG", 4970),
            ("DOH", "FRA", 4520), ("DOH", "LAX", 13360),
        ),
    ),
    "AA": SyntheticAirline(
        name="American Airlines",
        country="US",
        hubs=("DFW", "ORD", "JFK", "LAX"),
        fleet=("Boeing 737-800", "Boeing 777-300ER", "Airbus A321", "Boeing 787-8"),
        routes=_routes(("LAX", "JFK", 3980), ("DFW", "LAX", 1990), ("JFK", "LHR", 5540), ("ORD", "DFW", 1290)),
    ),
}

GENERIC_AIRLINES: dict[str, SyntheticAirline] = {
    "UA": SyntheticAirline("United Airlines", "US", (), ("Boeing 737-800", "Boeing 787-9")),
    "DL": SyntheticAirline("Delta Air Lines", "US", (), ("Boeing 737-900", "Airbus A330")),
    "BA": SyntheticAirline("British Airways", "GB", (), ("Boeing 777-300ER", "Airbus A380")),
    "LH": SyntheticAirline("Lufthansa", "DE", (), ("Airbus A320neo", "Boeing 747-8")),
    "AF": SyntheticAirline("Air France", "FR", (), ("Airbus A350-900", "Boeing 777-300ER")),
    "SQ": SyntheticAirline("Singapore Airlines", "SG", (), ("Airbus A350-900", "Boeing 777-300ER")),
}

# Distances left to the normalizer (great-circle from the airport table).
GENERIC_ROUTES: tuple[tuple[str, str], ...] = (
    ("JFK", "LHR"),
    ("LAX", "NRT"),
    ("DEL", "BOM"),
    ("DXB", "LHR"),
)

_FALLBACK_FLEET = ("Boeing 737-800", "Airbus A320")


def parse_flight_number(flight_number: str) -> tuple[str, int] | None:
    """Split into (airline code, numeric part).

    The greedy pattern prefers a 3-character code; when that code is in
    neither airline table the 2-character split is used instead, so
    ``QP1457`` parses as ``("QP", 1457)``.
    """
    match = _PARSE_RE.match(flight_number)
    if not match:
        return None
    code, digits = match.groups()
    if (
        len(code) == 3
        and code not in KNOWN_AIRLINES
        and code not in GENERIC_AIRLINES
        and flight_number[2:].isdigit()
    ):
        code, digits = flight_number[:2], flight_number[2:]
    return code, int(digits)


class SyntheticFlightSource:
    """Always-available source that fabricates a plausible flight."""

    name = "synthetic"
    source = DataSource.SYNTHETIC

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    @property
    def is_configured(self) -> bool:
        return True

    async def lookup(self, flight_number: str, date: str | None = None) -> PartialFlight | None:
        return self.generate(flight_number, date)

    def generate(self, flight_number: str, date: str | None = None) -> PartialFlight | None:
        parsed = parse_flight_number(flight_number)
        if parsed is None:
            logger.info("Synthetic generator cannot parse %s", flight_number)
            return None
        code, number = parsed

        airline = KNOWN_AIRLINES.get(code)
        if airline is not None:
            route = airline.routes[number % len(airline.routes)]
            aircraft = airline.fleet[number % len(airline.fleet)]
            origin, destination, distance_km = route.origin, route.destination, route.distance_km
        else:
            airline = GENERIC_AIRLINES.get(code) or SyntheticAirline(
                name=f"{code} Airlines", country="Unknown", hubs=(), fleet=_FALLBACK_FLEET
            )
            digits = re.sub(r"\D", "", flight_number)
            origin, destination = GENERIC_ROUTES[int(digits or "0") % len(GENERIC_ROUTES)]
            aircraft = airline.fleet[0]
            distance_km = None

        departure = self._departure_time(date)
        duration = estimate_duration_minutes(distance_km, aircraft) if distance_km else None
        arrival = departure + timedelta(minutes=duration) if duration else None
        status = FlightStatus.DELAYED if self._rng.random() < DELAY_PROBABILITY else FlightStatus.SCHEDULED

        logger.info("Synthesized %s: %s -> %s on %s", flight_number, origin, destination, aircraft)
        return PartialFlight(
            source=DataSource.SYNTHETIC,
            flight_number=flight_number,
            airline_name=airline.name,
            airline_code=code,
            airline_country=airline.country if airline.country != "Unknown" else None,
            aircraft_type=aircraft,
            aircraft_manufacturer=guess_manufacturer(aircraft),
            departure_iata=origin,
            arrival_iata=destination,
            distance_km=distance_km,
            duration_minutes=duration,
            departure_iso=departure.isoformat(),
            arrival_iso=arrival.isoformat() if arrival else None,
            status=status,
        )

    def _departure_time(self, date: str | None) -> datetime:
        offset = timedelta(seconds=self._rng.uniform(0, 24 * 3600))
        if date:
            return datetime.fromisoformat(date).replace(tzinfo=timezone.utc) + offset
        return datetime.now(tz=timezone.utc) + offset
