"""Input validation and PartialFlight → NormalizedFlight normalization."""

from __future__ import annotations

import logging
import re
from datetime import date as date_cls

import pydantic

from skylog.contracts.enums import FlightStatus
from skylog.contracts.flight import (
    FLIGHT_NUMBER_PATTERN,
    UNKNOWN_COUNTRY,
    AircraftInfo,
    Airline,
    AirportRef,
    NormalizedFlight,
    PartialFlight,
    Route,
    Schedule,
    StatusInfo,
)
from skylog.reference.aircraft import guess_manufacturer
from skylog.reference.airlines import get_airline, split_flight_number
from skylog.reference.airports import get_airport
from skylog.reference.countries import country_code
from skylog.services.errors import InvalidDateError, InvalidFlightNumberError
from skylog.services.geo import Distance, estimate_duration_minutes, haversine_distance, km_to_mi

logger = logging.getLogger(__name__)

_FLIGHT_NUMBER_RE = re.compile(FLIGHT_NUMBER_PATTERN)
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_IATA_RE = re.compile(r"^[A-Z]{3}$")


def normalize_flight_number(raw: str) -> str:
    """Strip spaces and hyphens, uppercase: ``"qp-1457 "`` → ``"QP1457"``."""
    return re.sub(r"[\s\-]", "", raw or "").upper()


def is_valid_flight_number(raw: str) -> bool:
    return bool(_FLIGHT_NUMBER_RE.match(normalize_flight_number(raw)))


def validate_flight_number(raw: str) -> str:
    """Return the normalized flight number or raise ``InvalidFlightNumberError``."""
    fn = normalize_flight_number(raw)
    if not _FLIGHT_NUMBER_RE.match(fn):
        raise InvalidFlightNumberError(raw)
    return fn


def validate_date(value: str | None) -> str | None:
    """Accept ``YYYY-MM-DD`` (a real calendar date) or None."""
    if value is None or value == "":
        return None
    if not _DATE_RE.match(value):
        raise InvalidDateError(value)
    try:
        date_cls.fromisoformat(value)
    except ValueError:
        raise InvalidDateError(value) from None
    return value


def _airport_ref(iata: str, name: str | None, city: str | None, country: str | None) -> AirportRef:
    ref = get_airport(iata)
    return AirportRef(
        airport_name=name or (ref.name if ref else f"{iata} Airport"),
        iata=iata,
        city=city or (ref.city if ref else "Unknown"),
        country=country_code(country) or (ref.country if ref else UNKNOWN_COUNTRY),
    )


def _resolve_distance(partial: PartialFlight, dep: str, arr: str) -> Distance:
    if partial.distance_km:
        return Distance(km=round(partial.distance_km), mi=km_to_mi(partial.distance_km))
    dep_ref, arr_ref = get_airport(dep), get_airport(arr)
    if dep_ref and arr_ref:
        return haversine_distance(
            dep_ref.latitude, dep_ref.longitude, arr_ref.latitude, arr_ref.longitude
        )
    return Distance(km=0, mi=0)


def normalize_partial(partial: PartialFlight) -> NormalizedFlight | None:
    """Turn a source's partial result into a canonical flight.

    Returns None when the partial lacks departure and arrival IATA codes or
    otherwise cannot form a valid record; the chain then moves on.
    """
    dep = (partial.departure_iata or "").strip().upper()
    arr = (partial.arrival_iata or "").strip().upper()
    if not (_IATA_RE.match(dep) and _IATA_RE.match(arr)):
        logger.debug("Partial from %s lacks route endpoints: %s", partial.source, partial.flight_number)
        return None

    flight_number = normalize_flight_number(partial.flight_number)
    split = split_flight_number(flight_number)
    code = (partial.airline_code or (split[0] if split else flight_number[:2])).upper()
    airline_ref = get_airline(code)

    aircraft_type = partial.aircraft_type or "Unknown"
    manufacturer = partial.aircraft_manufacturer or guess_manufacturer(aircraft_type)

    distance = _resolve_distance(partial, dep, arr)
    if partial.duration_minutes:
        duration = float(partial.duration_minutes)
    else:
        duration = estimate_duration_minutes(distance.km, aircraft_type)

    try:
        return NormalizedFlight(
            flight_number=flight_number,
            airline=Airline(
                name=partial.airline_name or (airline_ref.name if airline_ref else f"{code} Airlines"),
                code=airline_ref.code if airline_ref else code,
                country=country_code(partial.airline_country)
                or (airline_ref.country if airline_ref else "Unknown"),
            ),
            aircraft=AircraftInfo(
                type=aircraft_type,
                manufacturer=manufacturer,
                registration=partial.registration,
            ),
            route=Route(
                departure=_airport_ref(dep, partial.departure_name, partial.departure_city, partial.departure_country),
                arrival=_airport_ref(arr, partial.arrival_name, partial.arrival_city, partial.arrival_country),
                distance_km=distance.km,
                distance_mi=distance.mi,
                duration_minutes=duration,
            ),
            schedule=Schedule(departure_iso=partial.departure_iso, arrival_iso=partial.arrival_iso),
            status=StatusInfo(
                current=partial.status or FlightStatus.SCHEDULED,
                position=partial.position,
            ),
            source=partial.source,
        )
    except pydantic.ValidationError as exc:
        logger.warning("Discarding unusable %s result for %s: %s", partial.source, flight_number, exc)
        return None
