"""Great-circle distance, flight duration and time-of-day helpers."""

from __future__ import annotations

import math
from datetime import datetime
from typing import NamedTuple

from skylog.reference.aircraft import aircraft_code, cruise_speed_kmh

EARTH_RADIUS_KM = 6371
KM_TO_MI = 0.621371
DAY_START_HOUR = 6
NIGHT_START_HOUR = 22


class Distance(NamedTuple):
    km: int
    mi: int


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> Distance:
    """Great-circle distance between two WGS84 points.

    km and mi are each rounded from the unrounded kilometer value.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    km = EARTH_RADIUS_KM * c
    return Distance(km=round(km), mi=round(km * KM_TO_MI))


def km_to_mi(km: float) -> int:
    return round(km * KM_TO_MI)


def estimate_flight_hours(distance_km: float, aircraft: str | None = None) -> float:
    """Flight hours at the aircraft family's cruise speed, 2 decimals.

    ``aircraft`` may be a family code (``B787``) or a free-form type string
    (``Boeing 787-9``); unknown types fly at the default cruise speed.
    """
    speed = cruise_speed_kmh(aircraft_code(aircraft))
    return round(distance_km / speed, 2)


def estimate_duration_minutes(distance_km: float, aircraft: str | None = None) -> float:
    return round(estimate_flight_hours(distance_km, aircraft) * 60, 2)


def _parse_iso(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None


def time_of_day(departure_iso: str | None) -> str | None:
    """``day`` for departures 06:00-21:59 local to the timestamp, else ``night``.

    Bare ``HH:MM`` strings are accepted.  Unparsable input gives None.
    """
    if departure_iso and len(departure_iso) <= 8 and ":" in departure_iso:
        try:
            hour = int(departure_iso.split(":")[0])
        except ValueError:
            return None
    else:
        parsed = _parse_iso(departure_iso)
        if parsed is None:
            return None
        hour = parsed.hour
    if not 0 <= hour <= 23:
        return None
    return "day" if DAY_START_HOUR <= hour < NIGHT_START_HOUR else "night"


def is_weekend(iso: str | None) -> bool | None:
    """Saturday/Sunday check for an ISO date or datetime, None when unparsable."""
    parsed = _parse_iso(iso)
    if parsed is None:
        return None
    return parsed.weekday() >= 5


def year_of(iso: str | None) -> str | None:
    parsed = _parse_iso(iso)
    return str(parsed.year) if parsed else None
