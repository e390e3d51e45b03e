"""Pure statistics aggregation over logged flights.

``merge_flight_into_stats`` never mutates its input; callers persist the
returned snapshot inside one guarded write so concurrent merges for the
same user cannot lose updates.
"""

from __future__ import annotations

from typing import Iterable

from skylog.contracts.enums import CabinClass, DataSource
from skylog.contracts.flight import UNKNOWN_COUNTRY, LoggedFlight, NormalizedFlight
from skylog.contracts.stats import DistanceRecord, UserStatsSnapshot
from skylog.reference.countries import UNKNOWN_CONTINENT, continent_for
from skylog.services.geo import is_weekend, time_of_day, year_of

LONG_HAUL_MINUTES = 6 * 60


def _add_unique(values: list[str], value: str | None) -> None:
    if value and value not in values:
        values.append(value)


def merge_flight_into_stats(
    current: UserStatsSnapshot,
    flight: NormalizedFlight,
    cabin_class: CabinClass | str = CabinClass.ECONOMY,
    time_of_day: str | None = None,
    is_domestic: bool | None = None,
    photo_count: int = 0,
    flight_id: str | None = None,
    departure_iso: str | None = None,
) -> UserStatsSnapshot:
    """Return a new snapshot with one more flight folded in."""
    stats = current.model_copy(deep=True)
    route = flight.route
    km, mi = route.distance_km, route.distance_mi

    stats.flights += 1
    stats.miles_km += km
    stats.miles_mi += mi
    stats.hours = round(stats.hours + route.duration_minutes / 60, 2)

    _add_unique(stats.airports, route.departure.iata)
    _add_unique(stats.airports, route.arrival.iata)
    _add_unique(stats.airlines, flight.airline.code)
    if flight.aircraft.type and flight.aircraft.type != "Unknown":
        _add_unique(stats.aircraft, flight.aircraft.type)
    for country in (route.departure.country, route.arrival.country):
        if country and country != UNKNOWN_COUNTRY:
            _add_unique(stats.countries, country)
            continent = continent_for(country)
            if continent != UNKNOWN_CONTINENT:
                _add_unique(stats.continents, continent)

    if km > stats.longest.km:
        stats.longest = DistanceRecord(km=km, mi=mi, flight_id=flight_id)
    if 0 < km < stats.shortest.km:
        stats.shortest = DistanceRecord(km=km, mi=mi, flight_id=flight_id)

    cabin = CabinClass(cabin_class).value
    setattr(stats.seat_class_breakdown, cabin, getattr(stats.seat_class_breakdown, cabin) + 1)

    if time_of_day == "day":
        stats.day_night_ratio.day += 1
    elif time_of_day == "night":
        stats.day_night_ratio.night += 1

    weekend = is_weekend(departure_iso)
    if weekend is True:
        stats.weekday_weekend.weekend += 1
    elif weekend is False:
        stats.weekday_weekend.weekday += 1

    if is_domestic is None:
        is_domestic = route.is_domestic
    if is_domestic:
        stats.domestic_international.domestic += 1
    else:
        stats.domestic_international.international += 1

    if route.duration_minutes > LONG_HAUL_MINUTES:
        stats.long_haul_flights += 1
    stats.photos_uploaded += max(0, photo_count)

    code = flight.airline.code
    stats.airline_counts[code] = stats.airline_counts.get(code, 0) + 1
    year = year_of(departure_iso)
    if year:
        stats.yearly_flights[year] = stats.yearly_flights.get(year, 0) + 1

    return stats


def bucket_departure(flight: NormalizedFlight, date: str | None = None) -> str | None:
    """Timestamp for the weekday and year buckets.

    The travel date the user gave wins.  A synthetic schedule is invented
    (random departure minute), so it never feeds a bucket.
    """
    if date:
        return date
    if flight.source == DataSource.SYNTHETIC.value:
        return None
    return flight.schedule.departure_iso


def bucket_time_of_day(flight: NormalizedFlight) -> str | None:
    """Day/night bucket from a reported departure time; None for synthetic flights."""
    if flight.source == DataSource.SYNTHETIC.value:
        return None
    return time_of_day(flight.schedule.departure_iso)


def travel_date_of(logged: LoggedFlight) -> str | None:
    """Travel date for weekday/year bucketing of a stored flight."""
    return bucket_departure(logged.flight, logged.date)


def rebuild_stats(flights: Iterable[LoggedFlight]) -> UserStatsSnapshot:
    """Recompute a snapshot from scratch by folding every stored flight in log order."""
    stats = UserStatsSnapshot()
    for logged in sorted(flights, key=lambda f: f.created_at):
        stats = merge_flight_into_stats(
            stats,
            logged.flight,
            cabin_class=logged.cabin_class,
            time_of_day=logged.time_of_day,
            photo_count=len(logged.photos),
            flight_id=logged.id,
            departure_iso=travel_date_of(logged),
        )
    return stats
