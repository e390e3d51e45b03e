"""Tests for statistics aggregation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from skylog.contracts.enums import CabinClass, DataSource
from skylog.contracts.flight import (
    AircraftInfo,
    Airline,
    AirportRef,
    LoggedFlight,
    NormalizedFlight,
    Route,
    Schedule,
)
from skylog.contracts.stats import SHORTEST_SENTINEL_KM, UserStatsSnapshot
from skylog.services.gamification.stats import (
    bucket_departure,
    bucket_time_of_day,
    merge_flight_into_stats,
    rebuild_stats,
)


def _flight(km=865.0, dep=("BOM", "IN"), arr=("BLR", "IN"), minutes=62.0, aircraft="Airbus A320neo", airline="QP"):
    return NormalizedFlight(
        flight_number=f"{airline}1457",
        airline=Airline(name="Test Air", code=airline, country="IN"),
        aircraft=AircraftInfo(type=aircraft, manufacturer="Airbus"),
        route=Route(
            departure=AirportRef(airport_name=dep[0], iata=dep[0], country=dep[1]),
            arrival=AirportRef(airport_name=arr[0], iata=arr[0], country=arr[1]),
            distance_km=km,
            distance_mi=round(km * 0.621371),
            duration_minutes=minutes,
        ),
        source=DataSource.SYNTHETIC,
    )


class TestMergeFlightIntoStats:
    def test_first_flight(self):
        stats = merge_flight_into_stats(
            UserStatsSnapshot(), _flight(), CabinClass.ECONOMY, "day",
            flight_id="f1", departure_iso="2026-03-14",
        )
        assert stats.flights == 1
        assert stats.miles_km == 865
        assert stats.miles_mi == 537
        assert stats.hours == 1.03
        assert stats.airports == ["BOM", "BLR"]
        assert stats.airlines == ["QP"]
        assert stats.aircraft == ["Airbus A320neo"]
        assert stats.countries == ["IN"]
        assert stats.continents == ["AS"]
        assert stats.seat_class_breakdown.economy == 1
        assert stats.day_night_ratio.day == 1
        assert stats.weekday_weekend.weekend == 1
        assert stats.domestic_international.domestic == 1
        assert stats.longest.km == stats.shortest.km == 865
        assert stats.longest.flight_id == "f1"
        assert stats.airline_counts == {"QP": 1}
        assert stats.yearly_flights == {"2026": 1}

    def test_input_not_mutated(self):
        current = UserStatsSnapshot()
        merge_flight_into_stats(current, _flight(), "business", "night")
        assert current == UserStatsSnapshot()

    def test_extrema(self):
        stats = UserStatsSnapshot()
        for i, km in enumerate([1000, 300, 1000, 50]):
            stats = merge_flight_into_stats(stats, _flight(km=km), flight_id=f"f{i}")
        assert stats.longest.km == 1000
        # Ties do not replace the record holder
        assert stats.longest.flight_id == "f0"
        assert stats.shortest.km == 50
        assert stats.shortest.flight_id == "f3"

    def test_zero_distance_not_shortest(self):
        stats = merge_flight_into_stats(UserStatsSnapshot(), _flight(km=0))
        assert stats.shortest.km == SHORTEST_SENTINEL_KM
        assert not stats.has_shortest

    def test_counters_monotonic(self):
        stats = UserStatsSnapshot()
        previous = stats
        for km in (500, 20, 9000, 120):
            stats = merge_flight_into_stats(stats, _flight(km=km, minutes=km / 14), CabinClass.FIRST)
            assert stats.flights == previous.flights + 1
            assert stats.miles_km >= previous.miles_km
            assert stats.hours >= previous.hours
            assert len(stats.airports) >= len(previous.airports)
            previous = stats

    def test_unknown_country_not_counted(self):
        stats = merge_flight_into_stats(UserStatsSnapshot(), _flight(dep=("QQQ", "XX"), arr=("BLR", "IN")))
        assert stats.countries == ["IN"]
        assert stats.domestic_international.international == 1

    def test_unmapped_country_adds_no_continent(self):
        stats = merge_flight_into_stats(UserStatsSnapshot(), _flight(dep=("QQQ", "QQ"), arr=("BLR", "IN")))
        assert stats.countries == ["QQ", "IN"]
        assert stats.continents == ["AS"]

    def test_both_countries_unknown_is_international(self):
        stats = merge_flight_into_stats(UserStatsSnapshot(), _flight(dep=("QQQ", "XX"), arr=("WWW", "XX")))
        assert stats.countries == []
        assert stats.domestic_international.international == 1

    def test_international_and_long_haul(self):
        stats = merge_flight_into_stats(
            UserStatsSnapshot(), _flight(km=6720, dep=("DEL", "IN"), arr=("LHR", "GB"), minutes=441),
        )
        assert stats.domestic_international.international == 1
        assert stats.long_haul_flights == 1
        assert stats.continents == ["AS", "EU"]

    def test_explicit_domestic_override(self):
        stats = merge_flight_into_stats(UserStatsSnapshot(), _flight(), is_domestic=False)
        assert stats.domestic_international.international == 1

    def test_photos_and_unknown_time_of_day(self):
        stats = merge_flight_into_stats(UserStatsSnapshot(), _flight(), photo_count=3, time_of_day=None)
        assert stats.photos_uploaded == 3
        assert stats.day_night_ratio.day == stats.day_night_ratio.night == 0
        assert stats.weekday_weekend.weekday == stats.weekday_weekend.weekend == 0

    def test_top_airline(self):
        stats = UserStatsSnapshot()
        for code in ("6E", "QP", "QP", "6E", "AI"):
            stats = merge_flight_into_stats(stats, _flight(airline=code))
        assert stats.top_airline == "6E"


class TestRebuildStats:
    def test_rebuild_matches_incremental(self):
        start = datetime(2026, 3, 1, tzinfo=timezone.utc)
        logged = [
            LoggedFlight(id=f"f{i}", user_id="u", flight=_flight(km=km), date="2026-03-1%d" % i,
                         cabin_class="economy", time_of_day="day", created_at=start + timedelta(hours=i))
            for i, km in enumerate([1000, 300, 1000, 50])
        ]
        incremental = UserStatsSnapshot()
        for f in logged:
            incremental = merge_flight_into_stats(
                incremental, f.flight, f.cabin_class, f.time_of_day, flight_id=f.id, departure_iso=f.date,
            )
        # Order of the input does not matter
        assert rebuild_stats(reversed(logged)) == incremental

    def test_empty(self):
        assert rebuild_stats([]) == UserStatsSnapshot()


class TestBuckets:
    def _live(self, departure_iso):
        flight = _flight()
        return flight.model_copy(update={
            "source": DataSource.STRUCTURED_API.value,
            "schedule": Schedule(departure_iso=departure_iso),
        })

    def test_synthetic_schedule_ignored(self):
        flight = _flight().model_copy(update={"schedule": Schedule(departure_iso="2026-03-16T23:30:00+00:00")})
        assert bucket_time_of_day(flight) is None
        assert bucket_departure(flight) is None
        assert bucket_departure(flight, "2026-03-14") == "2026-03-14"

    def test_live_schedule_used(self):
        flight = self._live("2026-03-16T23:30:00+00:00")
        assert bucket_time_of_day(flight) == "night"
        assert bucket_departure(flight) == "2026-03-16T23:30:00+00:00"
        assert bucket_departure(flight, "2026-03-14") == "2026-03-14"
