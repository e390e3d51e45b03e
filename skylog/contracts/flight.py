"""Flight contracts: resolved flights, per-source partial results and logged flights.

``NormalizedFlight`` is ephemeral: produced per request by the resolver
chain and consumed by scoring.  ``LoggedFlight`` is what gets persisted.

Stored at: ``/flights/{flight_id}``
"""

from datetime import datetime

from pydantic import Field

from skylog.contracts.common import FirestoreModel, GeoPoint, utc_now
from skylog.contracts.enums import (
    CabinClass,
    DataSource,
    FlightStatus,
    TimeOfDay,
    Visibility,
)

FLIGHT_NUMBER_PATTERN = r"^[A-Z0-9]{2,3}\d+$"


class Airline(FirestoreModel):
    name: str
    code: str
    country: str = "Unknown"


class AircraftInfo(FirestoreModel):
    type: str
    manufacturer: str = "Unknown"
    registration: str | None = None


UNKNOWN_COUNTRY = "XX"


class AirportRef(FirestoreModel):
    """One end of a route."""

    airport_name: str
    iata: str = Field(..., min_length=3, max_length=3)
    city: str = "Unknown"
    country: str = Field(UNKNOWN_COUNTRY, description="ISO 3166-1 alpha-2, 'XX' when unknown")


class Route(FirestoreModel):
    departure: AirportRef
    arrival: AirportRef
    distance_km: float = Field(..., ge=0)
    distance_mi: float = Field(..., ge=0)
    duration_minutes: float = Field(..., ge=0)

    @property
    def is_domestic(self) -> bool:
        """Both endpoints in the same known country; an unknown side counts as international."""
        dep, arr = self.departure.country, self.arrival.country
        return dep == arr and dep != UNKNOWN_COUNTRY


class Schedule(FirestoreModel):
    departure_iso: str | None = None
    arrival_iso: str | None = None


class Position(GeoPoint):
    """Live telemetry reported by a tracking network."""

    altitude_m: float | None = None
    speed_kmh: float | None = None
    heading_deg: float | None = None


class StatusInfo(FirestoreModel):
    current: FlightStatus = FlightStatus.SCHEDULED
    position: Position | None = None


class NormalizedFlight(FirestoreModel):
    """Canonical, source-agnostic flight record."""

    flight_number: str = Field(..., pattern=FLIGHT_NUMBER_PATTERN)
    airline: Airline
    aircraft: AircraftInfo
    route: Route
    schedule: Schedule = Field(default_factory=Schedule)
    status: StatusInfo = Field(default_factory=StatusInfo)
    source: DataSource


class PartialFlight(FirestoreModel):
    """Whatever a single source managed to extract.

    Every field is optional.  Nothing here is trusted until
    ``skylog.services.flight_data.normalize.normalize_partial`` turns it
    into a ``NormalizedFlight``.
    """

    source: DataSource
    flight_number: str
    airline_name: str | None = None
    airline_code: str | None = None
    airline_country: str | None = None
    aircraft_type: str | None = None
    aircraft_manufacturer: str | None = None
    registration: str | None = None
    departure_iata: str | None = None
    departure_name: str | None = None
    departure_city: str | None = None
    departure_country: str | None = None
    arrival_iata: str | None = None
    arrival_name: str | None = None
    arrival_city: str | None = None
    arrival_country: str | None = None
    distance_km: float | None = Field(default=None, ge=0)
    duration_minutes: float | None = Field(default=None, ge=0)
    departure_iso: str | None = None
    arrival_iso: str | None = None
    status: FlightStatus | None = None
    position: Position | None = None


class LoggedFlight(FirestoreModel):
    """A flight a user has recorded, with the scoring it earned."""

    id: str | None = None
    user_id: str
    flight: NormalizedFlight
    date: str | None = Field(default=None, description="Travel date, YYYY-MM-DD")
    cabin_class: CabinClass = CabinClass.ECONOMY
    time_of_day: TimeOfDay | None = None
    photos: list[str] = Field(default_factory=list)
    review_text: str = ""
    visibility: Visibility = Visibility.PUBLIC
    xp_awarded: int = Field(0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)


class LogFlightRequest(FirestoreModel):
    """Body of ``POST /api/flights``."""

    flight_number: str = Field(..., min_length=3, max_length=12)
    date: str | None = None
    cabin_class: CabinClass = CabinClass.ECONOMY
    photos: list[str] = Field(default_factory=list, max_length=20)
    review_text: str = Field("", max_length=5000)
    visibility: Visibility = Visibility.PUBLIC


class FlightLike(FirestoreModel):
    """One user's like on one flight.

    Stored at: ``/likes/{user_id}_{flight_id}``, so liking twice is a no-op.
    """

    id: str | None = None
    user_id: str
    flight_id: str
    created_at: datetime = Field(default_factory=utc_now)

    @staticmethod
    def doc_id_for(user_id: str, flight_id: str) -> str:
        return f"{user_id}_{flight_id}"
