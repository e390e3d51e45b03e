"""Lifetime statistics snapshot for a user.

Stored at: ``/users/{user_id}`` under the ``stats`` key, next to ``xp`` and
``level``.  The whole user document is rewritten in one guarded batch on
every accepted flight (see ``skylog.persistence.repositories.user_repo``).

Set-valued counters are stored as lists of unique codes; their length is
what achievements and leaderboards look at.
"""

from pydantic import Field

from skylog.contracts.common import FirestoreModel

# Seed for the running minimum, large enough that any real flight replaces it.
SHORTEST_SENTINEL_KM = 999_999


class DistanceRecord(FirestoreModel):
    km: float = 0
    mi: float = 0
    flight_id: str | None = None


class SeatClassBreakdown(FirestoreModel):
    economy: int = 0
    premium: int = 0
    business: int = 0
    first: int = 0


class DayNightRatio(FirestoreModel):
    day: int = 0
    night: int = 0


class WeekdayWeekend(FirestoreModel):
    weekday: int = 0
    weekend: int = 0


class DomesticInternational(FirestoreModel):
    domestic: int = 0
    international: int = 0


class UserStatsSnapshot(FirestoreModel):
    """Cumulative aggregate over every flight a user has logged."""

    flights: int = Field(0, ge=0)
    miles_km: float = Field(0, ge=0)
    miles_mi: float = Field(0, ge=0)
    hours: float = Field(0, ge=0)

    airports: list[str] = Field(default_factory=list)
    airlines: list[str] = Field(default_factory=list)
    aircraft: list[str] = Field(default_factory=list)
    countries: list[str] = Field(default_factory=list)
    continents: list[str] = Field(default_factory=list)

    longest: DistanceRecord = Field(default_factory=DistanceRecord)
    shortest: DistanceRecord = Field(
        default_factory=lambda: DistanceRecord(km=SHORTEST_SENTINEL_KM, mi=SHORTEST_SENTINEL_KM)
    )

    seat_class_breakdown: SeatClassBreakdown = Field(default_factory=SeatClassBreakdown)
    day_night_ratio: DayNightRatio = Field(default_factory=DayNightRatio)
    weekday_weekend: WeekdayWeekend = Field(default_factory=WeekdayWeekend)
    domestic_international: DomesticInternational = Field(default_factory=DomesticInternational)

    long_haul_flights: int = Field(0, ge=0)
    photos_uploaded: int = Field(0, ge=0)
    airline_counts: dict[str, int] = Field(default_factory=dict)
    yearly_flights: dict[str, int] = Field(default_factory=dict)

    @property
    def has_shortest(self) -> bool:
        return self.shortest.km < SHORTEST_SENTINEL_KM

    @property
    def top_airline(self) -> str | None:
        """Most-flown airline code; ties go to the alphabetically first code."""
        if not self.airline_counts:
            return None
        return min(self.airline_counts, key=lambda code: (-self.airline_counts[code], code))


class UserProfile(FirestoreModel):
    """The persisted user document: stats plus the XP they produced.

    ``level`` is a cache of ``level_for_xp(xp)`` written alongside ``xp``;
    readers must re-derive it rather than trust it.
    """

    id: str | None = None
    display_name: str | None = None
    xp: int = Field(0, ge=0)
    level: int = Field(1, ge=1)
    stats: UserStatsSnapshot = Field(default_factory=UserStatsSnapshot)
