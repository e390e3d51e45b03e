"""SkyLog data contracts: Pydantic v2 models for flight logging and gamification.

Data authority
--------------

**Firestore** (source of truth for user-owned data):
- ``UserProfile`` / ``UserStatsSnapshot`` — ``/users/{uid}``
- ``UnlockedAchievement`` — ``/users/{uid}/achievements/{achievement_id}``
- ``LoggedFlight`` — ``/flights/{flight_id}`` (``user_id`` field, queried per user)
- likes — ``/likes/{uid}_{flight_id}``

**Static reference tables** (process-wide, read-only, ``skylog.reference``):
- airports, airlines, country → continent, aircraft cruise speeds

Calculated (never persisted)
----------------------------
- ``NormalizedFlight`` until it is embedded in a ``LoggedFlight``
- ``PartialFlight`` — raw per-source extraction, normalized before use
- ``AircraftAchievement`` — derived from aircraft type strings
- ``FlightLogResult`` / ``FlightLookupResult`` / ``LeaderboardEntry`` — API DTOs
"""

from skylog.contracts.enums import (
    AchievementCategory,
    AircraftCategory,
    CabinClass,
    ConditionType,
    DataSource,
    FlightStatus,
    LeaderboardCategory,
    Rarity,
    TimeOfDay,
    Visibility,
)
from skylog.contracts.common import FirestoreModel, GeoPoint
from skylog.contracts.flight import (
    FLIGHT_NUMBER_PATTERN,
    AircraftInfo,
    Airline,
    AirportRef,
    FlightLike,
    LogFlightRequest,
    LoggedFlight,
    NormalizedFlight,
    PartialFlight,
    Position,
    Route,
    Schedule,
    StatusInfo,
)
from skylog.contracts.stats import (
    SHORTEST_SENTINEL_KM,
    DayNightRatio,
    DistanceRecord,
    DomesticInternational,
    SeatClassBreakdown,
    UserProfile,
    UserStatsSnapshot,
    WeekdayWeekend,
)
from skylog.contracts.achievement import (
    Achievement,
    AchievementCondition,
    AircraftAchievement,
    UnlockedAchievement,
)
from skylog.contracts.result import FlightLogResult, FlightLookupResult, LeaderboardEntry

__all__ = [
    # Enums
    "AchievementCategory",
    "AircraftCategory",
    "CabinClass",
    "ConditionType",
    "DataSource",
    "FlightStatus",
    "LeaderboardCategory",
    "Rarity",
    "TimeOfDay",
    "Visibility",
    # Common
    "FirestoreModel",
    "GeoPoint",
    # Flights
    "FLIGHT_NUMBER_PATTERN",
    "AircraftInfo",
    "Airline",
    "AirportRef",
    "FlightLike",
    "LogFlightRequest",
    "LoggedFlight",
    "NormalizedFlight",
    "PartialFlight",
    "Position",
    "Route",
    "Schedule",
    "StatusInfo",
    # Stats
    "SHORTEST_SENTINEL_KM",
    "DayNightRatio",
    "DistanceRecord",
    "DomesticInternational",
    "SeatClassBreakdown",
    "UserProfile",
    "UserStatsSnapshot",
    "WeekdayWeekend",
    # Achievements
    "Achievement",
    "AchievementCondition",
    "AircraftAchievement",
    "UnlockedAchievement",
    # Results
    "FlightLogResult",
    "FlightLookupResult",
    "LeaderboardEntry",
]
