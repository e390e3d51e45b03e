"""Service response DTOs (calculated, never persisted)."""

from pydantic import BaseModel, Field

from skylog.contracts.achievement import AircraftAchievement, UnlockedAchievement
from skylog.contracts.flight import NormalizedFlight
from skylog.contracts.stats import UserStatsSnapshot


class FlightLogResult(BaseModel):
    """Everything a caller needs after logging a flight."""

    flight_id: str
    flight: NormalizedFlight
    xp_awarded: int = Field(..., ge=0, description="Flight XP plus XP of new unlocks")
    new_achievements: list[UnlockedAchievement] = Field(default_factory=list)
    aircraft_achievement: AircraftAchievement | None = None
    total_xp: int = Field(..., ge=0)
    new_level: int = Field(..., ge=1)
    level_up: bool = False
    stats: UserStatsSnapshot


class FlightLookupResult(BaseModel):
    """Preview of a flight before it is logged."""

    flight: NormalizedFlight
    aircraft_achievement: AircraftAchievement
    manufacturer_bonus: int


class LeaderboardEntry(BaseModel):
    user_id: str
    display_name: str | None = None
    rank: int = Field(..., ge=1)
    value: float
    level: int = 1
    xp: int = 0
