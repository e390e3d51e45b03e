"""Achievement contracts.

The catalog (``Achievement``) is process-wide and immutable.  Per-user unlock
state lives only in ``UnlockedAchievement`` documents.

Stored at: ``/users/{user_id}/achievements/{achievement_id}``
"""

from datetime import datetime

from pydantic import ConfigDict, Field

from skylog.contracts.common import FirestoreModel, utc_now
from skylog.contracts.enums import AchievementCategory, AircraftCategory, Rarity


class AchievementCondition(FirestoreModel):
    """Threshold rule ``current >= target`` on one statistic.

    ``type`` is a plain string so that unknown types can exist in a catalog
    and simply never unlock.
    """

    type: str
    target: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class Achievement(FirestoreModel):
    id: str
    name: str
    description: str
    icon: str = ""
    category: AchievementCategory
    rarity: Rarity
    xp: int = Field(..., ge=0)
    condition: AchievementCondition

    model_config = ConfigDict(frozen=True, use_enum_values=True)


class AircraftAchievement(FirestoreModel):
    """Award derived from the aircraft type of a single flight (or history)."""

    id: str
    name: str
    description: str
    xp: int = Field(..., ge=0)
    rarity: Rarity
    category: AircraftCategory

    model_config = ConfigDict(frozen=True, use_enum_values=True)


class UnlockedAchievement(FirestoreModel):
    id: str = Field(..., description="Achievement ID, also the document ID")
    name: str
    xp: int = 0
    flight_id: str | None = Field(default=None, description="Flight that triggered the unlock")
    unlocked_at: datetime = Field(default_factory=utc_now)
