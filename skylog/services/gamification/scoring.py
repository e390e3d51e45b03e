"""Per-flight XP formula."""

from __future__ import annotations

from skylog.contracts.enums import CabinClass

BASE_XP = 10
DISTANCE_STEP_KM = 500
DISTANCE_STEP_XP = 5
MAX_PHOTOS_SCORED = 4
PHOTO_XP = 5
REVIEW_STEP_CHARS = 200
REVIEW_STEP_XP = 3
MAX_REVIEW_XP = 15
NEW_AIRPORT_XP = 20

CABIN_MULTIPLIERS: dict[str, float] = {
    CabinClass.ECONOMY.value: 1.0,
    CabinClass.PREMIUM.value: 1.2,
    CabinClass.BUSINESS.value: 2.0,
    CabinClass.FIRST.value: 3.0,
}


def calculate_xp(
    distance_km: float,
    cabin_class: CabinClass | str = CabinClass.ECONOMY,
    photo_count: int = 0,
    review_length: int = 0,
    is_new_airport: bool = False,
) -> int:
    """Base flight XP, before aircraft and manufacturer bonuses.

    10 + round(floor(km/500) * 5 * cabin multiplier) + min(4, photos) * 5
    + min(15, floor(review/200) * 3) + 20 when either airport is new.
    """
    distance_pts = int(distance_km // DISTANCE_STEP_KM) * DISTANCE_STEP_XP
    multiplier = CABIN_MULTIPLIERS[CabinClass(cabin_class).value]
    adjusted = _round_half_up(distance_pts * multiplier)
    photo_bonus = min(MAX_PHOTOS_SCORED, max(0, photo_count)) * PHOTO_XP
    review_bonus = min(MAX_REVIEW_XP, (max(0, review_length) // REVIEW_STEP_CHARS) * REVIEW_STEP_XP)
    airport_bonus = NEW_AIRPORT_XP if is_new_airport else 0
    return BASE_XP + adjusted + photo_bonus + review_bonus + airport_bonus


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; 2.5 must become 3.
    return int(value + 0.5)
