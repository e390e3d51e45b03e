"""Achievement catalog, condition evaluation and the level curve."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from skylog.contracts.achievement import Achievement, AchievementCondition
from skylog.contracts.enums import AchievementCategory as Cat
from skylog.contracts.enums import ConditionType
from skylog.contracts.enums import Rarity
from skylog.contracts.stats import UserStatsSnapshot

logger = logging.getLogger(__name__)


def _a(
    achievement_id: str,
    name: str,
    description: str,
    icon: str,
    category: Cat,
    rarity: Rarity,
    xp: int,
    cond_type: str,
    target: int,
) -> Achievement:
    return Achievement(
        id=achievement_id,
        name=name,
        description=description,
        icon=icon,
        category=category,
        rarity=rarity,
        xp=xp,
        condition=AchievementCondition(type=cond_type, target=target),
    )


# Catalog order is evaluation order.  Conditions whose type is not a
# ConditionType (domestic_cities, narrow_body_types, ...) never unlock.
CATALOG: tuple[Achievement, ...] = (
    _a("first_flight", "First Flight", "Take your first flight", "🛫",
       Cat.FREQUENCY, Rarity.COMMON, 100, "total_flights", 1),
    _a("domestic_explorer", "Domestic Explorer", "Visit 5 cities in your home country", "🏡",
       Cat.GEOGRAPHIC, Rarity.COMMON, 200, "domestic_cities", 5),
    _a("international_debut", "International Debut", "Take your first international flight", "🌍",
       Cat.GEOGRAPHIC, Rarity.RARE, 500, "international_flights", 1),
    _a("continent_collector", "Continent Collector", "Visit all 7 continents", "🗺️",
       Cat.GEOGRAPHIC, Rarity.LEGENDARY, 5000, "continents", 7),
    _a("airport_hunter", "Airport Hunter", "Visit 50 different airports", "🛫",
       Cat.GEOGRAPHIC, Rarity.EPIC, 2000, "airports", 50),
    _a("narrow_body_novice", "Narrow Body Novice", "Fly on 5 different narrow-body aircraft", "✈️",
       Cat.AIRCRAFT, Rarity.COMMON, 300, "narrow_body_types", 5),
    _a("wide_body_warrior", "Wide Body Warrior", "Experience the comfort of wide-body aircraft", "🛩️",
       Cat.AIRCRAFT, Rarity.RARE, 800, "wide_body_flights", 1),
    _a("airbus_ambassador", "Airbus Ambassador", "Fly on 10 different Airbus aircraft", "🏗️",
       Cat.AIRCRAFT, Rarity.EPIC, 1500, "airbus_types", 10),
    _a("boeing_believer", "Boeing Believer", "Experience 10 different Boeing models", "🔧",
       Cat.AIRCRAFT, Rarity.EPIC, 1500, "boeing_types", 10),
    _a("jumbo_jet_rider", "Jumbo Jet Rider", "Fly on the iconic A380 or 747", "🐘",
       Cat.AIRCRAFT, Rarity.LEGENDARY, 3000, "jumbo_aircraft", 1),
    _a("mile_high_club", "Mile High Club", "Accumulate 10,000 flight miles", "📏",
       Cat.DISTANCE, Rarity.RARE, 1000, "total_miles", 10000),
    _a("frequent_flyer", "Frequent Flyer", "Take 25 flights in one year", "🔄",
       Cat.FREQUENCY, Rarity.RARE, 800, "yearly_flights", 25),
    _a("long_haul_legend", "Long Haul Legend", "Complete 5 flights over 6 hours", "🌙",
       Cat.DISTANCE, Rarity.EPIC, 2500, "long_haul_flights", 5),
    _a("around_the_world", "Around The World", "Fly 40,075 km (Earth's circumference)", "🌎",
       Cat.DISTANCE, Rarity.LEGENDARY, 10000, "total_km", 40075),
    _a("airline_sampler", "Airline Sampler", "Fly with 10 different airlines", "🏢",
       Cat.AIRLINE, Rarity.RARE, 600, "airlines", 10),
    _a("loyalty_member", "Loyalty Member", "Take 10 flights with the same airline", "💳",
       Cat.AIRLINE, Rarity.COMMON, 400, "same_airline_flights", 10),
    _a("premium_passenger", "Premium Passenger", "Experience business or first class", "👑",
       Cat.AIRLINE, Rarity.EPIC, 2000, "premium_cabin", 1),
    _a("red_eye_warrior", "Red Eye Warrior", "Take 5 overnight flights", "🌃",
       Cat.SPECIAL, Rarity.RARE, 700, "overnight_flights", 5),
    _a("same_day_return", "Same Day Return", "Complete a round trip in one day", "⚡",
       Cat.SPECIAL, Rarity.EPIC, 1200, "same_day_return", 1),
    _a("aviation_photographer", "Aviation Photographer", "Upload 50 flight photos", "📸",
       Cat.SPECIAL, Rarity.RARE, 500, "photos_uploaded", 50),
)

CATALOG_BY_ID: dict[str, Achievement] = {a.id: a for a in CATALOG}

_STAT_GETTERS: dict[ConditionType, Callable[[UserStatsSnapshot], float]] = {
    ConditionType.TOTAL_FLIGHTS: lambda s: s.flights,
    ConditionType.TOTAL_MILES: lambda s: s.miles_mi,
    ConditionType.TOTAL_KM: lambda s: s.miles_km,
    ConditionType.TOTAL_HOURS: lambda s: s.hours,
    ConditionType.AIRPORTS: lambda s: len(s.airports),
    ConditionType.CONTINENTS: lambda s: len(s.continents),
    ConditionType.COUNTRIES: lambda s: len(s.countries),
    ConditionType.AIRLINES: lambda s: len(s.airlines),
    ConditionType.AIRCRAFT_TYPES: lambda s: len(s.aircraft),
    ConditionType.INTERNATIONAL_FLIGHTS: lambda s: s.domestic_international.international,
    ConditionType.DOMESTIC_FLIGHTS: lambda s: s.domestic_international.domestic,
    ConditionType.LONG_HAUL_FLIGHTS: lambda s: s.long_haul_flights,
    ConditionType.SAME_AIRLINE_FLIGHTS: lambda s: max(s.airline_counts.values(), default=0),
    ConditionType.PREMIUM_CABIN: lambda s: s.seat_class_breakdown.business + s.seat_class_breakdown.first,
    ConditionType.OVERNIGHT_FLIGHTS: lambda s: s.day_night_ratio.night,
    ConditionType.PHOTOS_UPLOADED: lambda s: s.photos_uploaded,
    ConditionType.YEARLY_FLIGHTS: lambda s: max(s.yearly_flights.values(), default=0),
}


def condition_progress(condition: AchievementCondition, stats: UserStatsSnapshot) -> float | None:
    """Current value of the statistic a condition watches, None for unknown types."""
    try:
        cond_type = ConditionType(condition.type)
    except ValueError:
        logger.debug("Unsupported condition type %r", condition.type)
        return None
    return _STAT_GETTERS[cond_type](stats)


def evaluate_condition(condition: AchievementCondition, stats: UserStatsSnapshot) -> bool:
    current = condition_progress(condition, stats)
    if current is None:
        return False
    return current >= condition.target


def check_achievements(
    stats: UserStatsSnapshot,
    unlocked_ids: Iterable[str],
    catalog: Iterable[Achievement] = CATALOG,
) -> list[Achievement]:
    """Achievements newly satisfied by ``stats``, in catalog order.

    Pure: unlock state comes only from ``unlocked_ids``, so an achievement
    already unlocked is never returned again.
    """
    already = set(unlocked_ids)
    return [
        achievement
        for achievement in catalog
        if achievement.id not in already and evaluate_condition(achievement.condition, stats)
    ]


# Lower XP bound of levels 1-6; past level 6 every level costs 600 XP.
LEVEL_THRESHOLDS: tuple[int, ...] = (0, 100, 300, 600, 1000, 1600)
XP_PER_LEVEL_AFTER_TABLE = 600


def level_for_xp(xp: int) -> int:
    """Stepped level curve; the only place levels are computed."""
    xp = max(0, xp)
    last = LEVEL_THRESHOLDS[-1]
    if xp < last:
        return sum(1 for threshold in LEVEL_THRESHOLDS if xp >= threshold)
    return len(LEVEL_THRESHOLDS) + (xp - last) // XP_PER_LEVEL_AFTER_TABLE


def xp_for_level(level: int) -> int:
    """Minimum XP of ``level``."""
    if level <= 1:
        return 0
    if level <= len(LEVEL_THRESHOLDS):
        return LEVEL_THRESHOLDS[level - 1]
    return LEVEL_THRESHOLDS[-1] + (level - len(LEVEL_THRESHOLDS)) * XP_PER_LEVEL_AFTER_TABLE


def xp_for_next_level(level: int) -> int:
    """XP at which ``level + 1`` starts."""
    return xp_for_level(level + 1)
