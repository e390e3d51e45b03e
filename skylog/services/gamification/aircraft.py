"""Aircraft-type achievements.

``match_aircraft`` maps a free-form type string to exactly one award through
an ordered predicate table (more specific variants before their family).
Family achievements look at the distinct types a user has flown.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable

from skylog.contracts.achievement import AircraftAchievement
from skylog.contracts.enums import AircraftCategory as Ac
from skylog.contracts.enums import Rarity


def _award(
    award_id: str, name: str, description: str, xp: int, rarity: Rarity, category: Ac,
) -> AircraftAchievement:
    return AircraftAchievement(
        id=award_id, name=name, description=description, xp=xp, rarity=rarity, category=category
    )


def _has(*needles: str) -> Callable[[str], bool]:
    return lambda t: any(n in t for n in needles)


def _all(*needles: str) -> Callable[[str], bool]:
    return lambda t: all(n in t for n in needles)


_MATCHERS: tuple[tuple[Callable[[str], bool], AircraftAchievement], ...] = (
    (_has("a380"), _award(
        "superjumbo_a380", "Superjumbo Explorer",
        "Flew on the mighty Airbus A380 - World's largest passenger airliner",
        200, Rarity.LEGENDARY, Ac.SUPERJUMBO)),
    (_has("a350"), _award(
        "dreamliner_competitor", "XWB Pioneer",
        "Experienced the ultra-modern Airbus A350 with carbon fiber fuselage",
        150, Rarity.EPIC, Ac.WIDE_BODY)),
    (_has("a340"), _award(
        "four_engine_classic", "Quad Power",
        "Flew on the 4-engine Airbus A340 - Classic long-haul workhorse",
        120, Rarity.RARE, Ac.WIDE_BODY)),
    (_has("a330"), _award(
        "versatile_twin", "Twin Engine Master",
        "Experienced the versatile Airbus A330 - Perfect for medium to long haul",
        100, Rarity.RARE, Ac.WIDE_BODY)),
    (_has("a321"), _award(
        "stretched_narrow", "Narrow-Body Giant",
        "Flew on the Airbus A321 - Longest single-aisle aircraft",
        75, Rarity.COMMON, Ac.NARROW_BODY)),
    (_all("a320", "neo"), _award(
        "neo_generation", "New Engine Pioneer",
        "Experienced the fuel-efficient Airbus A320neo with next-gen engines",
        80, Rarity.COMMON, Ac.NARROW_BODY)),
    (_has("a320"), _award(
        "european_narrow", "European Excellence",
        "Flew on the Airbus A320 family - Europe's answer to the 737",
        50, Rarity.COMMON, Ac.NARROW_BODY)),
    (_has("a319"), _award(
        "compact_airbus", "Compact Cruiser",
        "Experienced the smaller Airbus A319 - Perfect for shorter routes",
        45, Rarity.COMMON, Ac.NARROW_BODY)),
    (lambda t: "7478" in t, _award(
        "queen_of_skies_8", "Modern Queen",
        "Flew on the Boeing 747-8 - Latest evolution of the Queen of the Skies",
        180, Rarity.LEGENDARY, Ac.WIDE_BODY)),
    (_has("747"), _award(
        "queen_of_skies", "Queen of the Skies",
        "Experienced the iconic Boeing 747 - The aircraft that democratized air travel",
        150, Rarity.EPIC, Ac.WIDE_BODY)),
    (_has("787"), _award(
        "dreamliner", "Dreamliner Experience",
        "Flew on the Boeing 787 Dreamliner - Revolutionary composite aircraft",
        140, Rarity.EPIC, Ac.WIDE_BODY)),
    (_all("777", "300er"), _award(
        "triple_seven_er", "Extended Range Master",
        "Experienced the Boeing 777-300ER - Ultra long-range twin-engine giant",
        130, Rarity.RARE, Ac.WIDE_BODY)),
    (_has("777"), _award(
        "triple_seven", "Triple Seven",
        "Flew on the Boeing 777 - World's largest twin-engine airliner",
        120, Rarity.RARE, Ac.WIDE_BODY)),
    (_has("767"), _award(
        "medium_wide", "Medium Wide-Body",
        "Experienced the Boeing 767 - Perfect for trans-Atlantic routes",
        90, Rarity.COMMON, Ac.WIDE_BODY)),
    (_has("757"), _award(
        "flying_pencil", "The Flying Pencil",
        "Flew on the Boeing 757 - Narrow-body with wide-body performance",
        85, Rarity.RARE, Ac.NARROW_BODY)),
    (_all("737", "max"), _award(
        "max_generation", "MAX Generation",
        "Experienced the Boeing 737 MAX - Latest evolution of the 737 family",
        60, Rarity.COMMON, Ac.NARROW_BODY)),
    (_all("737", "800"), _award(
        "workhorse_800", "Workhorse 800",
        "Flew on the Boeing 737-800 - Most popular variant of the 737 family",
        50, Rarity.COMMON, Ac.NARROW_BODY)),
    (_has("737"), _award(
        "american_workhorse", "American Workhorse",
        "Experienced the Boeing 737 - World's most popular commercial aircraft",
        45, Rarity.COMMON, Ac.NARROW_BODY)),
    (_has("e190", "e195"), _award(
        "brazilian_large_regional", "Brazilian Excellence",
        "Flew on the Embraer E-Jet - Brazil's contribution to aviation",
        70, Rarity.COMMON, Ac.REGIONAL)),
    (_has("e170", "e175"), _award(
        "regional_comfort", "Regional Comfort",
        "Experienced the Embraer E170/175 - Comfortable regional flying",
        60, Rarity.COMMON, Ac.REGIONAL)),
    (_has("crj", "canadair"), _award(
        "canadian_regional", "Canadian Regional",
        "Flew on a Bombardier CRJ - Canadian regional jet excellence",
        55, Rarity.COMMON, Ac.REGIONAL)),
    (_has("dash", "q400"), _award(
        "turboprop_master", "Turboprop Master",
        "Experienced a Bombardier Dash 8 - Efficient turboprop flying",
        65, Rarity.RARE, Ac.REGIONAL)),
    (_has("atr"), _award(
        "island_hopper", "Island Hopper",
        "Flew on an ATR turboprop - Perfect for short island routes",
        60, Rarity.COMMON, Ac.REGIONAL)),
    (_has("md11"), _award(
        "trijet_classic", "Trijet Classic",
        "Experienced the MD-11 - Last of the great tri-jets",
        120, Rarity.EPIC, Ac.WIDE_BODY)),
    (_has("md80", "md88", "md90"), _award(
        "mad_dog", "Mad Dog",
        'Flew on an MD-80 series - The "Mad Dog" of aviation',
        85, Rarity.RARE, Ac.NARROW_BODY)),
    (_has("dc10"), _award(
        "vintage_trijet", "Vintage Tri-Jet",
        "Experienced the classic DC-10 - Vintage wide-body excellence",
        110, Rarity.EPIC, Ac.WIDE_BODY)),
    (_has("concorde"), _award(
        "supersonic_legend", "Supersonic Legend",
        "Flew on Concorde - The supersonic dream (museum/special flight)",
        1000, Rarity.LEGENDARY, Ac.VINTAGE)),
    (_has("cargo", "freight"), _award(
        "cargo_rider", "Cargo Rider",
        "Flew on a cargo aircraft - Behind-the-scenes aviation",
        100, Rarity.RARE, Ac.CARGO)),
)


def normalize_type(type_string: str) -> str:
    """Lowercase and strip hyphens and whitespace: ``"Boeing 747-8"`` → ``"boeing7478"``."""
    return re.sub(r"[-\s]", "", (type_string or "").lower())


def match_aircraft(type_string: str) -> AircraftAchievement:
    """The single award for an aircraft type; falls back to "Aircraft Explorer"."""
    normalized = normalize_type(type_string)
    for predicate, award in _MATCHERS:
        if predicate(normalized):
            return award
    return _award(
        "aircraft_explorer", "Aircraft Explorer",
        f"Experienced the {type_string} - Adding to your aircraft collection",
        40, Rarity.COMMON, Ac.NARROW_BODY,
    )


MANUFACTURER_BONUS: dict[str, int] = {
    "Airbus": 10,
    "Boeing": 10,
    "Embraer": 15,
    "Bombardier": 15,
    "ATR": 20,
    "McDonnell Douglas": 25,
    "Lockheed": 30,
    "Tupolev": 40,
    "Antonov": 50,
}
DEFAULT_MANUFACTURER_BONUS = 5


def manufacturer_bonus(manufacturer: str | None) -> int:
    return MANUFACTURER_BONUS.get(manufacturer or "", DEFAULT_MANUFACTURER_BONUS)


# Family awards

BOEING_737_COLLECTOR = _award(
    "boeing_737_collector", "737 Family Collector",
    "Flew on 5+ different Boeing 737 variants", 200, Rarity.RARE, Ac.NARROW_BODY,
)
AIRBUS_A320_COLLECTOR = _award(
    "airbus_a320_collector", "A320 Family Master",
    "Experienced the complete Airbus A320 family", 180, Rarity.RARE, Ac.NARROW_BODY,
)
WIDE_BODY_ENTHUSIAST = _award(
    "wide_body_enthusiast", "Wide-Body Enthusiast",
    "Flew on 10+ different wide-body aircraft", 500, Rarity.EPIC, Ac.WIDE_BODY,
)

FAMILY_ACHIEVEMENTS: tuple[AircraftAchievement, ...] = (
    BOEING_737_COLLECTOR,
    AIRBUS_A320_COLLECTOR,
    WIDE_BODY_ENTHUSIAST,
)

WIDE_BODY_MARKERS: tuple[str, ...] = (
    "A330", "A340", "A350", "A380", "747", "767", "777", "787", "MD11", "DC10", "L1011",
)


def is_wide_body(type_string: str) -> bool:
    squashed = normalize_type(type_string).upper()
    return any(marker in squashed for marker in WIDE_BODY_MARKERS)


def check_family_achievements(aircraft_history: Iterable[str]) -> list[AircraftAchievement]:
    """Family awards earned by the distinct aircraft types in a history."""
    distinct = {t.strip() for t in aircraft_history if t and t.strip()}
    earned: list[AircraftAchievement] = []

    if sum(1 for t in distinct if "737" in t) >= 5:
        earned.append(BOEING_737_COLLECTOR)
    if sum(1 for t in distinct if "a32" in t.lower()) >= 4:
        earned.append(AIRBUS_A320_COLLECTOR)
    if sum(1 for t in distinct if is_wide_body(t)) >= 10:
        earned.append(WIDE_BODY_ENTHUSIAST)
    return earned
