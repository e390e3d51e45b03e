"""Aircraft reference data: family codes, cruise speeds, manufacturers."""

from __future__ import annotations

import re

DEFAULT_CRUISE_SPEED_KMH = 850

CRUISE_SPEEDS_KMH: dict[str, int] = {
    "A320": 840,
    "A321": 840,
    "A330": 880,
    "A350": 900,
    "A380": 900,
    "B737": 828,
    "B747": 900,
    "B777": 905,
    "B787": 913,
}

# ICAO type designators as reported by tracking networks.
_ICAO_TYPES: dict[str, str] = {
    "A19N": "A320", "A20N": "A320", "A21N": "A321", "A319": "A320", "A320": "A320",
    "A321": "A321", "A332": "A330", "A333": "A330", "A339": "A330", "A359": "A350",
    "A35K": "A350", "A388": "A380", "B737": "B737", "B738": "B737", "B739": "B737",
    "B38M": "B737", "B39M": "B737", "B744": "B747", "B748": "B747", "B772": "B777",
    "B77W": "B777", "B77L": "B777", "B788": "B787", "B789": "B787", "B78X": "B787",
}

# Ordered: more specific families first.
_FAMILY_PATTERNS: tuple[tuple[str, str], ...] = (
    ("a380", "A380"),
    ("a350", "A350"),
    ("a330", "A330"),
    ("a321", "A321"),
    ("a320", "A320"),
    ("a319", "A320"),
    ("747", "B747"),
    ("777", "B777"),
    ("787", "B787"),
    ("737", "B737"),
)

_MANUFACTURER_PATTERNS: tuple[tuple[str, str], ...] = (
    (r"airbus|^a3\d\d|^a[12]\dn", "Airbus"),
    (r"boeing|^b?7[0-8]7", "Boeing"),
    (r"embraer|^e1[79]\d|^erj", "Embraer"),
    (r"bombardier|crj|canadair|dash|q400", "Bombardier"),
    (r"^atr", "ATR"),
    (r"mcdonnell|^md\d|^dc\d", "McDonnell Douglas"),
    (r"lockheed|l1011|tristar", "Lockheed"),
    (r"tupolev|^tu\d", "Tupolev"),
    (r"antonov|^an\d", "Antonov"),
)


def _squash(type_string: str) -> str:
    return re.sub(r"[\s\-_]", "", type_string.lower())


def aircraft_code(type_string: str | None) -> str | None:
    """Normalize a free-form aircraft type to a cruise-speed family code.

    "Boeing 787-9" → ``B787``, "A20N" → ``A320``; unknown types give None.
    """
    if not type_string:
        return None
    raw = type_string.strip().upper()
    if raw in CRUISE_SPEEDS_KMH:
        return raw
    if raw in _ICAO_TYPES:
        return _ICAO_TYPES[raw]
    squashed = _squash(type_string)
    for needle, code in _FAMILY_PATTERNS:
        if needle in squashed:
            return code
    return None


def cruise_speed_kmh(code: str | None) -> int:
    if code and code in CRUISE_SPEEDS_KMH:
        return CRUISE_SPEEDS_KMH[code]
    return DEFAULT_CRUISE_SPEED_KMH


def guess_manufacturer(type_string: str | None) -> str:
    """Best-effort manufacturer from an aircraft type string."""
    if not type_string:
        return "Unknown"
    squashed = _squash(type_string)
    for pattern, manufacturer in _MANUFACTURER_PATTERNS:
        if re.search(pattern, squashed):
            return manufacturer
    return "Unknown"
