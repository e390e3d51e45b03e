"""Enumerations shared across all SkyLog contracts."""

from enum import Enum


class CabinClass(str, Enum):
    ECONOMY = "economy"
    PREMIUM = "premium"
    BUSINESS = "business"
    FIRST = "first"


class TimeOfDay(str, Enum):
    DAY = "day"
    NIGHT = "night"


class Visibility(str, Enum):
    PUBLIC = "public"
    FRIENDS = "friends"
    PRIVATE = "private"


class FlightStatus(str, Enum):
    """Operational status of a resolved flight."""
    SCHEDULED = "scheduled"
    BOARDING = "boarding"
    DEPARTED = "departed"
    AIRBORNE = "airborne"
    LANDED = "landed"
    CANCELLED = "cancelled"
    DELAYED = "delayed"  # Cosmetic only, never scored


class DataSource(str, Enum):
    """Provenance of a resolved flight, in resolver priority order."""
    STRUCTURED_API = "structured-api"
    LIVE_SCRAPE = "live-scrape"
    NETWORK_TRACKING = "network-tracking"
    SYNTHETIC = "synthetic"


class AchievementCategory(str, Enum):
    GEOGRAPHIC = "geographic"
    AIRCRAFT = "aircraft"
    AIRLINE = "airline"
    DISTANCE = "distance"
    FREQUENCY = "frequency"
    SPECIAL = "special"


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class AircraftCategory(str, Enum):
    NARROW_BODY = "narrow-body"
    WIDE_BODY = "wide-body"
    REGIONAL = "regional"
    SUPERJUMBO = "superjumbo"
    CARGO = "cargo"
    VINTAGE = "vintage"


class ConditionType(str, Enum):
    """Statistic an achievement threshold is evaluated against."""
    TOTAL_FLIGHTS = "total_flights"
    TOTAL_MILES = "total_miles"
    TOTAL_KM = "total_km"
    TOTAL_HOURS = "total_hours"
    AIRPORTS = "airports"
    CONTINENTS = "continents"
    COUNTRIES = "countries"
    AIRLINES = "airlines"
    AIRCRAFT_TYPES = "aircraft_types"
    INTERNATIONAL_FLIGHTS = "international_flights"
    DOMESTIC_FLIGHTS = "domestic_flights"
    LONG_HAUL_FLIGHTS = "long_haul_flights"
    SAME_AIRLINE_FLIGHTS = "same_airline_flights"
    PREMIUM_CABIN = "premium_cabin"
    OVERNIGHT_FLIGHTS = "overnight_flights"
    PHOTOS_UPLOADED = "photos_uploaded"
    YEARLY_FLIGHTS = "yearly_flights"


class LeaderboardCategory(str, Enum):
    FLIGHTS = "flights"
    MILES = "miles"
    COUNTRIES = "countries"
    HOURS = "hours"
    AIRPORTS = "airports"
    XP = "xp"
