"""Base classes and shared types for SkyLog contracts.

Unit conventions (all contracts and API responses):
- **Distances**: kilometers — suffix ``_km``; statute miles — suffix ``_mi``
- **Durations**: minutes — suffix ``_minutes``; hours only in ``hours`` totals
- **Datetimes**: always UTC, ISO 8601 in serialized form
- **Coordinates**: WGS84 decimal degrees
- **Country codes**: ISO 3166-1 alpha-2 (``IN``, ``US``)
- **Airport codes**: IATA, three uppercase letters

Sources may report other units (nautical miles, "1h 25m" strings), but must
convert to the above before a ``NormalizedFlight`` is built.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Timezone-aware current time; every stored timestamp goes through here."""
    return datetime.now(tz=timezone.utc)


class FirestoreModel(BaseModel):
    """Pydantic model stored as a Firestore document.

    Enum fields hold their string values, unset optionals are dropped on
    write and the document ID never goes into the document body (the
    repositories pop ``id`` and restore it from the snapshot).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_firestore(self) -> dict[str, Any]:
        """JSON-safe dict: datetimes as ISO 8601, ``None`` fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_firestore(cls, data: dict[str, Any]) -> "FirestoreModel":
        return cls.model_validate(data)


class GeoPoint(BaseModel):
    """WGS84 coordinate, range-checked."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    model_config = ConfigDict(frozen=True)
