"""Repository for logged flights (top-level ``/flights`` collection)."""

from __future__ import annotations

from typing import Any

from skylog.contracts.flight import LoggedFlight
from skylog.persistence.repositories.base import BaseRepository


class FlightRepository(BaseRepository[LoggedFlight]):
    def __init__(self):
        super().__init__(LoggedFlight, "flights")

    async def list_for_user(self, user_id: str) -> list[LoggedFlight]:
        """All flights of a user, newest first."""
        flights = await self.list_where("user_id", "==", user_id)
        return sorted(flights, key=lambda f: f.created_at, reverse=True)

    def new_id(self) -> str:
        return self.document_ref().id

    def stage_create(self, batch: Any, flight: LoggedFlight) -> str:
        """Add the flight to ``batch``; fails at commit if the ID is taken."""
        if not flight.id:
            raise ValueError("flight.id must be assigned before staging")
        batch.create(self.document_ref(flight.id), self._serialize(flight))
        return flight.id

    def stage_delete(self, batch: Any, flight_id: str) -> None:
        batch.delete(self.document_ref(flight_id))
