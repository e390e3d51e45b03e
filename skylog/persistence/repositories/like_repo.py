"""Repository for flight likes (top-level ``/likes`` collection)."""

from __future__ import annotations

from skylog.contracts.flight import FlightLike
from skylog.persistence.repositories.base import BaseRepository


class LikeRepository(BaseRepository[FlightLike]):
    def __init__(self):
        super().__init__(FlightLike, "likes")

    async def like(self, user_id: str, flight_id: str) -> None:
        """Idempotent: the deterministic document ID makes repeats overwrite."""
        await self.create(
            FlightLike(
                id=FlightLike.doc_id_for(user_id, flight_id),
                user_id=user_id,
                flight_id=flight_id,
            )
        )

    async def unlike(self, user_id: str, flight_id: str) -> None:
        await self.delete(FlightLike.doc_id_for(user_id, flight_id))

    async def has_liked(self, user_id: str, flight_id: str) -> bool:
        return await self.get(FlightLike.doc_id_for(user_id, flight_id)) is not None

    async def count_for_flight(self, flight_id: str) -> int:
        return len(await self.list_where("flight_id", "==", flight_id))

    async def delete_for_flight(self, flight_id: str) -> None:
        for like in await self.list_where("flight_id", "==", flight_id):
            await self.delete(like.id)
