"""Repository for per-user unlocked achievements.

Stored at ``/users/{user_id}/achievements/{achievement_id}``; the document
ID is the achievement ID, so a user holds each achievement at most once.
"""

from __future__ import annotations

from typing import Any

from skylog.contracts.achievement import UnlockedAchievement
from skylog.persistence.repositories.base import BaseRepository


class AchievementRepository(BaseRepository[UnlockedAchievement]):
    def __init__(self):
        super().__init__(UnlockedAchievement, "achievements", user_scoped=True)

    async def list_for_user(self, user_id: str) -> list[UnlockedAchievement]:
        unlocked = await self.list_all(user_id=user_id)
        return sorted(unlocked, key=lambda a: a.unlocked_at)

    async def unlocked_ids(self, user_id: str) -> set[str]:
        return {a.id for a in await self.list_all(user_id=user_id)}

    def stage_unlock(self, batch: Any, user_id: str, unlocked: UnlockedAchievement) -> None:
        """``create`` rather than ``set``: a second unlock of the same ID conflicts."""
        batch.create(self.document_ref(unlocked.id, user_id=user_id), self._serialize(unlocked))
