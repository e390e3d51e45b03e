"""Repository for user documents (``/users/{user_id}``): XP, level and stats.

Every change to a user's stats goes through ``stage_write`` +
``commit_guarded``: the user document is written with an ``update_time``
precondition taken from the snapshot the change was computed from (or
``create`` when the document did not exist), in the same batch as the
flight and achievement documents.  A lost race surfaces as
``ConcurrencyConflictError`` and nothing from the batch is applied.
"""

from __future__ import annotations

import logging
from typing import Any

from google.api_core import exceptions as gexc

from skylog.contracts.enums import LeaderboardCategory
from skylog.contracts.stats import UserProfile
from skylog.persistence.errors import ConcurrencyConflictError, FatalPersistenceError
from skylog.persistence.firestore_client import get_firestore_client
from skylog.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

_CONFLICTS = (gexc.FailedPrecondition, gexc.Conflict, gexc.Aborted)


def leaderboard_values(profile: UserProfile) -> dict[str, float]:
    """Denormalized sort keys; Firestore cannot order by array length."""
    stats = profile.stats
    return {
        LeaderboardCategory.FLIGHTS.value: stats.flights,
        LeaderboardCategory.MILES.value: stats.miles_mi,
        LeaderboardCategory.COUNTRIES.value: len(stats.countries),
        LeaderboardCategory.HOURS.value: stats.hours,
        LeaderboardCategory.AIRPORTS.value: len(stats.airports),
        LeaderboardCategory.XP.value: profile.xp,
    }


class UserRepository(BaseRepository[UserProfile]):
    def __init__(self):
        super().__init__(UserProfile, "users")

    async def get_with_version(self, user_id: str) -> tuple[UserProfile, Any]:
        """Profile plus the ``update_time`` to guard a later write with.

        A missing document yields a fresh profile and ``None``.
        """
        doc = await self.document_ref(user_id).get()
        if not doc.exists:
            return UserProfile(id=user_id), None
        return self._hydrate(doc), doc.update_time

    async def get_profile(self, user_id: str) -> UserProfile:
        profile, _ = await self.get_with_version(user_id)
        return profile

    def stage_write(self, batch: Any, profile: UserProfile, update_time: Any) -> None:
        data = self._serialize(profile)
        data["leaderboard"] = leaderboard_values(profile)
        ref = self.document_ref(profile.id)
        if update_time is None:
            batch.create(ref, data)
        else:
            option = get_firestore_client().write_option(last_update_time=update_time)
            batch.update(ref, data, option=option)

    async def commit_guarded(self, batch: Any) -> None:
        """Commit a batch containing a staged user write."""
        try:
            await batch.commit()
        except _CONFLICTS as exc:
            raise ConcurrencyConflictError(str(exc)) from exc
        except gexc.GoogleAPICallError as exc:
            logger.error("Firestore commit failed: %s", exc)
            raise FatalPersistenceError(str(exc)) from exc

    async def leaderboard(self, category: LeaderboardCategory, limit: int = 10) -> list[UserProfile]:
        """Top users for a category, highest first."""
        query = (
            self._collection_ref()
            .order_by(f"leaderboard.{category.value}", direction="DESCENDING")
            .limit(limit)
        )
        results: list[UserProfile] = []
        async for doc in query.stream():
            results.append(self._hydrate(doc))
        return results
