"""Gamification orchestrator.

Resolves a flight, scores it, merges it into the user's statistics and
persists everything in one guarded batch:

- the ``/flights/{id}`` record
- the ``/users/{uid}`` document (xp, level, stats), guarded by the
  ``update_time`` it was read at
- one ``/users/{uid}/achievements/{id}`` document per new unlock

A lost race raises ``ConcurrencyConflictError`` from the commit and the
whole read-score-write cycle is retried with exponential backoff.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Awaitable, Callable, Iterable, TypeVar

from skylog.contracts.achievement import UnlockedAchievement
from skylog.contracts.common import utc_now
from skylog.contracts.enums import CabinClass, LeaderboardCategory, Visibility
from skylog.contracts.flight import LoggedFlight, NormalizedFlight
from skylog.contracts.result import FlightLogResult, FlightLookupResult, LeaderboardEntry
from skylog.contracts.stats import UserProfile
from skylog.persistence.errors import ConcurrencyConflictError, FatalPersistenceError
from skylog.persistence.firestore_client import get_firestore_client
from skylog.persistence.repositories.achievement_repo import AchievementRepository
from skylog.persistence.repositories.flight_repo import FlightRepository
from skylog.persistence.repositories.like_repo import LikeRepository
from skylog.persistence.repositories.user_repo import UserRepository, leaderboard_values
from skylog.services.errors import FlightNotFoundError, LoggedFlightNotFoundError, ValidationError
from skylog.services.flight_data.normalize import validate_date, validate_flight_number
from skylog.services.flight_data.resolver import FlightResolver, build_default_resolver
from skylog.services.gamification.achievements import check_achievements, level_for_xp
from skylog.services.gamification.aircraft import (
    check_family_achievements,
    manufacturer_bonus,
    match_aircraft,
)
from skylog.services.gamification.scoring import calculate_xp
from skylog.services.gamification.stats import (
    bucket_departure,
    bucket_time_of_day,
    merge_flight_into_stats,
    rebuild_stats,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_TXN_ATTEMPTS = 5
DEFAULT_RETRY_BASE_DELAY = 0.05


def _max_attempts_from_env() -> int:
    value = os.environ.get("SKYLOG_MAX_TXN_ATTEMPTS")
    try:
        return max(1, int(value)) if value else DEFAULT_MAX_TXN_ATTEMPTS
    except ValueError:
        logger.warning("Ignoring non-integer SKYLOG_MAX_TXN_ATTEMPTS=%r", value)
        return DEFAULT_MAX_TXN_ATTEMPTS


class GamificationService:
    """Flight logging, scoring and the social reads around it."""

    def __init__(
        self,
        resolver: FlightResolver | None = None,
        flights: FlightRepository | None = None,
        users: UserRepository | None = None,
        achievements: AchievementRepository | None = None,
        likes: LikeRepository | None = None,
        max_attempts: int | None = None,
        retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY,
    ):
        self._resolver = resolver or build_default_resolver()
        self._flights = flights or FlightRepository()
        self._users = users or UserRepository()
        self._achievements = achievements or AchievementRepository()
        self._likes = likes or LikeRepository()
        self._max_attempts = max_attempts or _max_attempts_from_env()
        self._retry_base_delay = retry_base_delay

    @property
    def resolver(self) -> FlightResolver:
        return self._resolver

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def resolve(self, flight_number: str, date: str | None = None) -> NormalizedFlight:
        """Resolve or raise ``InvalidFlightNumberError`` / ``FlightNotFoundError``."""
        fn = validate_flight_number(flight_number)
        date = validate_date(date)
        flight = await self._resolver.resolve(fn, date)
        if flight is None:
            raise FlightNotFoundError(fn)
        return flight

    async def lookup(self, flight_number: str, date: str | None = None) -> FlightLookupResult:
        """Resolve a flight and preview its aircraft award without logging it."""
        flight = await self.resolve(flight_number, date)
        return FlightLookupResult(
            flight=flight,
            aircraft_achievement=match_aircraft(flight.aircraft.type),
            manufacturer_bonus=manufacturer_bonus(flight.aircraft.manufacturer),
        )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    async def log_flight(
        self,
        user_id: str,
        flight_number: str,
        date: str | None = None,
        cabin_class: CabinClass | str = CabinClass.ECONOMY,
        photos: Iterable[str] = (),
        review_text: str = "",
        visibility: Visibility | str = Visibility.PUBLIC,
        display_name: str | None = None,
    ) -> FlightLogResult:
        try:
            cabin = CabinClass(cabin_class)
            vis = Visibility(visibility)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        date = validate_date(date)
        flight = await self.resolve(flight_number, date)
        photos = list(photos)
        flight_id = self._flights.new_id()

        async def attempt() -> FlightLogResult:
            return await self._commit_log(
                user_id, flight_id, flight, date, cabin, photos, review_text or "", vis, display_name
            )

        result = await self._with_retries(f"log {flight.flight_number} for {user_id}", attempt)
        logger.info(
            "User %s logged %s (+%d XP, %d new achievements)",
            user_id, flight.flight_number, result.xp_awarded, len(result.new_achievements),
        )
        return result

    async def _commit_log(
        self,
        user_id: str,
        flight_id: str,
        flight: NormalizedFlight,
        date: str | None,
        cabin: CabinClass,
        photos: list[str],
        review_text: str,
        visibility: Visibility,
        display_name: str | None,
    ) -> FlightLogResult:
        profile, version = await self._users.get_with_version(user_id)
        unlocked_ids = await self._achievements.unlocked_ids(user_id)

        route = flight.route
        known_airports = set(profile.stats.airports)
        is_new_airport = (
            route.departure.iata not in known_airports or route.arrival.iata not in known_airports
        )
        award = match_aircraft(flight.aircraft.type)
        flight_xp = (
            calculate_xp(
                route.distance_km,
                cabin,
                photo_count=len(photos),
                review_length=len(review_text),
                is_new_airport=is_new_airport,
            )
            + award.xp
            + manufacturer_bonus(flight.aircraft.manufacturer)
        )

        tod = bucket_time_of_day(flight)
        stats = merge_flight_into_stats(
            profile.stats,
            flight,
            cabin_class=cabin,
            time_of_day=tod,
            photo_count=len(photos),
            flight_id=flight_id,
            departure_iso=bucket_departure(flight, date),
        )

        # Evaluated against the post-merge snapshot.
        now = utc_now()
        earned = [*check_achievements(stats, unlocked_ids), *(
            a for a in check_family_achievements(stats.aircraft) if a.id not in unlocked_ids
        )]
        unlocks = [
            UnlockedAchievement(id=a.id, name=a.name, xp=a.xp, flight_id=flight_id, unlocked_at=now)
            for a in earned
        ]
        unlock_xp = sum(u.xp for u in unlocks)

        old_level = level_for_xp(profile.xp)
        total_xp = profile.xp + flight_xp + unlock_xp
        new_level = level_for_xp(total_xp)
        updated = profile.model_copy(
            update={
                "id": user_id,
                "xp": total_xp,
                "level": new_level,
                "stats": stats,
                "display_name": profile.display_name or display_name,
            }
        )

        logged = LoggedFlight(
            id=flight_id,
            user_id=user_id,
            flight=flight,
            date=date,
            cabin_class=cabin,
            time_of_day=tod,
            photos=photos,
            review_text=review_text,
            visibility=visibility,
            xp_awarded=flight_xp,
            created_at=now,
        )

        batch = get_firestore_client().batch()
        self._flights.stage_create(batch, logged)
        for unlock in unlocks:
            self._achievements.stage_unlock(batch, user_id, unlock)
        self._users.stage_write(batch, updated, version)
        await self._users.commit_guarded(batch)

        return FlightLogResult(
            flight_id=flight_id,
            flight=flight,
            xp_awarded=flight_xp + unlock_xp,
            new_achievements=unlocks,
            aircraft_achievement=award,
            total_xp=total_xp,
            new_level=new_level,
            level_up=new_level > old_level,
            stats=stats,
        )

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    async def delete_flight(self, user_id: str, flight_id: str) -> UserProfile:
        """Remove a flight and recompute stats from the remaining ones.

        Unlocked achievements are kept, and so is their XP.
        """
        logged = await self._flights.get(flight_id)
        if logged is None or logged.user_id != user_id:
            raise LoggedFlightNotFoundError(flight_id)

        async def attempt() -> UserProfile:
            profile, version = await self._users.get_with_version(user_id)
            remaining = [f for f in await self._flights.list_for_user(user_id) if f.id != flight_id]
            unlocked = await self._achievements.list_for_user(user_id)
            xp = sum(f.xp_awarded for f in remaining) + sum(a.xp for a in unlocked)
            updated = profile.model_copy(
                update={
                    "id": user_id,
                    "xp": xp,
                    "level": level_for_xp(xp),
                    "stats": rebuild_stats(remaining),
                }
            )
            batch = get_firestore_client().batch()
            self._flights.stage_delete(batch, flight_id)
            self._users.stage_write(batch, updated, version)
            await self._users.commit_guarded(batch)
            return updated

        updated = await self._with_retries(f"delete {flight_id} for {user_id}", attempt)
        await self._likes.delete_for_flight(flight_id)
        logger.info("User %s deleted flight %s", user_id, flight_id)
        return updated

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_flight(self, flight_id: str, viewer_id: str) -> LoggedFlight:
        """A flight visible to ``viewer_id``; private flights only to their owner."""
        logged = await self._flights.get(flight_id)
        if logged is None:
            raise LoggedFlightNotFoundError(flight_id)
        if logged.visibility == Visibility.PRIVATE.value and logged.user_id != viewer_id:
            raise LoggedFlightNotFoundError(flight_id)
        return logged

    async def list_flights(self, user_id: str) -> list[LoggedFlight]:
        return await self._flights.list_for_user(user_id)

    async def get_profile(self, user_id: str) -> UserProfile:
        """User profile with ``level`` re-derived from ``xp``."""
        profile = await self._users.get_profile(user_id)
        return profile.model_copy(update={"level": level_for_xp(profile.xp)})

    async def list_achievements(self, user_id: str) -> list[UnlockedAchievement]:
        return await self._achievements.list_for_user(user_id)

    async def like_count(self, flight_id: str) -> int:
        return await self._likes.count_for_flight(flight_id)

    async def like_flight(self, user_id: str, flight_id: str) -> int:
        """Idempotent like; returns the flight's like count."""
        await self.get_flight(flight_id, user_id)
        await self._likes.like(user_id, flight_id)
        return await self._likes.count_for_flight(flight_id)

    async def unlike_flight(self, user_id: str, flight_id: str) -> int:
        await self.get_flight(flight_id, user_id)
        await self._likes.unlike(user_id, flight_id)
        return await self._likes.count_for_flight(flight_id)

    async def leaderboard(
        self, category: LeaderboardCategory | str = LeaderboardCategory.FLIGHTS, limit: int = 10
    ) -> list[LeaderboardEntry]:
        try:
            category = LeaderboardCategory(category)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        profiles = await self._users.leaderboard(category, limit)
        return [
            LeaderboardEntry(
                user_id=p.id,
                display_name=p.display_name,
                rank=rank,
                value=leaderboard_values(p)[category.value],
                level=level_for_xp(p.xp),
                xp=p.xp,
            )
            for rank, p in enumerate(profiles, start=1)
        ]

    # ------------------------------------------------------------------
    # Retry
    # ------------------------------------------------------------------

    async def _with_retries(self, what: str, attempt: Callable[[], Awaitable[T]]) -> T:
        for n in range(1, self._max_attempts + 1):
            try:
                return await attempt()
            except ConcurrencyConflictError as exc:
                if n == self._max_attempts:
                    logger.error("Giving up on %s after %d attempts: %s", what, n, exc)
                    break
                delay = self._retry_base_delay * (2 ** (n - 1))
                logger.warning("Write conflict on %s (attempt %d), retrying in %.2fs", what, n, delay)
                await asyncio.sleep(delay)
        raise FatalPersistenceError(
            f"Could not {what}: too many concurrent updates"
        )
