"""Unit tests for Firestore repositories using FakeFirestoreClient."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from skylog.contracts.achievement import UnlockedAchievement
from skylog.contracts.enums import DataSource, LeaderboardCategory
from skylog.contracts.flight import (
    AircraftInfo,
    Airline,
    AirportRef,
    LoggedFlight,
    NormalizedFlight,
    Route,
)
from skylog.contracts.stats import UserProfile, UserStatsSnapshot
from skylog.persistence.errors import ConcurrencyConflictError
from skylog.persistence.repositories.achievement_repo import AchievementRepository
from skylog.persistence.repositories.flight_repo import FlightRepository
from skylog.persistence.repositories.like_repo import LikeRepository
from skylog.persistence.repositories.user_repo import UserRepository, leaderboard_values
from tests.persistence.fake_firestore import FakeFirestoreClient, patched_firestore

USER_ID = "test-user-123"


@pytest.fixture
def fake_client():
    return FakeFirestoreClient()


@pytest.fixture(autouse=True)
def patch_firestore(fake_client):
    with patched_firestore(fake_client):
        yield


def _make_flight(flight_id: str | None, user_id: str = USER_ID, minutes_ago: int = 0) -> LoggedFlight:
    return LoggedFlight(
        id=flight_id,
        user_id=user_id,
        flight=NormalizedFlight(
            flight_number="QP1457",
            airline=Airline(name="Akasa Air", code="QP", country="IN"),
            aircraft=AircraftInfo(type="Airbus A320neo", manufacturer="Airbus"),
            route=Route(
                departure=AirportRef(airport_name="Mumbai", iata="BOM", country="IN"),
                arrival=AirportRef(airport_name="Bengaluru", iata="BLR", country="IN"),
                distance_km=865,
                distance_mi=537,
                duration_minutes=62,
            ),
            source=DataSource.SYNTHETIC,
        ),
        xp_awarded=125,
        created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
    )


class TestFlightRepository:
    async def test_stage_and_get(self, fake_client):
        repo = FlightRepository()
        flight_id = repo.new_id()
        batch = fake_client.batch()
        repo.stage_create(batch, _make_flight(flight_id))
        await batch.commit()

        loaded = await repo.get(flight_id)
        assert loaded is not None
        assert loaded.id == flight_id
        assert loaded.flight.route.arrival.iata == "BLR"
        assert loaded.xp_awarded == 125

    async def test_stage_requires_id(self, fake_client):
        with pytest.raises(ValueError):
            FlightRepository().stage_create(fake_client.batch(), _make_flight(None))

    async def test_list_for_user_newest_first(self, fake_client):
        repo = FlightRepository()
        batch = fake_client.batch()
        repo.stage_create(batch, _make_flight("old", minutes_ago=30))
        repo.stage_create(batch, _make_flight("new", minutes_ago=1))
        repo.stage_create(batch, _make_flight("theirs", user_id="other"))
        await batch.commit()

        assert [f.id for f in await repo.list_for_user(USER_ID)] == ["new", "old"]

    async def test_stage_delete(self, fake_client):
        repo = FlightRepository()
        await repo.create(_make_flight("f1"))
        batch = fake_client.batch()
        repo.stage_delete(batch, "f1")
        await batch.commit()
        assert await repo.get("f1") is None


class TestUserRepository:
    async def test_missing_user_gets_fresh_profile(self):
        profile, version = await UserRepository().get_with_version(USER_ID)
        assert profile.id == USER_ID
        assert profile.xp == 0
        assert profile.stats == UserStatsSnapshot()
        assert version is None

    async def test_guarded_create_then_update(self, fake_client):
        repo = UserRepository()
        profile, version = await repo.get_with_version(USER_ID)

        batch = fake_client.batch()
        repo.stage_write(batch, profile.model_copy(update={"xp": 150}), version)
        await repo.commit_guarded(batch)

        stored, version = await repo.get_with_version(USER_ID)
        assert stored.xp == 150
        assert version is not None

        batch = fake_client.batch()
        repo.stage_write(batch, stored.model_copy(update={"xp": 300}), version)
        await repo.commit_guarded(batch)
        assert (await repo.get_profile(USER_ID)).xp == 300

    async def test_stale_version_conflicts(self, fake_client):
        repo = UserRepository()
        await repo.create(UserProfile(id=USER_ID, xp=10))
        profile, version = await repo.get_with_version(USER_ID)

        # Someone else writes in between
        await repo.create(UserProfile(id=USER_ID, xp=20))

        batch = fake_client.batch()
        repo.stage_write(batch, profile.model_copy(update={"xp": 99}), version)
        with pytest.raises(ConcurrencyConflictError):
            await repo.commit_guarded(batch)
        assert (await repo.get_profile(USER_ID)).xp == 20

    async def test_concurrent_create_conflicts(self, fake_client):
        repo = UserRepository()
        profile, version = await repo.get_with_version(USER_ID)
        await repo.create(UserProfile(id=USER_ID, xp=5))

        batch = fake_client.batch()
        repo.stage_write(batch, profile, version)
        with pytest.raises(ConcurrencyConflictError):
            await repo.commit_guarded(batch)

    async def test_failed_batch_applies_nothing(self, fake_client):
        repo = UserRepository()
        flights = FlightRepository()
        await repo.create(UserProfile(id=USER_ID))
        profile, version = await repo.get_with_version(USER_ID)
        await repo.create(UserProfile(id=USER_ID, xp=1))

        batch = fake_client.batch()
        flights.stage_create(batch, _make_flight("f1"))
        repo.stage_write(batch, profile, version)
        with pytest.raises(ConcurrencyConflictError):
            await repo.commit_guarded(batch)
        assert await flights.get("f1") is None

    async def test_leaderboard_values(self):
        profile = UserProfile(
            id=USER_ID,
            xp=420,
            stats=UserStatsSnapshot(flights=3, miles_mi=1200, hours=4.5, countries=["IN", "AE"], airports=["BOM"]),
        )
        assert leaderboard_values(profile) == {
            "flights": 3, "miles": 1200, "countries": 2, "hours": 4.5, "airports": 1, "xp": 420,
        }

    async def test_leaderboard_query(self, fake_client):
        repo = UserRepository()
        for uid, xp in (("a", 50), ("b", 500), ("c", 200)):
            batch = fake_client.batch()
            repo.stage_write(batch, UserProfile(id=uid, xp=xp), None)
            await repo.commit_guarded(batch)

        top = await repo.leaderboard(LeaderboardCategory.XP, limit=2)
        assert [p.id for p in top] == ["b", "c"]


class TestAchievementRepository:
    async def test_unlock_and_list(self, fake_client):
        repo = AchievementRepository()
        batch = fake_client.batch()
        repo.stage_unlock(batch, USER_ID, UnlockedAchievement(id="first_flight", name="First Flight", xp=100))
        await batch.commit()

        assert await repo.unlocked_ids(USER_ID) == {"first_flight"}
        assert "users/test-user-123/achievements/first_flight" in fake_client.store.docs

    async def test_double_unlock_conflicts(self, fake_client):
        repo = AchievementRepository()
        users = UserRepository()
        unlocked = UnlockedAchievement(id="first_flight", name="First Flight")

        batch = fake_client.batch()
        repo.stage_unlock(batch, USER_ID, unlocked)
        users.stage_write(batch, UserProfile(id=USER_ID), None)
        await users.commit_guarded(batch)

        batch = fake_client.batch()
        repo.stage_unlock(batch, USER_ID, unlocked)
        with pytest.raises(ConcurrencyConflictError):
            await users.commit_guarded(batch)
        assert len(await repo.list_for_user(USER_ID)) == 1

    async def test_user_scoped(self):
        with pytest.raises(ValueError):
            await AchievementRepository().list_all()


class TestLikeRepository:
    async def test_like_is_idempotent(self):
        repo = LikeRepository()
        await repo.like("u1", "f1")
        await repo.like("u1", "f1")
        await repo.like("u2", "f1")
        await repo.like("u1", "f2")

        assert await repo.count_for_flight("f1") == 2
        assert await repo.has_liked("u1", "f1")

        await repo.unlike("u1", "f1")
        assert not await repo.has_liked("u1", "f1")
        assert await repo.count_for_flight("f1") == 1

    async def test_delete_for_flight(self):
        repo = LikeRepository()
        await repo.like("u1", "f1")
        await repo.like("u2", "f1")
        await repo.like("u1", "f2")
        await repo.delete_for_flight("f1")
        assert await repo.count_for_flight("f1") == 0
        assert await repo.count_for_flight("f2") == 1
