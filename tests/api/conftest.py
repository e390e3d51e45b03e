"""Shared fixtures for API tests."""

from __future__ import annotations

import random

import httpx
import pytest

from skylog.api.app import app
from skylog.api.auth import UserClaims
from skylog.api.deps import get_current_claims, get_current_user, get_gamification_service
from skylog.services.flight_data.resolver import FlightResolver, ResolverSettings
from skylog.services.flight_data.synthetic import SyntheticFlightSource
from skylog.services.gamification.engine import GamificationService
from tests.persistence.fake_firestore import FakeFirestoreClient, patched_firestore

TEST_USER_ID = "api-test-user"


@pytest.fixture
def fake_client():
    """In-memory Firestore fake, shared across all repos in a single test."""
    return FakeFirestoreClient()


@pytest.fixture
def service():
    """Gamification service resolving through the synthetic source only."""
    resolver = FlightResolver([SyntheticFlightSource(rng=random.Random(3))], ResolverSettings())
    return GamificationService(resolver=resolver, retry_base_delay=0)


@pytest.fixture
def test_app(fake_client, service):
    """FastAPI app with dependency overrides for testing."""
    # Override auth to return a fixed test user
    app.dependency_overrides[get_current_user] = lambda: TEST_USER_ID
    app.dependency_overrides[get_current_claims] = lambda: UserClaims(uid=TEST_USER_ID, name="API Tester")
    app.dependency_overrides[get_gamification_service] = lambda: service

    with patched_firestore(fake_client):
        yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
