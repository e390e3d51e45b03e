"""Tests for the current-user and leaderboard endpoints."""

from __future__ import annotations


class TestMeAPI:
    async def test_stats_for_new_user(self, client):
        resp = await client.get("/api/me/stats")
        assert resp.status_code == 200
        data = resp.json()
        assert data["xp"] == 0
        assert data["level"] == 1
        assert data["next_level_xp"] == 100
        assert data["stats"]["flights"] == 0

    async def test_stats_after_logging(self, client):
        await client.post("/api/flights", json={"flight_number": "QP1457"})
        data = (await client.get("/api/me/stats")).json()
        assert data["xp"] == 225
        assert data["level"] == 2
        assert data["next_level_xp"] == 300
        assert data["stats"]["airports"] == ["BOM", "BLR"]

    async def test_achievements(self, client):
        await client.post("/api/flights", json={"flight_number": "QP1457"})
        data = (await client.get("/api/me/achievements")).json()
        assert [a["id"] for a in data["unlocked"]] == ["first_flight"]
        # 19 catalog entries plus the three aircraft-family awards
        assert len(data["locked"]) == 22
        assert "first_flight" not in [a["id"] for a in data["locked"]]


class TestLeaderboardAPI:
    async def test_default_category(self, client):
        await client.post("/api/flights", json={"flight_number": "QP1457"})
        resp = await client.get("/api/leaderboards")
        assert resp.status_code == 200
        data = resp.json()
        assert data["category"] == "flights"
        assert data["entries"][0]["user_id"] == "api-test-user"
        assert data["entries"][0]["rank"] == 1
        assert data["entries"][0]["value"] == 1

    async def test_xp_category(self, client):
        await client.post("/api/flights", json={"flight_number": "QP1457"})
        data = (await client.get("/api/leaderboards", params={"category": "xp", "limit": 5})).json()
        assert data["entries"][0]["value"] == 225

    async def test_unknown_category(self, client):
        resp = await client.get("/api/leaderboards", params={"category": "speed"})
        assert resp.status_code == 400
