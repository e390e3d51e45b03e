"""Leaderboards ranked by one statistic."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from skylog.api.deps import get_current_user, get_gamification_service
from skylog.api.errors import to_http
from skylog.contracts.enums import LeaderboardCategory
from skylog.services.errors import SkyLogError
from skylog.services.gamification.engine import GamificationService

router = APIRouter(prefix="/leaderboards", tags=["leaderboards"])


@router.get("")
async def get_leaderboard(
    category: LeaderboardCategory = LeaderboardCategory.FLIGHTS,
    limit: int = Query(10, ge=1, le=100),
    user_id: str = Depends(get_current_user),
    service: GamificationService = Depends(get_gamification_service),
) -> dict:
    try:
        entries = await service.leaderboard(category, limit)
    except SkyLogError as exc:
        raise to_http(exc) from exc
    return {"category": category.value, "entries": [e.model_dump() for e in entries]}
