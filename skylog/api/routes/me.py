"""Current user's profile, stats and achievements."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from skylog.api.deps import get_current_user, get_gamification_service
from skylog.services.gamification.achievements import CATALOG, xp_for_next_level
from skylog.services.gamification.aircraft import FAMILY_ACHIEVEMENTS
from skylog.services.gamification.engine import GamificationService

router = APIRouter(prefix="/me", tags=["me"])


@router.get("/stats")
async def get_stats(
    user_id: str = Depends(get_current_user),
    service: GamificationService = Depends(get_gamification_service),
) -> dict:
    profile = await service.get_profile(user_id)
    return {
        "user_id": user_id,
        "display_name": profile.display_name,
        "xp": profile.xp,
        "level": profile.level,
        "next_level_xp": xp_for_next_level(profile.level),
        "stats": profile.stats.to_firestore(),
    }


@router.get("/achievements")
async def get_achievements(
    user_id: str = Depends(get_current_user),
    service: GamificationService = Depends(get_gamification_service),
) -> dict:
    unlocked = await service.list_achievements(user_id)
    unlocked_ids = {a.id for a in unlocked}
    return {
        "unlocked": [a.to_firestore() for a in unlocked],
        "locked": [
            a.to_firestore()
            for a in (*CATALOG, *FAMILY_ACHIEVEMENTS)
            if a.id not in unlocked_ids
        ],
    }
