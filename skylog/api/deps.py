"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Depends, Request

from skylog.api.auth import UserClaims, verify_firebase_token
from skylog.services.gamification.engine import GamificationService

# ------------------------------------------------------------------
# Current user
# ------------------------------------------------------------------


def get_current_claims(
    claims: UserClaims = Depends(verify_firebase_token),
) -> UserClaims:
    return claims


def get_current_user(
    claims: UserClaims = Depends(verify_firebase_token),
) -> str:
    """Return the authenticated user ID."""
    return claims.uid


# ------------------------------------------------------------------
# Services (singleton from app.state)
# ------------------------------------------------------------------


def get_gamification_service(request: Request) -> GamificationService:
    service = getattr(request.app.state, "gamification", None)
    if service is None:
        service = GamificationService()
        request.app.state.gamification = service
    return service
