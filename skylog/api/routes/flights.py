"""Flight logging endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from skylog.api.auth import UserClaims
from skylog.api.deps import get_current_claims, get_current_user, get_gamification_service
from skylog.api.errors import to_http
from skylog.contracts.flight import LogFlightRequest
from skylog.persistence.errors import PersistenceError
from skylog.services.errors import SkyLogError
from skylog.services.gamification.engine import GamificationService

router = APIRouter(prefix="/flights", tags=["flights"])


@router.post("", status_code=201)
async def log_flight(
    body: LogFlightRequest,
    claims: UserClaims = Depends(get_current_claims),
    service: GamificationService = Depends(get_gamification_service),
) -> dict:
    try:
        result = await service.log_flight(
            claims.uid,
            body.flight_number,
            date=body.date,
            cabin_class=body.cabin_class,
            photos=body.photos,
            review_text=body.review_text,
            visibility=body.visibility,
            display_name=claims.display_name,
        )
    except (SkyLogError, PersistenceError) as exc:
        raise to_http(exc) from exc
    return result.model_dump(mode="json")


@router.get("")
async def list_flights(
    user_id: str = Depends(get_current_user),
    service: GamificationService = Depends(get_gamification_service),
) -> list[dict]:
    return [f.to_firestore() for f in await service.list_flights(user_id)]


# Declared before "/{flight_id}" so "lookup" is not taken for an ID.
@router.get("/lookup")
async def lookup_flight(
    flight_number: str,
    date: str | None = None,
    user_id: str = Depends(get_current_user),
    service: GamificationService = Depends(get_gamification_service),
) -> dict:
    try:
        result = await service.lookup(flight_number, date)
    except SkyLogError as exc:
        raise to_http(exc) from exc
    return result.model_dump(mode="json")


@router.get("/{flight_id}")
async def get_flight(
    flight_id: str,
    user_id: str = Depends(get_current_user),
    service: GamificationService = Depends(get_gamification_service),
) -> dict:
    try:
        logged = await service.get_flight(flight_id, user_id)
    except SkyLogError as exc:
        raise to_http(exc) from exc
    data = logged.to_firestore()
    data["like_count"] = await service.like_count(flight_id)
    return data


@router.delete("/{flight_id}", status_code=204)
async def delete_flight(
    flight_id: str,
    user_id: str = Depends(get_current_user),
    service: GamificationService = Depends(get_gamification_service),
) -> None:
    try:
        await service.delete_flight(user_id, flight_id)
    except (SkyLogError, PersistenceError) as exc:
        raise to_http(exc) from exc


@router.post("/{flight_id}/like")
async def like_flight(
    flight_id: str,
    user_id: str = Depends(get_current_user),
    service: GamificationService = Depends(get_gamification_service),
) -> dict:
    try:
        count = await service.like_flight(user_id, flight_id)
    except SkyLogError as exc:
        raise to_http(exc) from exc
    return {"flight_id": flight_id, "liked": True, "like_count": count}


@router.post("/{flight_id}/unlike")
async def unlike_flight(
    flight_id: str,
    user_id: str = Depends(get_current_user),
    service: GamificationService = Depends(get_gamification_service),
) -> dict:
    try:
        count = await service.unlike_flight(user_id, flight_id)
    except SkyLogError as exc:
        raise to_http(exc) from exc
    return {"flight_id": flight_id, "liked": False, "like_count": count}
