"""Firebase Auth ID token verification."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from fastapi import Header, HTTPException

logger = logging.getLogger(__name__)

DEV_USER_ID = "dev-user"


@dataclass
class UserClaims:
    uid: str
    email: str | None = None
    name: str | None = None

    @property
    def display_name(self) -> str | None:
        """Name shown on leaderboards: the token's name, else the email's local part."""
        if self.name:
            return self.name
        if self.email:
            return self.email.split("@", 1)[0]
        return None


def _dev_claims() -> UserClaims:
    uid = os.environ.get("SKYLOG_DEV_USER") or DEV_USER_ID
    return UserClaims(uid=uid, email=f"{uid}@localhost", name="Dev User")


async def verify_firebase_token(
    authorization: str | None = Header(None, description="Bearer <Firebase ID token>"),
) -> UserClaims:
    """Extract and verify a Firebase Auth ID token from the Authorization header.

    ``SKYLOG_AUTH_DISABLED=1`` skips verification and returns a fixed
    development user (``SKYLOG_DEV_USER`` overrides its uid).
    ``SKYLOG_CHECK_REVOKED=1`` also rejects revoked sessions, at the cost of
    one Firebase round trip per request.
    """
    if os.environ.get("SKYLOG_AUTH_DISABLED") == "1":
        return _dev_claims()

    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Invalid authorization header")

    check_revoked = os.environ.get("SKYLOG_CHECK_REVOKED") == "1"
    try:
        from firebase_admin import auth as firebase_auth

        decoded = firebase_auth.verify_id_token(token, check_revoked=check_revoked)
    except Exception as exc:
        logger.info("Rejected ID token: %s", exc)
        raise HTTPException(status_code=401, detail=f"Invalid token: {exc}") from exc

    return UserClaims(
        uid=decoded["uid"],
        email=decoded.get("email"),
        name=decoded.get("name"),
    )
