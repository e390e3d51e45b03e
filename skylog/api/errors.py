"""Translate domain and persistence errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import HTTPException

from skylog.persistence.errors import FatalPersistenceError, PersistenceError
from skylog.services.errors import NotFoundError, SkyLogError, ValidationError

logger = logging.getLogger(__name__)


def to_http(exc: SkyLogError | PersistenceError) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, FatalPersistenceError):
        logger.error("Persistence failure: %s", exc)
        return HTTPException(status_code=500, detail=f"The flight was not saved: {exc}")
    logger.error("Unhandled service error: %s", exc)
    return HTTPException(status_code=500, detail=str(exc))
