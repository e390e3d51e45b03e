"""FastAPI application factory."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request

# Load .env file from project root (must be before other imports)
load_dotenv()
from fastapi.encoders import jsonable_encoder  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from skylog.api.deps import get_gamification_service  # noqa: E402
from skylog.api.routes import flights, leaderboards, me  # noqa: E402
from skylog.services.gamification.engine import GamificationService  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize Firebase Admin and the gamification service on startup."""
    # Initialize Firebase Admin SDK (uses ADC on Cloud Run)
    try:
        import firebase_admin
        firebase_admin.initialize_app()
        logger.info("Firebase Admin SDK initialized")
    except ValueError:
        # Already initialized
        logger.info("Firebase Admin SDK already initialized")
    except Exception as exc:
        logger.warning("Firebase Admin SDK init failed: %s", exc)

    if getattr(app.state, "gamification", None) is None:
        app.state.gamification = GamificationService()
    yield


app = FastAPI(
    title="SkyLog API",
    description="Flight logging with XP, levels and achievements",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters are client errors like any other: 400."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


app.include_router(flights.router, prefix="/api")
app.include_router(me.router, prefix="/api")
app.include_router(leaderboards.router, prefix="/api")


@app.get("/api/health")
async def health(service: GamificationService = Depends(get_gamification_service)):
    sources = [s.name for s in service.resolver.sources if s.is_configured]
    return {"status": "ok", "version": app.version, "sources": sources}
