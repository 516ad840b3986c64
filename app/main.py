"""
FastAPI application factory.

Assembles the app, registers routers, and builds the per-app state:
the student directory (read from ``STUDENTS_FILE``) and the device
session tracker.  Both live on ``app.state`` — nothing is a module
global, so each app instance starts with an empty device registry.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.controllers.auth_controller import router as auth_router
from app.core.config import settings
from app.services.session_service import DeviceSessionTracker
from app.services.student_service import StudentDirectory

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    tracker: DeviceSessionTracker | None = None,
    directory: StudentDirectory | None = None,
) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── State ────────────────────────────────────────────────────────
    app.state.session_tracker = tracker if tracker is not None else DeviceSessionTracker(
        max_devices=settings.MAX_DEVICES,
        session_ttl=settings.SESSION_TTL,
    )
    app.state.student_directory = (
        directory if directory is not None else StudentDirectory.from_file(settings.STUDENTS_FILE)
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Register routers ─────────────────────────────────────────────
    app.include_router(auth_router)

    # ── Health check ─────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    logger.info(
        "%s ready — %d student(s), max %d device(s) each",
        settings.APP_NAME,
        len(app.state.student_directory),
        app.state.session_tracker.max_devices,
    )
    return app


app = create_app()
