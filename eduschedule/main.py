"""
EduSchedule API entry point.
Start: uvicorn eduschedule.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eduschedule.api.attendance.router import router as attendance_router
from eduschedule.api.auth.router import router as auth_router
from eduschedule.api.class_sessions.router import router as class_sessions_router
from eduschedule.api.classes.router import router as classes_router
from eduschedule.api.homework.router import router as homework_router
from eduschedule.api.settings.router import router as settings_router
from eduschedule.api.students.router import router as students_router
from eduschedule.api.subjects.router import router as subjects_router
from eduschedule.api.substitutions.router import router as substitutions_router
from eduschedule.api.time_slots.router import router as time_slots_router
from eduschedule.api.timetable.router import router as timetable_router
from eduschedule.api.users.router import router as users_router
from eduschedule.core.config import settings
from eduschedule.core.logging import configure_logging
from eduschedule.db.session import create_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.auto_create_tables:
        await create_tables()
        logger.info("Database tables ready")
    yield


def _validation_errors(exc: RequestValidationError):
    """Flatten pydantic errors to field/message pairs."""
    errors = []
    for err in exc.errors():
        ctx = err.get("ctx") or {}
        if err.get("type") == "value_error" and "error" in ctx:
            message = str(ctx["error"])
        else:
            message = err.get("msg", "Invalid value")
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        errors.append({"field": ".".join(loc), "message": message, "type": err.get("type")})
    return errors


def create_app() -> FastAPI:
    app = FastAPI(title="EduSchedule API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(subjects_router)
    app.include_router(classes_router)
    app.include_router(time_slots_router)
    app.include_router(students_router)
    app.include_router(timetable_router)
    app.include_router(class_sessions_router)
    app.include_router(attendance_router)
    app.include_router(homework_router)
    app.include_router(substitutions_router)
    app.include_router(settings_router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation failed", "errors": _validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.get("/api/health", tags=["health"])
    async def health_check():
        return {"status": "ok", "service": "EduSchedule API"}

    return app


app = create_app()
