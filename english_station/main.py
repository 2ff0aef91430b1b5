from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from . import models  # noqa: F401  (registers every mapped class)
from .admin.routes import build_router as build_admin_router
from .config import Settings, load_settings
from .lessons.routes import build_router as build_lessons_router
from .progress.routes import build_router as build_progress_router
from .quiz.routes import build_router as build_quiz_router
from .settings.routes import build_router as build_settings_router
from .shared.database import build_engine, build_sessionmaker, check_connection, create_tables
from .shared.errors import UpstreamFailure, register_exception_handlers
from .users.routes import build_router as build_users_router

logger = logging.getLogger("english_station")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    engine = build_engine(settings.database_url, echo=settings.sql_echo)
    SessionLocal = build_sessionmaker(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            check_connection(engine)
            create_tables(engine)
        except Exception:
            logger.exception("Failed to connect to database (%s)", engine.dialect.name)
            engine.dispose()
            raise
        logger.info("Connected to the database (%s)", engine.dialect.name)
        yield
        engine.dispose()
        logger.info("Database engine disposed")

    app = FastAPI(title="English Station API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.SessionLocal = SessionLocal

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    register_exception_handlers(app)

    app.include_router(build_lessons_router(SessionLocal), prefix="/api/lessons", tags=["Lessons"])
    app.include_router(build_quiz_router(SessionLocal), prefix="/api/quiz", tags=["Quiz"])
    app.include_router(build_progress_router(SessionLocal), prefix="/api/progress", tags=["Progress"])
    app.include_router(build_users_router(SessionLocal, settings), prefix="/api/users", tags=["Users"])
    app.include_router(build_admin_router(SessionLocal), prefix="/api/admin", tags=["Admin"])
    app.include_router(build_settings_router(SessionLocal), prefix="/api/settings", tags=["Settings"])

    @app.get("/api/health", operation_id="health_check", tags=["Health"])
    def health_check():
        try:
            check_connection(engine)
        except UpstreamFailure as e:
            return JSONResponse(
                status_code=503,
                content={"status": "ERROR", "message": "Database connection failed", "error": e.message},
            )
        return {"status": "OK", "message": "API is running", "database": "Connected"}

    @app.get("/", operation_id="root", tags=["Root"])
    def root():
        return {
            "service": "English Station API",
            "version": __version__,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
