"""
Company Website CMS API - Main Application Entry Point

This module builds the FastAPI application with:
- Storage client construction and schema initialization
- Upload directories and the static /uploads mount
- Origin allow-list guard and CORS headers
- Prometheus metrics
- JSON error bodies ({"error": message}) for every failure
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (create tables / dispose pool)
    ├── OriginGuard + CORS Middleware (CORS_ORIGINS)
    ├── Prometheus Middleware (/metrics)
    ├── /uploads - uploaded files, read-only
    └── API Router (/api)
        ├── /news - News CRUD and image uploads
        ├── /careers - Job listings and applications
        ├── /team - Team members and photo upload
        ├── /partners - Partners and logo upload
        ├── /contact-messages - Contact form messages
        └── /db-test - Storage connectivity check

Run with:
    python -m app
    uvicorn app.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import api_router
from app.config import Settings, get_settings
from app.database import Database
from app.errors import AppError
from app.middleware import OriginGuardMiddleware, setup_metrics
from app.services.uploads import UploadStorage

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into "field: problem; field: problem"."""
    parts = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if len(location) > 1 and location[0] in ("body", "query", "path", "form"):
            location = location[1:]
        field = ".".join(location) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": describe_validation_error(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration, read from the environment when omitted
            (raises if DB_HOST/DB_USER/DB_PASSWORD/DB_NAME are missing)
        database: Storage client, built from settings when omitted

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
            1. Create missing tables
        Shutdown:
            1. Close pooled connections
        """
        await app.state.database.init_db()
        logger.info(f"CMS API ready, uploads in {app.state.uploads.root}")
        yield
        await app.state.database.dispose()

    app = FastAPI(
        title="Company Website CMS API",
        description="Content API for news, careers, team, partners and contact messages",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.uploads = UploadStorage(Path(settings.upload_root), timeout=settings.upload_timeout)
    app.state.uploads.ensure_directories()

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginGuardMiddleware, allowed_origins=settings.cors_origins)
    setup_metrics(app)

    app.include_router(api_router)
    app.mount("/uploads", StaticFiles(directory=settings.upload_root), name="uploads")

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
