"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coachcheck import __version__
from coachcheck.api.v1.router import api_router
from coachcheck.core.config import settings
from coachcheck.core.logging import setup_logging
from coachcheck.middleware.request_context import RequestContextMiddleware
from coachcheck.services.traffic_light import get_profile

SERVICE_NAME = "CoachCheck API"

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log the scoring configuration the service starts with."""
    profile = get_profile(settings.default_scoring_profile)
    logger.info(
        f"Starting {SERVICE_NAME} {__version__} (env={settings.env}, "
        f"profile={profile.key}, insights={'on' if settings.insights_enabled else 'off'})"
    )
    yield
    logger.info(f"Stopping {SERVICE_NAME}")


app = FastAPI(
    title=SERVICE_NAME,
    description="Scores coaching check-ins and tracks per-question progress over time",
    version=__version__,
    docs_url="/docs" if settings.is_dev else None,
    redoc_url="/redoc" if settings.is_dev else None,
    openapi_url="/openapi.json" if settings.is_dev else None,
    lifespan=lifespan,
)

app.add_middleware(RequestContextMiddleware)

# Local coach dashboard during development
if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a 500 for anything the routes did not map themselves."""
    request_id = getattr(request.state, "request_id", None)
    logger.exception(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        extra={"request_id": request_id},
    )
    detail = "Internal server error" if settings.is_prod else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail, "request_id": request_id},
    )


app.include_router(api_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Service info."""
    return {
        "service": SERVICE_NAME,
        "version": __version__,
        "docs": "/docs" if settings.is_dev else "Disabled in production",
    }
