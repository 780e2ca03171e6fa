"""FastAPI app entry: config, logging, health, and the filter routes."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config.filtering.static import get_active_profile_name, get_profile_names
from app.config.logging import configure_logging, get_logger
from app.config.settings import get_settings
from app.controllers.routes.filter import router as filter_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging and profile check. Shutdown: log only; runs own their worker pools."""
    settings = get_settings()
    configure_logging()
    logger.info(
        "Application starting",
        extra={
            "app_name": settings.app_name,
            "environment": settings.environment,
            "active_profile": get_active_profile_name(),
        },
    )
    yield
    logger.info("Shutdown complete")


app = FastAPI(
    title="Text Filter Service",
    description="Remove short words and punctuation from large texts, chunk by chunk",
    version="1.0.0",
    debug=get_settings().debug,
    lifespan=lifespan,
)
app.include_router(filter_router)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up."""
    return {"status": "ok"}


@app.get("/profiles")
async def profiles() -> dict[str, Any]:
    """Filter profiles available from static.json and the one marked active."""
    return {"active": get_active_profile_name(), "profiles": get_profile_names()}


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: never leak stack traces or internal details to the client."""
    logger.exception("Unhandled error", extra={"error_type": type(exc).__name__})
    return JSONResponse(
        content={"detail": "An internal error occurred."},
        status_code=500,
    )
