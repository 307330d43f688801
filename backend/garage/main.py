"""Main FastAPI application."""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api import assets_router, folders_router, tags_router, toolkits_router, upload_router
from .core.config import ConfigurationError, Environment, settings
from .core.logging_config import setup_logging
from .core.seeder import seed_default_user
from .exceptions import GarageException
from .middleware.exception_handler import (
    garage_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from .middleware.request_context import RequestContextMiddleware
from .storage import Storage, create_storage, get_storage

APP_VERSION = "1.0.0"

# Setup logging first
setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)

# StaticFiles checks the directory when mounted, so it has to exist up front.
upload_path = Path(settings.upload_dir)
upload_path.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle for the asset garage API."""
    # --- Security validation ---
    logger.info(f"Environment: {settings.environment.value}")
    try:
        settings.validate_production_config()
    except ConfigurationError as e:
        logger.critical(f"STARTUP BLOCKED: {e}")
        raise SystemExit(1) from e

    if settings.environment == Environment.DEVELOPMENT:
        if settings.default_password == "hashed_password":
            logger.warning(
                "SECURITY: DEFAULT_PASSWORD is the built-in placeholder. "
                "There is no login; every request acts as the default user."
            )

    # --- Entity store and the mock user ---
    storage = create_storage(settings)
    seed_default_user(storage, settings)
    app.state.storage = storage

    yield  # App runs here

    storage.close()
    logger.info("Storage closed")


# Create FastAPI app
app = FastAPI(
    title="Asset Garage API",
    description=(
        "REST API for a creative asset library. Uploaded media files are "
        "organised into toolkits and folders, tagged, labelled with a status, "
        "and browsed, searched and bulk-edited.\n\n"
        "**Authentication:** none. Every request acts as the default user "
        "seeded at startup."
    ),
    version=APP_VERSION,
    lifespan=lifespan,
)

# Middleware stack (outermost first: CORS wraps request context).
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)
app.add_middleware(RequestContextMiddleware)

# Register exception handlers
app.add_exception_handler(GarageException, garage_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

logger.info(
    "Asset Garage API started | env=%s | storage=%s | uploads=%s | cors=%s",
    settings.environment.value,
    settings.storage_backend.value,
    upload_path,
    ",".join(settings.get_cors_origins()),
)

# Include routers
app.include_router(toolkits_router)
app.include_router(folders_router)
app.include_router(assets_router)
app.include_router(upload_router)
app.include_router(tags_router)

app.mount("/uploads", StaticFiles(directory=str(upload_path)), name="uploads")


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": "Asset Garage API",
        "version": APP_VERSION,
        "status": "running"
    }


_startup_time = time.monotonic()


@app.get("/health")
def health_check(storage: Storage = Depends(get_storage)):
    """Health check endpoint returning store status, uptime, and row counts.

    Never raises: a failing store is reported as degraded so load
    balancers can still probe without receiving 5xx.
    """
    storage_status = "ok"
    counts = {}
    try:
        counts = storage.counts()
    except Exception:
        logger.warning("Health check could not read the store", exc_info=True)
        storage_status = "error"

    return {
        "status": "healthy" if storage_status == "ok" else "degraded",
        "storage": storage_status,
        "backend": settings.storage_backend.value,
        "uptime_seconds": round(time.monotonic() - _startup_time),
        "version": APP_VERSION,
        "counts": counts,
    }
