"""Main application entry point with FastAPI."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from .api import roommate_error_handler, router
from .config import get_settings
from .database import check_database_health, dispose_engine
from .errors import RoommateError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment():
    """Validate all required environment variables on startup."""
    try:
        settings = get_settings()
        logger.info("Environment variables validated successfully")
        return settings
    except ValidationError as e:
        logger.error("ERROR: Missing or invalid environment variables:")
        logger.error(str(e))
        sys.exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    # Startup
    settings = validate_environment()
    logging.getLogger().setLevel(settings.log_level)
    logger.info(f"Starting {settings.app_name}...")

    if not check_database_health():
        logger.warning("Database is not reachable at startup")

    logger.info(f"{settings.app_name} started successfully")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    dispose_engine()
    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Roommate Matcher",
    description="Roommate preference matching and match tracking",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(router)
app.add_exception_handler(RoommateError, roommate_error_handler)


@app.get("/health")
async def health_check():
    """Health check endpoint.

    Verifies database connection and returns status.
    """
    db_healthy = check_database_health()

    if db_healthy:
        return {
            "status": "healthy",
            "database": "connected",
        }
    else:
        return {
            "status": "unhealthy",
            "database": "disconnected",
        }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Roommate Matcher",
        "status": "running",
        "version": "1.0.0",
    }
