"""
MealTrack FastAPI Application
Main entry point: logging, MongoDB lifecycle, middleware and routers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from pymongo.errors import PyMongoError
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import attendances, health
from adapters import mongo_adapter
from app.config import settings
from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    attendance_exception_handler,
    general_exception_handler,
)
from app.exceptions import AttendanceError
from repositories.checkin_repository import CheckInRepository

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("mealtrack.main")


def init_database() -> None:
    """Connect to MongoDB and index the check-in collection."""
    mongo_adapter.connect(settings.mongo_uri, settings.mongo_db_name)
    collection = mongo_adapter.get_collection(settings.mongo_collection)
    CheckInRepository(collection).ensure_indexes()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Connects to MongoDB with retries and closes the client on shutdown.
    """
    _logger.info(f"Starting MealTrack in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # pymongo blocks; keep it off the event loop
            await anyio.to_thread.run_sync(init_database)
            _logger.info("MongoDB initialization succeeded")
            break
        except (PyMongoError, AttendanceError) as exc:
            _logger.warning(
                "MongoDB init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error(
                    "MongoDB initialization failed after %d attempts", attempt
                )
                raise

    try:
        yield
    finally:
        _logger.info("Shutting down MealTrack")
        mongo_adapter.close()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=(
        f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
    ),
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(AttendanceError, attendance_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(health.router)
app.include_router(attendances.router, prefix=settings.api_prefix)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
