"""
Crime Hotspot API - FastAPI Main Application

A RESTful API for detecting crime hotspots and incident patterns from
geotagged FIR records.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from api.routes.hotspots import router as hotspots_router
from api.schemas.hotspots import ErrorResponse
from api.services.hotspot_service import hotspot_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events.
    """
    logger.info("Starting Crime Hotspot API...")

    health = hotspot_service.get_health_status()
    if health.records_loaded:
        logger.info(f"Hotspot service ready with {health.record_count} incident records")
    else:
        logger.warning("Hotspot service running in degraded mode - no incident data loaded")

    yield

    logger.info("Shutting down Crime Hotspot API...")


# Create FastAPI application
app = FastAPI(
    title="Crime Hotspot API",
    description="""
    **Find crime hotspots and incident patterns in geotagged FIR data**

    ## Features

    - **Hotspot Detection**: Grid-based density zones classified as low, medium or high severity
    - **Incident Insights**: Peak hours, day and month trends, top crime types and areas
    - **Proximity Search**: Incidents within a radius and seed-based incident groups
    - **Record Management**: JSON and CSV import with validation, CSV export
    - **Map Output**: GeoJSON hotspots and an interactive HTML map

    ## Quick Start

    1. Check service health: `GET /api/hotspots/health`
    2. Import data: `POST /api/hotspots/records/import`
    3. Get hotspots: `GET /api/hotspots/hotspots`
    4. Get insights: `GET /api/hotspots/insights`
    """,
    version="1.0.0",
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT",
    },
    lifespan=lifespan
)

# Add CORS middleware for web applications
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, error: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def jsonable_errors(exc: RequestValidationError):
    """Validation errors reduced to JSON-safe location/message pairs."""
    return [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": str(error.get("msg", ""))}
        for error in exc.errors()
    ]


# Custom exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors with detailed information.
    """
    logger.warning(f"Validation error for {request.url}: {exc}")
    return _error_response(
        422,
        "validation_error",
        "Request validation failed",
        {"errors": jsonable_errors(exc)}
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Wrap HTTP errors raised by the routes in the standard error envelope.
    """
    error = "bad_request" if exc.status_code == 400 else "http_error"
    return _error_response(exc.status_code, error, str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected errors gracefully.
    """
    logger.error(f"Unexpected error for {request.url}: {exc}")
    return _error_response(500, "internal_server_error", "An unexpected error occurred")


# Include routers
app.include_router(hotspots_router)


@app.get("/", tags=["general"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "api": "Crime Hotspot API",
        "version": "1.0.0",
        "status": "operational",
        "documentation": "/docs",
        "health_check": "/api/hotspots/health"
    }


@app.get("/health", tags=["general"])
async def api_health():
    """
    Simple health check endpoint.
    """
    service_health = hotspot_service.get_health_status()
    return {
        "api_status": "healthy",
        "service_status": service_health.status,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


# Development server configuration
if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
