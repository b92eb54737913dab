"""
FastAPI application entry point.
Sets up the API with lifespan events for store initialization.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import init_db, dispose_engine
from app.api.router import api_router
from app.exceptions import StoreConfigurationError, SubmissionError
from app.middleware.metrics_middleware import MetricsMiddleware
from app.utils.logging import configure_logging

logger = logging.getLogger(__name__)

SERVICE_NAME = "Dream Interpretation API"
SERVICE_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: Configure logging, validate store settings and create tables
    - Shutdown: Dispose of the store engine
    """
    configure_logging('dream-api', settings.log_level)

    # Raises StoreConfigurationError when STORE_URL / STORE_SERVICE_KEY are missing
    await init_db()

    yield

    await dispose_engine()


async def submission_error_handler(request: Request, exc: SubmissionError) -> JSONResponse:
    """Render classified submission failures with their own status and body."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors as {"error": ...}."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        content = {"error": "Method not allowed"}
    elif isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def store_configuration_error_handler(request: Request, exc: StoreConfigurationError) -> JSONResponse:
    logger.error(str(exc), extra={"event": "store_not_configured"})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Server error", "detail": str(exc)}
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error: {str(exc)}",
        extra={"event": "unhandled_error", "path": request.url.path},
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Server error", "detail": str(exc) or exc.__class__.__name__}
    )


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, handlers and routes."""
    application = FastAPI(
        title=SERVICE_NAME,
        description="Usage-gated dream interpretation backend",
        version=SERVICE_VERSION,
        lifespan=lifespan
    )

    # CORS middleware (for web and mobile clients)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Metrics middleware (must be after CORS to track all requests)
    application.add_middleware(MetricsMiddleware)

    application.add_exception_handler(SubmissionError, submission_error_handler)
    application.add_exception_handler(StarletteHTTPException, http_error_handler)
    application.add_exception_handler(StoreConfigurationError, store_configuration_error_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)

    application.include_router(api_router, prefix="/api")

    @application.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "environment": settings.environment
        }

    @application.get("/metrics")
    async def metrics():
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    return application


app = create_app()
