# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Acquisitions API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    AcquisitionsException,
    acquisitions_exception_handler,
    application_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from app.routers import health
from lib.database import DatabaseClient
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log configuration, warn about an insecure signing secret
    - Shutdown: close the database connection
    """
    logger.info(f"Starting Acquisitions API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Token lifetime: {settings.JWT_EXPIRES_IN}")

    if settings.uses_default_secret:
        if settings.is_production:
            logger.warning("JWT_SECRET is not set; using the insecure default secret in production")
        else:
            logger.info("JWT_SECRET is not set; using the development default")

    if not settings.DATABASE_URL:
        logger.warning("DATABASE_URL is not set; readiness checks will report degraded")

    yield

    logger.info("Shutting down Acquisitions API")
    DatabaseClient.close()


# Create FastAPI application
app = FastAPI(
    title="Acquisitions API",
    description="Acquisitions service: health checks and token-based auth.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Sign up, sign in, sign out and token inspection",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================
# Added inner to outer: request logging wraps everything.

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    SecurityHeadersMiddleware,
    enable_hsts=settings.is_production,
)

app.add_middleware(RequestLoggingMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(AcquisitionsException)
async def handle_acquisitions_exception(request: Request, exc: AcquisitionsException):
    """Handle custom API exceptions."""
    return await acquisitions_exception_handler(request, exc)


@app.exception_handler(ApplicationError)
async def handle_application_error(request: Request, exc: ApplicationError):
    """Handle errors raised by core/ and lib/ (token, database)."""
    return await application_error_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle request body/query validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return await unhandled_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    tags=["Health"]
)

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)


# =============================================================================
# Root Endpoints
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - service greeting."""
    return "Hello from Acquisitions Service"


@app.get("/api", tags=["Root"])
async def api_root():
    """API root - confirms the API is mounted."""
    return {"message": "Acquisitions API is running"}
