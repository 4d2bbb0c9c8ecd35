"""
FastAPI Application Entry Point

Digital Menu backend.

Endpoints:
    - /api/auth/*: Email verification-code login, session, logout
    - /api/restaurants, /api/categories, /api/dishes: Owner menu management
    - /api/public/menu/{restaurant_id}: Public menu for diners
    - GET /health: System health check
"""

import asyncio
import sys
import logging
from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import redis
import uvicorn

# Windows-specific event loop policy
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Internal imports
from app.core.config import get_settings, setup_logging
from app.core.exceptions import AppError
from app.database import async_session_maker, engine, get_db, init_db
from app.middleware import RouteProtectionMiddleware
from app.routers import auth, categories, dishes, public, restaurants
from app.schemas import HealthResponse
from app.services.notifications import get_email_service

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info(f"   Master code: {'enabled' if settings.master_code_enabled else 'disabled'}")
    logger.info("=" * 60)

    await init_db()
    logger.info("✅ Database initialized")

    email_service = get_email_service()
    logger.info(f"✅ Email Service: {email_service.provider_name}")

    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("✅ Application ready!")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await engine.dispose()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Digital menu management: email one-time-code login for restaurant "
        "owners, owner-scoped menu editing and a public menu for diners."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Used by the route protection middleware to resolve sessions
app.state.session_maker = async_session_maker

app.add_middleware(RouteProtectionMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.app_base_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(restaurants.router, prefix="/api/restaurants", tags=["Restaurants"])
app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(dishes.router, prefix="/api/dishes", tags=["Dishes"])
app.include_router(public.router, prefix="/api/public", tags=["Public Menu"])


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    db: AsyncSession = Depends(get_db)
) -> HealthResponse:
    """Verify all system components are operational."""

    db_status = "healthy"
    try:
        await db.execute(select(1))
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    # Redis only backs the maintenance worker; the API works without it
    redis_status = "healthy"
    try:
        r = redis.Redis.from_url(settings.redis_url, socket_timeout=2)
        r.ping()
        r.close()
    except Exception as e:
        redis_status = f"unhealthy: {str(e)}"
        logger.warning(f"Redis health check failed: {e}")

    email_service = get_email_service()
    email_status = "healthy" if await email_service.health_check() else "unhealthy"

    overall = "operational" if all(
        s == "healthy" for s in [db_status, email_status]
    ) else "degraded"

    return HealthResponse(
        status=overall,
        database=db_status,
        redis=redis_status,
        email_service=email_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Expected domain errors carry their own status and message."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error} on {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.error,
            "detail": exc.message,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures in the ErrorResponse shape."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])

    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "Validation Error",
            "detail": "; ".join(messages),
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
