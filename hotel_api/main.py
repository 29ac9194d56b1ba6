"""
Hotel Management API - FastAPI Backend Application
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
import structlog

from hotel_api.config import settings
from hotel_api.api import access, auth, bookings, dashboard, events, menu, offers, reservations, rooms
from hotel_api.functions import router as functions_router

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Hotel Management API", version="1.0.0")
    yield
    logger.info("Shutting down Hotel Management API")


# Create FastAPI application
app = FastAPI(
    title="Hotel Management API",
    description="Guest portal and back-office for rooms, restaurant, events and user roles",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": "1.0.0"}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    from hotel_api.database import SessionLocal

    checks = {}

    # Check database
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"failed: {str(e)}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(access.router, prefix="/access", tags=["Access"])
app.include_router(rooms.router, prefix="/rooms", tags=["Rooms"])
app.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
app.include_router(menu.router, prefix="/menu_items", tags=["Restaurant"])
app.include_router(reservations.router, prefix="/reservations", tags=["Restaurant"])
app.include_router(events.router, prefix="/events", tags=["Events"])
app.include_router(offers.promotions_router, prefix="/promotions", tags=["Promotions"])
app.include_router(offers.services_router, prefix="/services", tags=["Services"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])

# Include admin edge functions
app.include_router(functions_router.router, prefix="/functions/v1", tags=["Functions"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hotel_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
