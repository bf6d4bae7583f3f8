# main.py
"""
FitTrack API - Main Application.

FastAPI app with MongoDB backend and Gemini-powered meal and workout
planning.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from database import Database
from settings import settings
from app.middleware.db_middleware import LazyDatabaseMiddleware
from app.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from app.utils.errors import register_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR
            ),
        ],
    )
    logger.info(f"Sentry initialized ({settings.SENTRY_ENVIRONMENT})")
else:
    logger.warning("Sentry DSN not configured - error tracking disabled")

# Import routers
from app.routes import (
    activity,
    ai,
    meal_plans,
    meals,
    nutrition,
    profile,
    shopping,
    workouts,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting FitTrack API...")
    # If the startup connection fails, LazyDatabaseMiddleware retries on the first request
    try:
        await Database.connect_db(settings.DATABASE_URL, settings.DATABASE_NAME)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.warning(f"Failed to initialize database at startup: {e}")
        logger.warning("Database will be initialized lazily on first request")

    if not settings.gemini_configured:
        logger.warning("GEMINI_API_KEY not set - AI features will use fallback data or fail")

    yield

    await Database.close_db()
    logger.info("FitTrack API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="FitTrack API",
    version="1.0.0",
    description="AI-assisted fitness and nutrition tracking",
    lifespan=lifespan
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Lazy database connection middleware
app.add_middleware(LazyDatabaseMiddleware)

register_exception_handlers(app)


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint - fast response without database dependency."""
    return {
        "status": "ok",
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0"
    }


@app.get("/health/detailed")
async def health_check_detailed():
    """Health check with MongoDB connectivity, AI and rate limit configuration."""
    report = {
        "database": "mongodb",
        "ai_configured": settings.gemini_configured,
        "ai_model": settings.GEMINI_MODEL,
        "rate_limit_storage": settings.RATE_LIMIT_STORAGE_URI.split("://", 1)[0],
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
    }
    try:
        mongo_ok = await Database.ping()
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {**report, "status": "error", "database_connected": False, "error": str(e)}
    return {**report, "status": "ok" if mongo_ok else "degraded", "database_connected": mongo_ok}


# Include routers
app.include_router(meal_plans.router, prefix="/api/meal-plans", tags=["Meal Plans"])
app.include_router(meals.router, prefix="/api/meals", tags=["Meals"])
app.include_router(shopping.router, prefix="/api/shopping-list", tags=["Shopping List"])
app.include_router(ai.router, prefix="/api/ai", tags=["AI"])
app.include_router(activity.router, prefix="/api/activity", tags=["Activity"])
app.include_router(nutrition.router, prefix="/api/nutrition", tags=["Nutrition"])
app.include_router(profile.router, prefix="/api/user", tags=["Profile"])
app.include_router(workouts.router, prefix="/api/workouts", tags=["Workouts"])


# Root endpoint
@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "FitTrack API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
