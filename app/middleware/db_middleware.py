# app/middleware/db_middleware.py
"""
Lazy Database Connection Middleware.

Connects to MongoDB on the first request that needs it when the startup
connection failed.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from database import Database
from settings import settings

logger = logging.getLogger(__name__)

# Served without a database
DATABASE_FREE_PATHS = {"/", "/health", "/health/detailed", "/docs", "/redoc", "/openapi.json"}


class LazyDatabaseMiddleware(BaseHTTPMiddleware):
    """Connect before handling data requests; answer 503 while MongoDB is unreachable."""

    async def dispatch(self, request: Request, call_next):
        if Database._initialized or request.url.path in DATABASE_FREE_PATHS:
            return await call_next(request)

        try:
            logger.info("Connecting to MongoDB on first request...")
            await Database.connect_db(
                database_url=settings.DATABASE_URL,
                database_name=settings.DATABASE_NAME
            )
        except Exception as e:
            logger.error(f"MongoDB unavailable for {request.method} {request.url.path}: {e}")
            return JSONResponse(status_code=503, content={"error": "Database unavailable"})

        return await call_next(request)
