"""
FitTrack API - Rate Limiting.

Two layers:
- a SlowAPI limiter applying a per-client default limit to every route;
- per-user fixed-window limiters for the AI suggestion and review endpoints, which
  identify the caller by the ``userId`` in the request body.

All keep their counters in the store named by ``RATE_LIMIT_STORAGE_URI``
(``memory://`` for a single process, ``redis://...`` when counts must be
shared across instances and survive restarts).
"""

import logging
import time
from typing import Union
from uuid import UUID

from fastapi import Request
from fastapi.responses import JSONResponse
from limits import parse
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from settings import settings
from app.utils.errors import RateLimitError


logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    """
    Rate limit key for the global limiter.

    Uses the first ``X-Forwarded-For`` hop when behind a proxy, otherwise
    the socket address.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


# Global per-client limiter
limiter = Limiter(
    key_func=get_client_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    default_limits=[settings.DEFAULT_RATE_LIMIT],
    enabled=settings.ENV != "testing"  # Disable rate limiting in test environment
)


class UserRateLimiter:
    """
    Fixed-window limiter keyed by user id.

    Args:
        limit: Limit string such as ``"3/minute"``.
        storage_uri: ``limits`` storage URI.
        namespace: Key prefix separating independent limiters.
    """

    def __init__(self, limit: str, storage_uri: str, namespace: str = "ai"):
        self.limit = limit
        self.item = parse(limit)
        self.storage = storage_from_string(storage_uri)
        self.strategy = FixedWindowRateLimiter(self.storage)
        self.namespace = namespace

    def check(self, user_id: Union[str, UUID]) -> None:
        """
        Count one request for ``user_id``.

        Raises:
            RateLimitError: The user exhausted the current window.
        """
        key = str(user_id)
        if self.strategy.hit(self.item, self.namespace, key):
            return

        reset_time, _ = self.strategy.get_window_stats(self.item, self.namespace, key)
        retry_after = max(int(reset_time - time.time()), 1)
        logger.warning(f"AI rate limit exceeded for user:{key}")
        raise RateLimitError(
            message=f"Rate limit exceeded. Maximum {self.item.amount} requests per {self.item.GRANULARITY.name}.",
            retry_after=retry_after
        )

    def reset(self) -> None:
        """Clear every counter in the backing store."""
        self.storage.reset()


ai_rate_limiter = UserRateLimiter(settings.AI_RATE_LIMIT, settings.RATE_LIMIT_STORAGE_URI)
ai_review_rate_limiter = UserRateLimiter(
    settings.AI_REVIEW_RATE_LIMIT, settings.RATE_LIMIT_STORAGE_URI, namespace="ai-review"
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Render SlowAPI limit breaches like every other FitTrack error.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.
    """
    retry_after = getattr(exc, "retry_after", None) or 60
    logger.warning(f"Rate limit exceeded for {get_client_identifier(request)}")
    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded. Please try again later.",
            "details": {"retry_after_seconds": retry_after},
        },
        headers={"Retry-After": str(retry_after)}
    )
