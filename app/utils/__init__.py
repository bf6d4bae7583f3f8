"""FitTrack API - Utilities Package."""

from app.utils.errors import (
    FitTrackException,
    NotFoundError,
    RateLimitError,
    UpstreamServiceError,
    ValidationError,
)

__all__ = [
    "FitTrackException",
    "NotFoundError",
    "RateLimitError",
    "UpstreamServiceError",
    "ValidationError",
]
