"""Tests for the per-user AI rate limiter."""

from uuid import uuid4

import pytest

from app.middleware.rate_limit import UserRateLimiter
from app.utils.errors import RateLimitError


@pytest.fixture
def limiter():
    return UserRateLimiter("3/minute", "memory://", namespace="test")


def test_allows_requests_within_limit(limiter):
    user_id = uuid4()
    for _ in range(3):
        limiter.check(user_id)


def test_fourth_request_in_window_is_rejected(limiter):
    user_id = uuid4()
    for _ in range(3):
        limiter.check(user_id)

    with pytest.raises(RateLimitError) as exc_info:
        limiter.check(user_id)

    error = exc_info.value
    assert error.status_code == 429
    assert 1 <= error.detail["retry_after_seconds"] <= 60
    assert error.headers["Retry-After"] == str(error.detail["retry_after_seconds"])
    assert "Maximum 3 requests per minute" in error.message


def test_users_are_counted_separately(limiter):
    first, second = uuid4(), uuid4()
    for _ in range(3):
        limiter.check(first)

    limiter.check(second)
    with pytest.raises(RateLimitError):
        limiter.check(first)


def test_string_and_uuid_keys_share_a_counter(limiter):
    user_id = uuid4()
    limiter.check(user_id)
    limiter.check(str(user_id))
    limiter.check(user_id)
    with pytest.raises(RateLimitError):
        limiter.check(str(user_id))


def test_reset_clears_counters(limiter):
    user_id = uuid4()
    for _ in range(3):
        limiter.check(user_id)
    limiter.reset()
    limiter.check(user_id)
