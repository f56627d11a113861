"""
Rate limit tracking for GitHub API requests.
Reads GitHub's X-RateLimit headers and refuses to send requests once the
remaining quota drops into the safety buffer.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

import requests
from loguru import logger


@dataclass
class RateLimitStatus:
    """Current rate limit status from GitHub API."""

    limit: int  # Total requests allowed per hour
    remaining: int  # Requests remaining in current window
    reset_time: int  # Unix timestamp when limit resets
    used: int  # Requests used in current window

    @property
    def usage_percentage(self) -> float:
        """Percentage of rate limit used (0.0 to 1.0)."""
        if self.limit == 0:
            return 0.0
        return (self.limit - self.remaining) / self.limit

    @property
    def minutes_until_reset(self) -> float:
        """Minutes until rate limit resets."""
        return max(0, (self.reset_time - time.time()) / 60)


class RateLimitManager:
    """Tracks GitHub API quota across requests made by one client."""

    def __init__(self, safety_buffer: int = 10):
        """
        Initialize rate limit manager.

        Args:
            safety_buffer: Number of requests to keep in reserve
        """
        self.safety_buffer = safety_buffer
        self.last_status: RateLimitStatus | None = None

    def extract_rate_limit_status(
        self, response: requests.Response
    ) -> RateLimitStatus | None:
        """
        Extract rate limit information from GitHub API response headers.

        Returns:
            RateLimitStatus object or None if headers not present
        """
        headers = response.headers
        if "X-RateLimit-Limit" not in headers:
            return None

        try:
            limit = int(headers.get("X-RateLimit-Limit", 0))
            remaining = int(headers.get("X-RateLimit-Remaining", 0))
            reset_time = int(headers.get("X-RateLimit-Reset", 0))
            used = int(headers.get("X-RateLimit-Used", limit - remaining))
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to parse rate limit headers: {e}")
            return None

        status = RateLimitStatus(
            limit=limit, remaining=remaining, reset_time=reset_time, used=used
        )
        self.last_status = status
        return status

    def log_rate_limit_status(
        self, response: requests.Response, tool_name: str = "unknown"
    ) -> None:
        """Log current rate limit status from API response."""
        status = self.extract_rate_limit_status(response)
        if status:
            logger.debug(
                f"[{tool_name}] Rate limit: {status.remaining}/{status.limit} remaining "
                f"({status.usage_percentage:.1%} used, resets in {status.minutes_until_reset:.1f}m)"
            )

    def format_status_summary(self) -> str:
        """Get a formatted summary of current rate limit status."""
        if self.last_status is None:
            return "Rate limit status: Unknown"

        status = self.last_status
        return (
            f"Rate limit: {status.remaining}/{status.limit} remaining "
            f"({status.usage_percentage:.1%} used), "
            f"resets in {status.minutes_until_reset:.1f} minutes"
        )

    def should_pause_operations(self) -> tuple[bool, float]:
        """
        Check if requests should be held back due to rate limit exhaustion.

        Returns:
            Tuple of (should_pause, recommended_wait_time_seconds)
        """
        if self.last_status is None:
            return False, 0

        status = self.last_status
        wait_time = status.minutes_until_reset * 60
        if status.remaining <= self.safety_buffer and wait_time > 0:
            return True, min(wait_time, 3600)  # Cap at 1 hour

        return False, 0

    def make_rate_limited_request(
        self, request_func: Callable, tool_name: str = "unknown", *args, **kwargs
    ) -> requests.Response:
        """
        Make a GitHub API request unless the quota is exhausted.

        Args:
            request_func: Function that makes the HTTP request (e.g., requests.post)
            tool_name: Name of the caller for logging
            *args, **kwargs: Arguments passed to request_func

        Returns:
            requests.Response object

        Raises:
            requests.HTTPError: If the rate limit is exhausted
        """
        should_pause, wait_time = self.should_pause_operations()
        if should_pause:
            error_msg = (
                f"Rate limit exhausted. Please wait {wait_time / 60:.1f} minutes before continuing. "
                f"Current status: {self.format_status_summary()}"
            )
            # Mirrors GitHub's own 403 rate limit response
            raise requests.HTTPError(
                f"403 Client Error: rate limit exceeded - {error_msg}"
            )

        response = request_func(*args, **kwargs)
        self.log_rate_limit_status(response, tool_name)
        return response
