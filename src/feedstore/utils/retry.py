"""Retry utilities for feed fetches.

Implements exponential backoff with jitter for transient HTTP failures.
Errors are split into retryable and non-retryable classes; the fetcher
raises these internally and converts the final outcome into a FetchError.
"""

import logging
from collections.abc import Callable
from functools import wraps

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)


# Error classification: Which errors should trigger retries?

class RetryableError(Exception):
    """Base class for errors that should trigger retries."""

    status_code: int | None = None


class RateLimitError(RetryableError):
    """Server asked us to slow down (HTTP 429)."""

    pass


class RequestTimeoutError(RetryableError):
    """Request timeout."""

    pass


class NetworkConnectionError(RetryableError):
    """Network connection error."""

    pass


class ServerError(RetryableError):
    """Server-side error (5xx)."""

    pass


class NonRetryableError(Exception):
    """Base class for errors that should NOT trigger retries."""

    status_code: int | None = None


class AuthenticationError(NonRetryableError):
    """Feed requires credentials we don't have."""

    pass


class InvalidRequestError(NonRetryableError):
    """Bad URL or client error (4xx)."""

    pass


# Retry configuration

class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        max_wait_seconds: float = 30,
        min_wait_seconds: float = 1,
        jitter: bool = True,
    ):
        """Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts (including initial)
            max_wait_seconds: Maximum wait time between retries
            min_wait_seconds: Minimum wait time between retries
            jitter: Whether to add jitter to wait times
        """
        self.max_attempts = max_attempts
        self.max_wait_seconds = max_wait_seconds
        self.min_wait_seconds = min_wait_seconds
        self.jitter = jitter


DEFAULT_RETRY_CONFIG = RetryConfig()

# Fast configuration for testing (minimal delays)
TEST_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    max_wait_seconds=0.1,
    min_wait_seconds=0.01,
    jitter=False,
)

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    RateLimitError,
    RequestTimeoutError,
    NetworkConnectionError,
    ServerError,
)


def log_retry_attempt(retry_state: RetryCallState) -> None:
    """Log retry attempts for debugging.

    Args:
        retry_state: Tenacity retry state
    """
    if retry_state.outcome and retry_state.outcome.failed:
        exception = retry_state.outcome.exception()
        attempt_number = retry_state.attempt_number

        logger.warning(
            f"Retry attempt {attempt_number} failed: {type(exception).__name__}: {exception}"
        )


def with_retry(
    config: RetryConfig | None = None,
    retry_on: tuple[type[Exception], ...] | None = None,
) -> Callable:
    """Decorator for adding retry logic with exponential backoff.

    Usage:
        @with_retry()
        def fetch():
            ...

        @with_retry(config=RetryConfig(max_attempts=5))
        def important_fetch():
            ...

    Args:
        config: Retry configuration (uses DEFAULT_RETRY_CONFIG if None)
        retry_on: Exception types to retry on (defaults to TRANSIENT_ERRORS)

    Returns:
        Decorated function with retry logic
    """
    config = config or DEFAULT_RETRY_CONFIG
    retry_on = retry_on or TRANSIENT_ERRORS

    def decorator(func: Callable) -> Callable:
        retry_decorator = retry(
            stop=stop_after_attempt(config.max_attempts),
            wait=wait_exponential_jitter(
                initial=config.min_wait_seconds,
                max=config.max_wait_seconds,
                jitter=config.max_wait_seconds if config.jitter else 0,
            ),
            retry=retry_if_exception_type(retry_on),
            before_sleep=log_retry_attempt,
            reraise=True,
        )
        retrying = retry_decorator(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return retrying(*args, **kwargs)
            except retry_on as e:
                logger.error(
                    f"{func.__name__} failed after {config.max_attempts} attempts: "
                    f"{type(e).__name__}: {e}"
                )
                raise

        return wrapper

    return decorator


def classify_http_error(status_code: int, error_message: str = "") -> Exception:
    """Classify an HTTP error status into retryable or non-retryable.

    Args:
        status_code: HTTP status code
        error_message: Reason phrase or body excerpt

    Returns:
        Appropriate exception instance, with ``status_code`` set
    """
    error: RetryableError | NonRetryableError
    if status_code == 429:
        error = RateLimitError(f"Rate limit exceeded: {error_message}")
    elif 500 <= status_code < 600:
        error = ServerError(f"Server error (HTTP {status_code}): {error_message}")
    elif status_code == 408:
        error = RequestTimeoutError(f"Request timeout: {error_message}")
    elif status_code in (401, 403):
        error = AuthenticationError(
            f"Authentication failed (HTTP {status_code}): {error_message}"
        )
    elif 400 <= status_code < 500:
        error = InvalidRequestError(f"Invalid request (HTTP {status_code}): {error_message}")
    else:
        error = NonRetryableError(f"HTTP error {status_code}: {error_message}")

    error.status_code = status_code
    return error
