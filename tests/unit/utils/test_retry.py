"""Tests for retry utilities."""

from unittest.mock import Mock

import pytest

from feedstore.utils.retry import (
    TEST_RETRY_CONFIG,
    AuthenticationError,
    InvalidRequestError,
    NetworkConnectionError,
    NonRetryableError,
    RateLimitError,
    RequestTimeoutError,
    RetryableError,
    RetryConfig,
    ServerError,
    classify_http_error,
    with_retry,
)


class TestClassifyHttpError:
    """Test HTTP error classification."""

    def test_rate_limit_429(self):
        """Test 429 classified as rate limit."""
        error = classify_http_error(429, "Too Many Requests")
        assert isinstance(error, RateLimitError)
        assert "Rate limit exceeded" in str(error)

    def test_server_errors_5xx(self):
        """Test 5xx classified as server errors."""
        for status_code in [500, 502, 503, 504]:
            error = classify_http_error(status_code, "Server error")
            assert isinstance(error, ServerError)
            assert error.status_code == status_code

    def test_timeout_408(self):
        """Test 408 classified as timeout."""
        assert isinstance(classify_http_error(408, "Request Timeout"), RequestTimeoutError)

    def test_auth_errors_401_403(self):
        """Test 401/403 classified as authentication errors."""
        for status_code in [401, 403]:
            error = classify_http_error(status_code, "Unauthorized")
            assert isinstance(error, AuthenticationError)

    def test_client_errors_4xx(self):
        """Test other 4xx classified as invalid request."""
        for status_code in [400, 404, 410]:
            error = classify_http_error(status_code, "Not Found")
            assert isinstance(error, InvalidRequestError)
            assert error.status_code == status_code

    def test_unknown_error(self):
        """Test unknown status codes classified as non-retryable."""
        error = classify_http_error(999, "Unknown error")
        assert isinstance(error, NonRetryableError)

    def test_retryable_split(self):
        """Test which classes retry."""
        for cls in (RateLimitError, RequestTimeoutError, NetworkConnectionError, ServerError):
            assert issubclass(cls, RetryableError)
        for cls in (AuthenticationError, InvalidRequestError):
            assert issubclass(cls, NonRetryableError)


class TestRetryConfig:
    """Test retry configuration."""

    def test_default_config(self):
        """Test default values."""
        config = RetryConfig()
        assert config.max_attempts == 3
        assert config.min_wait_seconds == 1
        assert config.jitter is True

    def test_custom_config(self):
        """Test custom values."""
        config = RetryConfig(max_attempts=5, max_wait_seconds=10, min_wait_seconds=2, jitter=False)
        assert config.max_attempts == 5
        assert config.max_wait_seconds == 10
        assert config.min_wait_seconds == 2
        assert config.jitter is False


class TestWithRetry:
    """Test the with_retry decorator."""

    def test_success_first_try(self):
        """Test no retries when the call succeeds."""
        func = Mock(return_value="ok", __name__="func")

        assert with_retry(config=TEST_RETRY_CONFIG)(func)() == "ok"
        assert func.call_count == 1

    def test_retries_transient_error(self):
        """Test a transient error is retried until success."""
        func = Mock(side_effect=[ServerError("503"), "ok"], __name__="func")

        assert with_retry(config=TEST_RETRY_CONFIG)(func)() == "ok"
        assert func.call_count == 2

    def test_gives_up_after_max_attempts(self):
        """Test the last error is re-raised after all attempts."""
        func = Mock(side_effect=NetworkConnectionError("refused"), __name__="func")

        with pytest.raises(NetworkConnectionError):
            with_retry(config=TEST_RETRY_CONFIG)(func)()

        assert func.call_count == TEST_RETRY_CONFIG.max_attempts

    def test_non_retryable_not_retried(self):
        """Test permanent errors fail immediately."""
        func = Mock(side_effect=InvalidRequestError("404"), __name__="func")

        with pytest.raises(InvalidRequestError):
            with_retry(config=TEST_RETRY_CONFIG)(func)()

        assert func.call_count == 1

    def test_custom_retry_on(self):
        """Test restricting which errors are retried."""
        func = Mock(side_effect=ServerError("500"), __name__="func")

        with pytest.raises(ServerError):
            with_retry(config=TEST_RETRY_CONFIG, retry_on=(RateLimitError,))(func)()

        assert func.call_count == 1

    def test_logs_retry_attempts(self, caplog):
        """Test retries are logged as warnings."""
        func = Mock(side_effect=[RequestTimeoutError("slow"), "ok"], __name__="func")

        with caplog.at_level("WARNING", logger="feedstore.utils.retry"):
            with_retry(config=TEST_RETRY_CONFIG)(func)()

        assert "Retry attempt 1 failed: RequestTimeoutError: slow" in caplog.text
