"""HTTP fetcher for feed documents."""

import logging

import httpx

from feedstore.config.schema import DEFAULT_USER_AGENT, FetchConfig
from feedstore.utils.errors import FetchError
from feedstore.utils.retry import (
    DEFAULT_RETRY_CONFIG,
    InvalidRequestError,
    NetworkConnectionError,
    NonRetryableError,
    RequestTimeoutError,
    RetryableError,
    RetryConfig,
    classify_http_error,
    with_retry,
)

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Downloads feed documents over HTTP(S).

    Transient failures (timeouts, dropped connections, 429/408/5xx) are
    retried with exponential backoff. Whatever fails in the end is raised
    as a FetchError.

    Example:
        >>> with FeedFetcher(timeout=10) as fetcher:
        ...     body = fetcher.fetch("https://blog.apnic.net/feed/")
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        retry_config: RetryConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header sent with every request
            retry_config: Backoff settings (uses DEFAULT_RETRY_CONFIG if None)
            transport: Optional httpx transport, used by tests to mock responses
        """
        self.timeout = timeout
        self.retry_config = retry_config or DEFAULT_RETRY_CONFIG
        self._client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
            transport=transport,
        )
        self._fetch_with_retry = with_retry(config=self.retry_config)(self._request)

    @classmethod
    def from_config(cls, config: FetchConfig) -> "FeedFetcher":
        retry_config = RetryConfig(
            max_attempts=config.max_attempts,
            max_wait_seconds=DEFAULT_RETRY_CONFIG.max_wait_seconds,
            min_wait_seconds=DEFAULT_RETRY_CONFIG.min_wait_seconds,
            jitter=DEFAULT_RETRY_CONFIG.jitter,
        )
        return cls(
            timeout=config.timeout_seconds,
            user_agent=config.user_agent,
            retry_config=retry_config,
        )

    def fetch(self, url: str) -> bytes:
        """Fetch the body of a URL.

        Args:
            url: Feed URL

        Returns:
            Raw response body

        Raises:
            FetchError: If the request failed after all retries
        """
        logger.debug(f"Fetching {url}")
        try:
            return self._fetch_with_retry(url)
        except (RetryableError, NonRetryableError) as e:
            raise FetchError(
                f"Failed to fetch {url}: {e}", url=url, status_code=e.status_code
            ) from e

    def _request(self, url: str) -> bytes:
        try:
            response = self._client.get(url)
        except httpx.UnsupportedProtocol as e:
            raise InvalidRequestError(str(e)) from e
        except httpx.InvalidURL as e:
            raise InvalidRequestError(str(e)) from e
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(str(e) or "request timed out") from e
        except httpx.TransportError as e:
            raise NetworkConnectionError(str(e) or type(e).__name__) from e
        except httpx.RequestError as e:
            # Redirect loops and undecodable bodies
            raise InvalidRequestError(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise classify_http_error(response.status_code, response.reason_phrase)

        return response.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "FeedFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
