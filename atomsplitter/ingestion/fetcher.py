"""
Atom Feed Fetcher
=================

Retrieves raw feed bytes over HTTP(S) using requests.

The fetcher makes up to ``trials`` attempts and returns the first successful
body straight away. There is no backoff between attempts; when every attempt
fails, the last transport error is raised as ``FeedFetchError``.
"""

import time
from typing import Optional

import requests

from ..config.settings import get_settings
from ..utils.logging import get_logger_for_component
from ..utils.exceptions import ErrorCode, FeedFetchError
from ..utils.validators import FetchValidator, URLValidator


def _error_code_for(error: Exception) -> ErrorCode:
    if isinstance(error, requests.Timeout):
        return ErrorCode.FEED_FETCH_TIMEOUT
    if isinstance(error, requests.HTTPError):
        return ErrorCode.FEED_HTTP_ERROR
    return ErrorCode.FEED_NETWORK_ERROR


class FeedFetcher:
    """Blocking feed fetcher with a bounded number of attempts."""

    def __init__(
        self,
        timeout: Optional[int] = None,
        trials: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize fetcher.

        Args:
            timeout: Request timeout in seconds, 0 for none (default from config)
            trials: Attempts per fetch (default from config)
            session: Pre-configured requests session (optional)

        Raises:
            ConfigurationError: If timeout or trials are out of range
            FeedFetchError: If the HTTP session cannot be created
        """
        settings = get_settings()
        self.timeout = FetchValidator.validate_timeout(
            settings.fetch.timeout if timeout is None else timeout
        )
        self.trials = FetchValidator.validate_trials(
            settings.fetch.trials if trials is None else trials
        )
        self.logger = get_logger_for_component("fetcher")

        if session is None:
            try:
                session = requests.Session()
            except Exception as e:
                raise FeedFetchError(
                    f"Could not initialize an HTTP session: {e}",
                    error_code=ErrorCode.FEED_SESSION_ERROR,
                    recoverable=False,
                ) from e

        self.session = session
        self.session.headers.update(
            {
                "User-Agent": settings.fetch.user_agent,
                "Accept": settings.fetch.accept,
            }
        )

    def fetch(self, feed_url: str) -> bytes:
        """Fetch the raw feed document.

        Args:
            feed_url: Feed URL to fetch

        Returns:
            Response body exactly as received

        Raises:
            ConfigurationError: If the URL is not a usable http(s) URL
            FeedFetchError: If every attempt failed
        """
        url = URLValidator.validate_feed_url(feed_url)
        # requests treats None as "wait forever"
        request_timeout = self.timeout or None
        last_error: Optional[requests.RequestException] = None

        self.logger.info(f"Fetching Atom feed: {url}")

        for attempt in range(1, self.trials + 1):
            start_time = time.time()
            try:
                response = self.session.get(url, timeout=request_timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                last_error = e
                self.logger.warning(
                    f"Fetch attempt {attempt}/{self.trials} failed for {url}: {e}"
                )
                continue

            fetch_time = time.time() - start_time
            self.logger.debug(
                f"Feed fetched in {fetch_time:.2f}s on attempt {attempt}, "
                f"size: {len(response.content)} bytes"
            )
            return response.content

        error_msg = f"Failed to fetch feed {url} after {self.trials} attempt(s): {last_error}"
        self.logger.error(error_msg)
        raise FeedFetchError(
            error_msg,
            feed_url=url,
            attempts=self.trials,
            error_code=_error_code_for(last_error),
        ) from last_error

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()

    def __enter__(self) -> "FeedFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def fetch_single_feed(feed_url: str, timeout: Optional[int] = None, trials: Optional[int] = None) -> bytes:
    """Quick function to fetch a single feed document."""
    with FeedFetcher(timeout=timeout, trials=trials) as fetcher:
        return fetcher.fetch(feed_url)
