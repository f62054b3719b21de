"""
AtomSplitter Input Validators
=============================

Checks applied to fetch parameters before any network attempt is made.
"""

from urllib.parse import urlparse, urlunparse

from .exceptions import ConfigurationError, ErrorCode


class URLValidator:
    """URL validation and normalization utilities."""

    ALLOWED_SCHEMES = {'http', 'https'}

    @classmethod
    def validate_feed_url(cls, url: str) -> str:
        """Validate and normalize a feed URL.

        Args:
            url: URL to validate

        Returns:
            Normalized URL (lower-cased scheme and host, fragment removed)

        Raises:
            ConfigurationError: If URL is invalid
        """
        if not url or not isinstance(url, str):
            raise ConfigurationError(
                "URL is required and must be a string",
                config_key="url",
                error_code=ErrorCode.CONFIG_INVALID_URL,
            )

        url = url.strip()

        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid URL format: {str(e)}",
                config_key="url",
                error_code=ErrorCode.CONFIG_INVALID_URL,
            ) from e

        if parsed.scheme.lower() not in cls.ALLOWED_SCHEMES:
            raise ConfigurationError(
                f"URL scheme must be {' or '.join(sorted(cls.ALLOWED_SCHEMES))}: {url}",
                config_key="url",
                error_code=ErrorCode.CONFIG_INVALID_URL,
            )

        if not parsed.netloc:
            raise ConfigurationError(
                f"URL must include a hostname: {url}",
                config_key="url",
                error_code=ErrorCode.CONFIG_INVALID_URL,
            )

        return urlunparse(parsed._replace(
            scheme=parsed.scheme.lower(),
            netloc=parsed.netloc.lower(),
            fragment=''
        ))


class FetchValidator:
    """Range checks for timeout and trial count."""

    @classmethod
    def validate_timeout(cls, timeout: int) -> int:
        """Timeout in seconds; 0 means no timeout is enforced."""
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigurationError(
                f"Timeout must be a number, got {type(timeout).__name__}",
                config_key="timeout",
                error_code=ErrorCode.CONFIG_INVALID_TIMEOUT,
            )
        if timeout < 0:
            raise ConfigurationError(
                f"Illegal timeout value ({timeout})",
                config_key="timeout",
                error_code=ErrorCode.CONFIG_INVALID_TIMEOUT,
            )
        return timeout

    @classmethod
    def validate_trials(cls, trials: int) -> int:
        """Number of fetch attempts, at least one."""
        if isinstance(trials, bool) or not isinstance(trials, int):
            raise ConfigurationError(
                f"Number of trials must be an integer, got {type(trials).__name__}",
                config_key="trials",
                error_code=ErrorCode.CONFIG_INVALID_TRIALS,
            )
        if trials < 1:
            raise ConfigurationError(
                f"Illegal number of trials ({trials})",
                config_key="trials",
                error_code=ErrorCode.CONFIG_INVALID_TRIALS,
            )
        return trials
