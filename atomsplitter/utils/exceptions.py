"""
AtomSplitter Custom Exceptions
==============================

Exception hierarchy for AtomSplitter with error codes, context information,
and user-friendly error messages.

Transport errors (fetching) and tokenization errors (parsing) live in
separate branches and are never conflated.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for categorizing exceptions."""

    # Configuration errors (C001-C099)
    CONFIG_INVALID = "C001"
    CONFIG_MISSING = "C002"
    CONFIG_INVALID_TIMEOUT = "C003"
    CONFIG_INVALID_TRIALS = "C004"
    CONFIG_INVALID_URL = "C005"

    # Feed errors (F001-F099)
    FEED_INVALID_URL = "F001"
    FEED_FETCH_TIMEOUT = "F002"
    FEED_PARSE_ERROR = "F003"
    FEED_NETWORK_ERROR = "F004"
    FEED_SESSION_ERROR = "F005"
    FEED_HTTP_ERROR = "F006"


class AtomSplitterError(Exception):
    """Base exception for all AtomSplitter errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        context: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
        recoverable: bool = False,
    ):
        """Initialize AtomSplitter error.

        Args:
            message: Technical error message for logging
            error_code: Categorized error code
            context: Additional context information
            user_message: User-friendly error message
            recoverable: Whether the error is recoverable
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.user_message = user_message or message
        self.recoverable = recoverable

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code.value if self.error_code else None,
            "error_message": str(self),
            "user_message": self.user_message,
            "context": self.context,
            "recoverable": self.recoverable,
        }

    def __str__(self) -> str:
        """String representation with error code."""
        if self.error_code:
            return f"[{self.error_code.value}] {super().__str__()}"
        return super().__str__()


class ConfigurationError(AtomSplitterError):
    """Configuration-related errors, reported before any network attempt."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        """Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that caused the error
            **kwargs: Additional arguments for AtomSplitterError
        """
        context = kwargs.get("context", {})
        if config_key:
            context["config_key"] = config_key

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.CONFIG_INVALID),
            context=context,
            user_message=kwargs.get("user_message", f"Configuration error: {message}"),
            **{
                k: v
                for k, v in kwargs.items()
                if k not in ["context", "error_code", "user_message"]
            },
        )


class FeedError(AtomSplitterError):
    """Feed fetching and parsing errors."""

    def __init__(self, message: str, feed_url: Optional[str] = None, **kwargs):
        """Initialize feed error.

        Args:
            message: Error message
            feed_url: Feed URL that caused the error
            **kwargs: Additional arguments for AtomSplitterError
        """
        context = kwargs.get("context", {})
        if feed_url:
            context["feed_url"] = feed_url

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.FEED_NETWORK_ERROR),
            context=context,
            user_message=kwargs.get(
                "user_message", f"Feed processing failed: {message}"
            ),
            recoverable=kwargs.get("recoverable", True),
            **{
                k: v
                for k, v in kwargs.items()
                if k not in ["context", "error_code", "user_message", "recoverable"]
            },
        )


class FeedFetchError(FeedError):
    """Transport errors raised by the fetch adapter."""

    def __init__(
        self,
        message: str,
        feed_url: Optional[str] = None,
        attempts: Optional[int] = None,
        **kwargs,
    ):
        """Initialize fetch error.

        Args:
            message: Error message
            feed_url: Feed URL that could not be fetched
            attempts: Number of attempts made before giving up
            **kwargs: Additional arguments for FeedError
        """
        context = kwargs.pop("context", {})
        if attempts is not None:
            context["attempts"] = attempts
        self.attempts = attempts

        super().__init__(message, feed_url=feed_url, context=context, **kwargs)


class FeedParseError(FeedError):
    """Tokenization error reported by the XML event source.

    Carries the tokenizer's own error code and the 1-based line/column
    where tokenization stopped.
    """

    def __init__(
        self,
        message: str,
        xml_error_code: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})
        context.update({"xml_error_code": xml_error_code, "line": line, "column": column})
        self.xml_error_code = xml_error_code
        self.line = line
        self.column = column

        super().__init__(
            message,
            error_code=kwargs.pop("error_code", ErrorCode.FEED_PARSE_ERROR),
            context=context,
            user_message=kwargs.pop("user_message", "Feed document is not well-formed XML"),
            recoverable=kwargs.pop("recoverable", False),
            **kwargs,
        )

    @classmethod
    def from_tokenizer(
        cls, xml_error_code: int, reason: str, line: int, column: int
    ) -> "FeedParseError":
        """Build the error with the conventional message layout."""
        return cls(
            f"XML parsing error [{xml_error_code}] - {reason} at {line}:{column}",
            xml_error_code=xml_error_code,
            line=line,
            column=column,
        )

