"""
AtomSplitter - Atom Feed Entry Extraction
=========================================

Fetches Atom feeds and splits them into entry records.

Main Components:
- Ingestion: HTTP fetch with bounded attempts
- Parsing: depth-tracked state machine over XML events
- Configuration: environment variables with Pydantic validation
- Splitter: fetch + parse driver exposing entries, raw bytes and errors
"""

__version__ = "1.0.0"
__author__ = "AtomSplitter Development Team"
__description__ = "Atom feed fetcher and entry extractor"

from .config.settings import get_settings
from .parsing import Author, Entry, ParseResult, parse_events, parse_feed
from .splitter import AtomSplitter
from .utils.logging import configure_application_logging, get_logger_for_component
from .utils.exceptions import (
    AtomSplitterError,
    ConfigurationError,
    FeedFetchError,
    FeedParseError,
)

__all__ = [
    "AtomSplitter",
    "Author",
    "Entry",
    "ParseResult",
    "parse_feed",
    "parse_events",
    "get_settings",
    "configure_application_logging",
    "get_logger_for_component",
    "AtomSplitterError",
    "ConfigurationError",
    "FeedFetchError",
    "FeedParseError",
]
