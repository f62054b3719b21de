"""
AtomSplitter
============

Fetches an Atom feed from a URL and splits it into entries.

Only feed entries are kept. Each entry exposes ``title``, ``link``, ``id``,
``updated``, ``content`` and ``authors``; each author exposes ``name``,
``uri`` and ``email``. Fields missing from the document are ``None``.

Example:
    splitter = AtomSplitter("https://example.com/feed/atom/", timeout=10, trials=3)
    if splitter.run():
        print(splitter.entries[0].title)
    else:
        print(splitter.error)
"""

from typing import List, Optional

from .ingestion.fetcher import FeedFetcher
from .parsing.atom_parser import parse_feed
from .parsing.models import Entry
from .utils.exceptions import AtomSplitterError
from .utils.logging import PerformanceLogger, get_logger_for_component


class AtomSplitter:
    """Fetch-then-parse driver holding the outcome of the last ``run()``."""

    def __init__(self, url: str, timeout: Optional[int] = None, trials: Optional[int] = None):
        """Initialize splitter.

        Args:
            url: URL of the Atom feed
            timeout: HTTP timeout in seconds, 0 for none (default from config)
            trials: Number of fetch attempts (default from config)
        """
        self.url = url
        self.timeout = timeout
        self.trials = trials
        self.logger = get_logger_for_component("splitter", feed_url=url)

        self._entries: List[Entry] = []
        self._raw_content = b""
        self._error: Optional[AtomSplitterError] = None

    def run(self) -> bool:
        """Fetch and parse the feed, replacing the previous outcome.

        Returns:
            True if the feed was fetched and parsed without error
        """
        self._entries = []
        self._raw_content = b""
        self._error = None

        with PerformanceLogger(self.logger, "feed split"):
            try:
                with FeedFetcher(timeout=self.timeout, trials=self.trials) as fetcher:
                    self._raw_content = fetcher.fetch(self.url)
            except AtomSplitterError as e:
                self._error = e
                self.logger.error(f"Feed fetch failed: {e}", extra=e.to_dict())
                return False

            result = parse_feed(self._raw_content)

        self._entries = result.entries
        self._error = result.error

        if result.success:
            self.logger.info(f"Split {len(self._entries)} entries from {self.url}")
        return result.success

    @property
    def entries(self) -> List[Entry]:
        """Entries of the last run, possibly partial if parsing failed."""
        return list(self._entries)

    @property
    def raw_content(self) -> bytes:
        """Feed document exactly as retrieved."""
        return self._raw_content

    @property
    def error(self) -> Optional[AtomSplitterError]:
        """Error of the last run, or None."""
        return self._error

    def get_entries(self) -> List[Entry]:
        return self.entries

    def get_raw_content(self) -> bytes:
        return self.raw_content

    def get_error(self) -> Optional[str]:
        """Message of the last run's error without its code prefix, or None."""
        return self._error.message if self._error is not None else None
