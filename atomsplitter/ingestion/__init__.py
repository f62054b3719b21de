"""
AtomSplitter Ingestion Module
=============================

Feed retrieval over HTTP(S).

This module handles:
- Fetch parameter validation (URL, timeout, trial count)
- Bounded fetch attempts without backoff
- Mapping transport failures to FeedFetchError
"""

from .fetcher import FeedFetcher, fetch_single_feed

__all__ = ["FeedFetcher", "fetch_single_feed"]
