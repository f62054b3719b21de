"""
Atom Feed Parser
================

Entry points that run the state machine over a document.

``parse_feed`` never raises on malformed markup: the tokenization error is
returned in ``ParseResult.error`` and any entries built before the error
stay in ``ParseResult.entries``.
"""

from typing import BinaryIO, Iterable, List, Union

from ..utils.exceptions import FeedParseError
from ..utils.logging import PerformanceLogger, get_logger_for_component
from .events import ExpatEventSource, XmlEvent, replay_events
from .models import Entry, ParseResult
from .state_machine import EntryCollector

logger = get_logger_for_component("atom_parser")


def parse_feed(data: Union[bytes, bytearray, BinaryIO]) -> ParseResult:
    """Parse an Atom document into entries.

    Args:
        data: The raw document, or a readable binary stream positioned at
            its start

    Returns:
        ParseResult with entries, the raw bytes, and the tokenization error
        if the document was not well-formed
    """
    if isinstance(data, (bytes, bytearray)):
        raw_content = bytes(data)
    else:
        raw_content = data.read()

    collector = EntryCollector()
    result = ParseResult(entries=collector.entries, raw_content=raw_content)

    with PerformanceLogger(logger, "Atom parse", size_bytes=len(raw_content)):
        try:
            ExpatEventSource(collector).feed(raw_content)
        except FeedParseError as e:
            result.error = e

    if result.error is not None:
        logger.warning(
            f"Feed parsing stopped after {len(result.entries)} entries: {result.error}",
            extra=result.error.to_dict(),
        )
    else:
        logger.debug(f"Parsed {len(result.entries)} entries")

    return result


def parse_events(events: Iterable[XmlEvent]) -> List[Entry]:
    """Build entries from already-tokenized XML events."""
    collector = EntryCollector()
    replay_events(events, collector)
    return collector.entries
