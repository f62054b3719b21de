"""
AtomSplitter Parsing Module
===========================

Atom entry extraction from XML events.

This module handles:
- Tokenizing raw feed bytes into start/end/text events
- The depth-tracked state machine that builds entries and authors
- Parse results with partial entries on malformed input
"""

from .atom_parser import parse_events, parse_feed
from .events import CharacterData, EndElement, ExpatEventSource, StartElement
from .models import Author, Entry, ParseResult

__all__ = [
    "parse_feed",
    "parse_events",
    "StartElement",
    "EndElement",
    "CharacterData",
    "ExpatEventSource",
    "Author",
    "Entry",
    "ParseResult",
]
