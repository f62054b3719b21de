"""
XML Event Sources
=================

Delivers start-tag, end-tag and character-data events, in document order,
to an event handler such as ``EntryCollector``.

Two sources are provided:

- ``ExpatEventSource`` tokenizes raw bytes with the standard library's
  expat binding and reports malformed markup as ``FeedParseError``.
- ``replay_events`` feeds already-tokenized event values, which is how
  callers with their own tokenizer (and the tests) drive the parser.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple, Optional, Protocol, Union
from xml.parsers import expat

from ..utils.exceptions import FeedParseError

_NO_ATTRIBUTES: Mapping[str, str] = MappingProxyType({})


class StartElement(NamedTuple):
    name: str
    attributes: Mapping[str, str] = _NO_ATTRIBUTES


class EndElement(NamedTuple):
    name: str


class CharacterData(NamedTuple):
    text: str


XmlEvent = Union[StartElement, EndElement, CharacterData]


class XmlEventHandler(Protocol):
    """Callbacks an event source drives."""

    def start_element(self, name: str, attributes: Mapping[str, str]) -> None: ...

    def end_element(self, name: str) -> None: ...

    def character_data(self, text: str) -> None: ...


class ExpatEventSource:
    """Tokenize a complete document with expat and forward its events.

    Attributes arrive as an insertion-ordered dict, so "first matching
    attribute" follows document order.
    """

    def __init__(self, handler: XmlEventHandler, encoding: Optional[str] = None):
        self._parser = expat.ParserCreate(encoding)
        self._parser.StartElementHandler = handler.start_element
        self._parser.EndElementHandler = handler.end_element
        self._parser.CharacterDataHandler = handler.character_data

    def feed(self, data: bytes) -> None:
        """Parse ``data`` as the whole document.

        Raises:
            FeedParseError: If the markup is not well-formed
        """
        try:
            self._parser.Parse(data, True)
        except expat.ExpatError as e:
            # expat columns are 0-based
            raise FeedParseError.from_tokenizer(
                e.code, expat.ErrorString(e.code), e.lineno, e.offset + 1
            ) from e


def replay_events(events: Iterable[XmlEvent], handler: XmlEventHandler) -> None:
    """Dispatch event values to ``handler`` in order."""
    for event in events:
        if isinstance(event, StartElement):
            handler.start_element(event.name, event.attributes)
        elif isinstance(event, EndElement):
            handler.end_element(event.name)
        elif isinstance(event, CharacterData):
            handler.character_data(event.text)
        else:
            raise TypeError(f"Unsupported XML event: {event!r}")
