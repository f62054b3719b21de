"""
Atom Entry State Machine
========================

Turns a flat sequence of start-tag / end-tag / character-data events into
``Entry`` records with nested ``Author`` records.

Depth counts open elements: the document root is 1, feed-level children
(including ``entry``) are 2, entry children are 3 and author children are 4.
Depth goes up before a start-tag is classified and down after an end-tag is
classified.

Incoming text goes to at most one field at a time, the *sink*. The sink is
a small tagged value naming a field of a record by index, so it can never
point into an entry other than the one being built.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Union

from .models import Author, Entry


class TagKind(Enum):
    """Tag names the parser reacts to; everything else is ``OTHER``."""

    ENTRY = "entry"
    TITLE = "title"
    ID = "id"
    UPDATED = "updated"
    CONTENT = "content"
    LINK = "link"
    AUTHOR = "author"
    NAME = "name"
    URI = "uri"
    EMAIL = "email"
    OTHER = ""


_TAG_KINDS: Dict[str, TagKind] = {
    kind.value: kind for kind in TagKind if kind is not TagKind.OTHER
}

ENTRY_TEXT_FIELDS = frozenset(
    {TagKind.TITLE, TagKind.ID, TagKind.UPDATED, TagKind.CONTENT}
)
AUTHOR_TEXT_FIELDS = frozenset({TagKind.NAME, TagKind.URI, TagKind.EMAIL})

ENTRY_DEPTH = 2
ENTRY_CHILD_DEPTH = 3
AUTHOR_CHILD_DEPTH = 4


def classify_tag(name: str) -> TagKind:
    """Map a tag name to its ``TagKind``, ignoring case."""
    return _TAG_KINDS.get(name.lower(), TagKind.OTHER)


@dataclass(frozen=True)
class EntrySink:
    """Text field ``field`` of ``entries[entry_index]``."""

    entry_index: int
    field: TagKind


@dataclass(frozen=True)
class AuthorSink:
    """Text field ``field`` of ``entries[entry_index].authors[author_index]``."""

    entry_index: int
    author_index: int
    field: TagKind


Sink = Union[EntrySink, AuthorSink]


@dataclass
class ParseState:
    """Everything the state machine remembers between two events."""

    depth: int = 0
    inside_entry: bool = False
    inside_author: bool = False
    sink: Optional[Sink] = None
    sink_depth: int = 0

    def point_sink(self, sink: Sink) -> None:
        self.sink = sink
        self.sink_depth = self.depth

    def clear_sink(self) -> None:
        self.sink = None
        self.sink_depth = 0


def _resolve(entries: List[Entry], sink: Sink) -> Union[Entry, Author]:
    entry = entries[sink.entry_index]
    if isinstance(sink, AuthorSink):
        return entry.authors[sink.author_index]
    return entry


def _open_text_field(state: ParseState, entries: List[Entry], sink: Sink) -> None:
    # Reopening a field starts it over, so a repeated <title> replaces the old one.
    setattr(_resolve(entries, sink), sink.field.value, "")
    state.point_sink(sink)


def _first_href(attributes: Mapping[str, str]) -> Optional[str]:
    for attribute_name, value in attributes.items():
        if attribute_name.lower() == "href":
            return value
    return None


def _start_entry_child(
    state: ParseState,
    entries: List[Entry],
    kind: TagKind,
    attributes: Mapping[str, str],
) -> None:
    entry_index = len(entries) - 1
    entry = entries[entry_index]

    if kind in ENTRY_TEXT_FIELDS:
        _open_text_field(state, entries, EntrySink(entry_index, kind))
    elif kind is TagKind.LINK:
        href = _first_href(attributes)
        if href is not None:
            entry.link = href
        state.clear_sink()
    elif kind is TagKind.AUTHOR:
        entry.authors.append(Author())
        state.inside_author = True
        state.clear_sink()
    else:
        state.clear_sink()


def handle_start_element(
    state: ParseState,
    entries: List[Entry],
    name: str,
    attributes: Mapping[str, str],
) -> None:
    """Apply a start-tag event."""
    state.depth += 1
    kind = classify_tag(name)

    if state.depth == ENTRY_DEPTH and kind is TagKind.ENTRY:
        entries.append(Entry())
        state.inside_entry = True
        state.inside_author = False
        state.clear_sink()
    elif state.depth == ENTRY_CHILD_DEPTH and state.inside_entry:
        _start_entry_child(state, entries, kind, attributes)
    elif state.depth == AUTHOR_CHILD_DEPTH and state.inside_author:
        if kind in AUTHOR_TEXT_FIELDS:
            entry_index = len(entries) - 1
            author_index = len(entries[entry_index].authors) - 1
            _open_text_field(
                state, entries, AuthorSink(entry_index, author_index, kind)
            )
    elif state.depth < AUTHOR_CHILD_DEPTH:
        state.clear_sink()
    # Deeper markup inside a text field leaves the sink alone, so its text
    # still lands in the enclosing field.


def handle_end_element(state: ParseState, name: str) -> None:
    """Apply an end-tag event."""
    kind = classify_tag(name)

    # Flags close on any matching end-tag, nested or not.
    if kind is TagKind.ENTRY:
        state.inside_entry = False
    elif kind is TagKind.AUTHOR:
        state.inside_author = False

    if state.sink is not None and state.depth == state.sink_depth:
        state.clear_sink()

    state.depth -= 1


def handle_character_data(state: ParseState, entries: List[Entry], text: str) -> None:
    """Append ``text`` to the sink field, or drop it when there is none."""
    sink = state.sink
    if sink is None:
        return

    record = _resolve(entries, sink)
    attribute = sink.field.value
    setattr(record, attribute, getattr(record, attribute) + text)


class EntryCollector:
    """Event handler that builds entries for exactly one document.

    Create a new collector per parse; state is never shared between
    documents.
    """

    def __init__(self):
        self.state = ParseState()
        self.entries: List[Entry] = []

    def start_element(self, name: str, attributes: Mapping[str, str]) -> None:
        handle_start_element(self.state, self.entries, name, attributes)

    def end_element(self, name: str) -> None:
        handle_end_element(self.state, name)

    def character_data(self, text: str) -> None:
        handle_character_data(self.state, self.entries, text)
