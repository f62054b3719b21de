"""
Unit Tests for the Atom Entry State Machine
===========================================

Drives the state machine with explicit event sequences, without a tokenizer.
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from atomsplitter.parsing.atom_parser import parse_events, parse_feed
from atomsplitter.parsing.events import CharacterData, EndElement, StartElement, replay_events
from atomsplitter.parsing.models import Author, Entry
from atomsplitter.parsing.state_machine import (
    AuthorSink,
    EntryCollector,
    EntrySink,
    ParseState,
    TagKind,
    classify_tag,
    handle_character_data,
    handle_end_element,
    handle_start_element,
)


def leaf(name, *texts, **attributes):
    """Events for ``<name attrs>texts...</name>``."""
    events = [StartElement(name, attributes)]
    events.extend(CharacterData(text) for text in texts)
    events.append(EndElement(name))
    return events


def element(name, *children, **attributes):
    """Events for an element wrapping already-built child events."""
    events = [StartElement(name, attributes)]
    for child in children:
        events.extend(child)
    events.append(EndElement(name))
    return events


def feed(*entries):
    return element("feed", *entries)


class TestTagClassification:
    """Test tag name classification."""

    @pytest.mark.parametrize("name", ["entry", "Entry", "ENTRY", "eNtRy"])
    def test_case_insensitive(self, name):
        """Test that tag names are matched regardless of case."""
        assert classify_tag(name) is TagKind.ENTRY

    def test_all_recognized_tags(self):
        """Test every recognized tag maps to its own kind."""
        for kind in TagKind:
            if kind is TagKind.OTHER:
                continue
            assert classify_tag(kind.value.upper()) is kind

    @pytest.mark.parametrize("name", ["feed", "summary", "atom:entry", "entries", ""])
    def test_unrecognized_tags(self, name):
        """Test unknown and prefixed names classify as OTHER."""
        assert classify_tag(name) is TagKind.OTHER


class TestEntryConstruction:
    """Test entries built from event sequences."""

    def test_end_to_end_sample(self):
        """Test the canonical single-entry document."""
        entries = parse_events(feed(element(
            "entry",
            leaf("title", "A"),
            element("author", leaf("name", "Bo")),
            leaf("link", href="http://x"),
        )))

        assert len(entries) == 1
        entry = entries[0]
        assert entry.title == "A"
        assert entry.link == "http://x"
        assert entry.authors == [Author(name="Bo")]
        assert entry.id is None
        assert entry.updated is None
        assert entry.content is None

    def test_entries_in_document_order(self):
        """Test N top-level entries give N records in order."""
        entries = parse_events(feed(*[
            element("entry", leaf("id", f"urn:{i}")) for i in range(5)
        ]))

        assert [entry.id for entry in entries] == [f"urn:{i}" for i in range(5)]

    def test_all_text_fields(self):
        """Test title, id, updated and content capture."""
        entries = parse_events(feed(element(
            "entry",
            leaf("title", "Title"),
            leaf("id", "tag:example.com,2024:1"),
            leaf("updated", "2024-09-05T12:00:00Z"),
            leaf("content", "Body"),
        )))

        assert entries == [Entry(
            title="Title",
            id="tag:example.com,2024:1",
            updated="2024-09-05T12:00:00Z",
            content="Body",
        )]

    def test_split_character_data_concatenates(self):
        """Test text delivered in several events is joined losslessly."""
        entries = parse_events(feed(element("entry", leaf("title", "Hello, ", "World"))))

        assert entries[0].title == "Hello, World"

    def test_mixed_case_tags(self):
        """Test recognized tags in any case are captured."""
        entries = parse_events(element(
            "FEED",
            element(
                "Entry",
                leaf("TITLE", "Upper"),
                element("AUTHOR", leaf("Email", "a@example.com")),
            ),
        ))

        assert entries[0].title == "Upper"
        assert entries[0].authors[0].email == "a@example.com"

    def test_empty_leaf_is_empty_string(self):
        """Test an element with no text sets the field to an empty string."""
        entries = parse_events(feed(element("entry", leaf("content"))))

        assert entries[0].content == ""

    def test_repeated_leaf_starts_over(self):
        """Test a second title element replaces the first."""
        entries = parse_events(feed(element(
            "entry", leaf("title", "First"), leaf("title", "Second")
        )))

        assert entries[0].title == "Second"

    def test_feed_level_fields_ignored(self):
        """Test feed-level title/author do not create or fill entries."""
        entries = parse_events(feed(
            leaf("title", "Feed title"),
            element("author", leaf("name", "Feed Owner")),
            element("entry", leaf("title", "Entry title")),
        ))

        assert len(entries) == 1
        assert entries[0].title == "Entry title"
        assert entries[0].authors == []

    def test_text_goes_to_its_own_entry(self):
        """Test writes never cross into a different entry."""
        entries = parse_events(feed(
            element("entry", leaf("title", "One")),
            element("entry", leaf("content", "Two")),
        ))

        assert entries[0] == Entry(title="One")
        assert entries[1] == Entry(content="Two")


class TestLinkHandling:
    """Test link attribute extraction."""

    def test_link_without_href_leaves_link_unset(self):
        """Test <link rel="alt"/> does not set link."""
        entries = parse_events(feed(element("entry", leaf("link", rel="alt"))))

        assert entries[0].link is None

    def test_last_link_wins(self):
        """Test two links end with the second href."""
        entries = parse_events(feed(element(
            "entry", leaf("link", href="a"), leaf("link", href="b")
        )))

        assert entries[0].link == "b"

    def test_link_without_href_keeps_previous(self):
        """Test a later href-less link keeps the earlier value."""
        entries = parse_events(feed(element(
            "entry", leaf("link", href="a"), leaf("link", rel="self")
        )))

        assert entries[0].link == "a"

    def test_href_matched_case_insensitively(self):
        """Test the first attribute named href in any case is used."""
        events = feed(element("entry", [
            StartElement("link", {"rel": "alternate", "HREF": "http://upper", "href": "http://lower"}),
            EndElement("link"),
        ]))

        assert parse_events(events)[0].link == "http://upper"

    def test_link_text_is_not_captured(self):
        """Test character data inside link is discarded."""
        entries = parse_events(feed(element(
            "entry", leaf("link", "ignored", href="http://x")
        )))

        assert entries[0].link == "http://x"


class TestAuthorHandling:
    """Test author sub-records."""

    def test_authors_in_document_order(self):
        """Test several authors are appended in order."""
        entries = parse_events(feed(element(
            "entry",
            element("author", leaf("name", "First"), leaf("uri", "http://first")),
            element("author", leaf("name", "Second"), leaf("email", "second@example.com")),
        )))

        assert entries[0].authors == [
            Author(name="First", uri="http://first"),
            Author(name="Second", email="second@example.com"),
        ]

    def test_empty_author_has_absent_fields(self):
        """Test an author without recognized children has all fields None."""
        entries = parse_events(feed(element(
            "entry", element("author", leaf("nickname", "ignored"))
        )))

        author = entries[0].authors[0]
        assert author.name is None
        assert author.uri is None
        assert author.email is None

    def test_author_children_outside_author_ignored(self):
        """Test name directly under entry is not captured anywhere."""
        entries = parse_events(feed(element("entry", leaf("name", "Loose"))))

        assert entries[0].authors == []
        assert entries[0] == Entry()

    def test_entry_fields_after_author(self):
        """Test entry fields following an author still land on the entry."""
        entries = parse_events(feed(element(
            "entry",
            element("author", leaf("name", "Bo")),
            leaf("title", "After"),
        )))

        assert entries[0].title == "After"
        assert entries[0].authors[0].name == "Bo"


class TestNestingEdgeCases:
    """Test depth-related edge cases."""

    def test_nested_entry_not_top_level(self):
        """Test an entry inside an entry is not a separate record."""
        entries = parse_events(feed(element(
            "entry",
            leaf("title", "Outer"),
            element("entry", leaf("title", "Inner")),
        )))

        assert len(entries) == 1
        assert entries[0].title == "Outer"

    def test_nested_entry_end_closes_outer_entry(self):
        """Test a nested </entry> ends field capture for the outer entry."""
        entries = parse_events(feed(element(
            "entry",
            element("entry", leaf("title", "Inner")),
            leaf("id", "outer-id"),
        )))

        assert len(entries) == 1
        assert entries[0].id is None
        assert entries[0].title is None

    def test_nested_author_end_closes_author(self):
        """Test a nested </author> ends capture of author fields."""
        entries = parse_events(feed(element(
            "entry",
            element("author", element("x", leaf("author")), leaf("name", "N")),
        )))

        assert entries[0].authors == [Author()]

    def test_nested_entry_end_from_bytes(self):
        """Test the nested-entry case through the expat source."""
        result = parse_feed(
            b"<feed><entry><entry><title>I</title></entry><id>outer</id></entry></feed>"
        )

        assert result.success
        assert result.entries == [Entry()]

    def test_entry_under_wrapper_ignored(self):
        """Test entries below depth 2 are never recognized."""
        entries = parse_events(feed(element("wrapper", element("entry", leaf("title", "Deep")))))

        assert entries == []

    def test_root_entry_ignored(self):
        """Test a document whose root is entry yields no entries."""
        assert parse_events(element("entry", leaf("title", "Root"))) == []

    def test_nested_markup_inside_leaf_accumulates(self):
        """Test text around child elements of a leaf stays in the leaf."""
        events = feed(element("entry", element(
            "content",
            [CharacterData("a")],
            leaf("b", "b"),
            [CharacterData("c")],
        )))

        assert parse_events(events)[0].content == "abc"

    def test_text_after_leaf_end_discarded(self):
        """Test stray text between a leaf end-tag and the next start-tag is dropped."""
        events = feed(element(
            "entry",
            leaf("title", "A"),
            [CharacterData("stray")],
            leaf("link", href="http://x"),
        ))

        entry = parse_events(events)[0]
        assert entry.title == "A"
        assert entry.link == "http://x"

    def test_whitespace_between_author_children_discarded(self):
        """Test indentation between author children is not captured."""
        events = feed(element("entry", element(
            "author",
            leaf("name", "Bo"),
            [CharacterData("\n    ")],
            leaf("email", "bo@example.com"),
            [CharacterData("\n  ")],
        )))

        assert parse_events(events)[0].authors == [Author(name="Bo", email="bo@example.com")]

    def test_unknown_entry_child_clears_sink(self):
        """Test text inside an unknown entry child is dropped."""
        entries = parse_events(feed(element(
            "entry", leaf("summary", "not captured"), leaf("title", "T")
        )))

        assert entries[0] == Entry(title="T")


class TestParseState:
    """Test the state threaded through the handlers."""

    def test_depth_and_flags_track_events(self):
        """Test depth and flags at each step of a small document."""
        state = ParseState()
        entries = []

        handle_start_element(state, entries, "feed", {})
        assert state.depth == 1

        handle_start_element(state, entries, "entry", {})
        assert state.depth == 2
        assert state.inside_entry

        handle_start_element(state, entries, "author", {})
        assert state.depth == 3
        assert state.inside_author

        handle_start_element(state, entries, "name", {})
        assert state.sink == AuthorSink(entry_index=0, author_index=0, field=TagKind.NAME)

        handle_character_data(state, entries, "Bo")
        handle_end_element(state, "name")
        assert state.sink is None

        handle_end_element(state, "author")
        assert not state.inside_author
        handle_end_element(state, "entry")
        assert not state.inside_entry
        handle_end_element(state, "feed")
        assert state.depth == 0
        assert entries[0].authors[0].name == "Bo"

    def test_entry_sink_uses_index(self):
        """Test the sink names the current entry by index."""
        state = ParseState()
        entries = [Entry()]
        state.depth = 2
        state.inside_entry = True

        handle_start_element(state, entries, "title", {})

        assert state.sink == EntrySink(entry_index=0, field=TagKind.TITLE)
        assert entries[0].title == ""

    def test_character_data_without_sink_dropped(self):
        """Test text is discarded when nothing is active."""
        state = ParseState()
        entries = [Entry()]

        handle_character_data(state, entries, "nowhere")

        assert entries == [Entry()]

    def test_collector_starts_fresh(self):
        """Test each collector has its own state and entries."""
        events = feed(element("entry", leaf("title", "A")))
        first, second = EntryCollector(), EntryCollector()

        replay_events(events, first)
        replay_events(events, second)

        assert first.entries == second.entries
        assert first.entries is not second.entries
        assert first.state.depth == 0

    def test_replay_rejects_unknown_events(self):
        """Test unsupported event values raise TypeError."""
        with pytest.raises(TypeError):
            replay_events(["<entry>"], EntryCollector())
