"""
Feed Records
============

Plain records produced by the Atom parser. Every text field starts out as
``None`` and only becomes a string once its element has been seen.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..utils.exceptions import FeedParseError


@dataclass
class Author:
    """One ``<author>`` of an entry."""

    name: Optional[str] = None
    uri: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Return only the fields that were present in the document."""
        return {
            key: value
            for key, value in (("name", self.name), ("uri", self.uri), ("email", self.email))
            if value is not None
        }


@dataclass
class Entry:
    """One ``<entry>`` of an Atom feed."""

    title: Optional[str] = None
    link: Optional[str] = None
    id: Optional[str] = None
    updated: Optional[str] = None
    content: Optional[str] = None
    authors: List[Author] = None

    def __post_init__(self):
        """Initialize default values after dataclass creation."""
        if self.authors is None:
            self.authors = []

    def to_dict(self) -> Dict[str, Any]:
        """Return present fields plus the (possibly empty) author list."""
        data: Dict[str, Any] = {
            key: value
            for key, value in (
                ("title", self.title),
                ("link", self.link),
                ("id", self.id),
                ("updated", self.updated),
                ("content", self.content),
            )
            if value is not None
        }
        data["authors"] = [author.to_dict() for author in self.authors]
        return data


@dataclass
class ParseResult:
    """Outcome of one parse call.

    ``entries`` keeps whatever was built before a tokenization error, so a
    failed parse can still carry partial records.
    """

    entries: List[Entry] = field(default_factory=list)
    raw_content: bytes = b""
    error: Optional[FeedParseError] = None

    @property
    def success(self) -> bool:
        return self.error is None
