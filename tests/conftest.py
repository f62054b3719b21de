"""
PyTest Configuration and Fixtures
=================================

Shared fixtures and configuration for AtomSplitter tests.
"""

import pytest
import os
import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment variables before any imports
os.environ["ATOMSPLITTER_DEBUG"] = "true"
os.environ.setdefault("ATOMSPLITTER_FETCH__TIMEOUT", "0")
os.environ.setdefault("ATOMSPLITTER_FETCH__TRIALS", "1")


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop the cached settings so environment tweaks do not leak between tests."""
    from atomsplitter.config import settings as settings_module

    settings_module._settings = None
    yield
    settings_module._settings = None


@pytest.fixture
def sample_atom_feed():
    """Pretty-printed Atom document with two entries."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
    <title>Test Atom Feed</title>
    <link href="http://example.com"/>
    <id>http://example.com/feed</id>
    <updated>2024-09-07T00:00:01Z</updated>
    <author>
        <name>Feed Owner</name>
    </author>

    <entry>
        <title>Atom Test Article</title>
        <link rel="alternate" href="http://example.com/atom-article"/>
        <id>urn:uuid:1225c695-cfb8-4ebb-aaaa-80da344efa6a</id>
        <updated>2024-09-05T12:00:00Z</updated>
        <content type="html">&lt;p&gt;Full content with &lt;em&gt;formatting&lt;/em&gt;&lt;/p&gt;</content>
        <author>
            <name>Atom Author</name>
            <uri>http://example.com/~atom</uri>
            <email>atom@example.com</email>
        </author>
        <author>
            <name>Second Author</name>
        </author>
    </entry>

    <entry>
        <title>Second Article</title>
        <link href="http://example.com/second"/>
        <id>urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6</id>
        <updated>2024-09-06T08:30:00Z</updated>
    </entry>
</feed>
"""


@pytest.fixture
def minimal_feed():
    """Single-line document with one entry."""
    return (
        b'<feed><entry><title>A</title><author><name>Bo</name></author>'
        b'<link href="http://x"/></entry></feed>'
    )


@pytest.fixture
def malformed_feed():
    """Entry left open when the feed closes."""
    return b"<feed><entry></feed>"
