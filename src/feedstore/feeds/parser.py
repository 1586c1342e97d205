"""Feed document parser using ElementTree."""

import xml.etree.ElementTree as ET

from feedstore.feeds.models import ATOM_NS, Channel
from feedstore.utils.errors import FeedParseError


def parse_channel(data: bytes | str) -> Channel:
    """Parse an RSS 2.0 or Atom 1.0 document into a Channel.

    Args:
        data: Raw document bytes (as fetched) or text (as stored)

    Returns:
        Parsed Channel

    Raises:
        FeedParseError: If the document is not well-formed XML or is not
            an RSS/Atom feed
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise FeedParseError(f"Malformed feed document: {e}") from e

    if root.tag == "rss":
        if root.find("channel") is None:
            raise FeedParseError("RSS document has no <channel> element")
        return Channel(root, "rss")

    if root.tag == f"{{{ATOM_NS}}}feed":
        return Channel(root, "atom")

    raise FeedParseError(f"Unsupported feed document root: <{root.tag}>")
