"""Data models for parsed feed documents."""

import xml.etree.ElementTree as ET
from typing import Literal

from pydantic import BaseModel

ATOM_NS = "http://www.w3.org/2005/Atom"

# Prefixes used when serializing extension elements back to text.
KNOWN_NAMESPACES = {
    "atom": ATOM_NS,
    "content": "http://purl.org/rss/1.0/modules/content/",
    "dc": "http://purl.org/dc/elements/1.1/",
    "itunes": "http://www.itunes.com/dtds/podcast-1.0.dtd",
    "media": "http://search.yahoo.com/mrss/",
    "slash": "http://purl.org/rss/1.0/modules/slash/",
    "sy": "http://purl.org/rss/1.0/modules/syndication/",
    "wfw": "http://wellformedweb.org/CommentAPI/",
}

for _prefix, _uri in KNOWN_NAMESPACES.items():
    ET.register_namespace(_prefix, _uri)

FeedKind = Literal["rss", "atom"]


class ChannelSummary(BaseModel):
    """Displayable metadata of a channel."""

    kind: FeedKind
    title: str | None = None
    link: str | None = None
    description: str | None = None
    item_count: int = 0


class Channel:
    """One parsed feed document.

    Wraps the XML tree of an RSS 2.0 or Atom 1.0 document. The store treats
    it as a value: two channels are equal when they serialize to the same
    text. Build instances with ``feedstore.feeds.parser.parse_channel``.
    """

    def __init__(self, root: ET.Element, kind: FeedKind) -> None:
        self._root = root
        self.kind: FeedKind = kind
        if kind == "rss":
            channel = root.find("channel")
            if channel is None:
                raise ValueError("RSS document has no <channel> element")
            self._element = channel
        else:
            self._element = root

    def _atom(self, name: str) -> str:
        return f"{{{ATOM_NS}}}{name}"

    def _text(self, tag: str) -> str | None:
        node = self._element.find(tag)
        if node is None or node.text is None:
            return None
        return node.text.strip()

    @property
    def title(self) -> str | None:
        return self._text("title" if self.kind == "rss" else self._atom("title"))

    @property
    def description(self) -> str | None:
        return self._text("description" if self.kind == "rss" else self._atom("subtitle"))

    @property
    def link(self) -> str | None:
        """Website link of the feed (not its self-link)."""
        if self.kind == "rss":
            return self._text("link")
        for node in self._element.findall(self._atom("link")):
            if node.get("rel", "alternate") == "alternate" and node.get("href"):
                return node.get("href")
        return None

    @property
    def items(self) -> list[ET.Element]:
        """Item (RSS) or entry (Atom) elements, in document order."""
        if self.kind == "rss":
            return self._element.findall("item")
        return self._element.findall(self._atom("entry"))

    def extensions(self, namespace: str) -> list[ET.Element]:
        """Channel-level child elements that belong to an XML namespace.

        For Atom documents every child is in the Atom namespace, so asking
        for ``ATOM_NS`` yields all of them.
        """
        prefix = f"{{{namespace}}}"
        return [child for child in self._element if child.tag.startswith(prefix)]

    def summary(self) -> ChannelSummary:
        return ChannelSummary(
            kind=self.kind,
            title=self.title,
            link=self.link,
            description=self.description,
            item_count=len(self.items),
        )

    def to_xml(self) -> str:
        """Serialize back to an XML document string."""
        if self.kind == "atom":
            try:
                return ET.tostring(self._root, encoding="unicode", default_namespace=ATOM_NS)
            except ValueError:
                # Document mixes in non-namespaced elements
                pass
        return ET.tostring(self._root, encoding="unicode")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Channel):
            return NotImplemented
        return self.to_xml() == other.to_xml()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Channel(kind={self.kind!r}, title={self.title!r}, items={len(self.items)})"
