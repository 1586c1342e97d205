"""Feed fetching, parsing and self-link extraction for feedstore."""

from feedstore.feeds.fetcher import FeedFetcher
from feedstore.feeds.links import find_self_link
from feedstore.feeds.models import ATOM_NS, Channel, ChannelSummary
from feedstore.feeds.parser import parse_channel

__all__ = [
    "ATOM_NS",
    "Channel",
    "ChannelSummary",
    "FeedFetcher",
    "find_self_link",
    "parse_channel",
]
