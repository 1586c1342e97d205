"""Feed store and its persistence codec."""

from feedstore.store.codec import dumps, load, loads, save
from feedstore.store.store import BatchResult, FeedStore, IdentitySource

__all__ = [
    "BatchResult",
    "FeedStore",
    "IdentitySource",
    "dumps",
    "load",
    "loads",
    "save",
]
