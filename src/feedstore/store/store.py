"""In-memory store of feed channels keyed by canonical URL."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from feedstore.feeds.fetcher import FeedFetcher
from feedstore.feeds.links import find_self_link
from feedstore.feeds.models import Channel
from feedstore.feeds.parser import parse_channel
from feedstore.utils.errors import (
    DuplicateFeedError,
    FeedError,
    FeedNotFoundError,
    FeedStoreError,
    StorageError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentitySource:
    """Where a channel's storage key comes from.

    Feeds added by URL are keyed by that URL, never by what the fetched
    document claims. Feeds added from a file are keyed by their atom:link
    self-link. Keying network feeds by self-link when present would change
    which key a feed ends up under, so the two paths stay distinct.
    """

    url: str | None = None

    @classmethod
    def caller(cls, url: str) -> "IdentitySource":
        return cls(url=url)

    @classmethod
    def self_link(cls) -> "IdentitySource":
        return cls(url=None)

    def resolve(self, channel: Channel) -> str:
        if self.url is not None:
            return self.url
        return find_self_link(channel)


@dataclass
class BatchResult:
    """Per-key outcome of refreshing every stored feed."""

    updated: list[str] = field(default_factory=list)
    failed: dict[str, FeedStoreError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class FeedStore:
    """Mapping of canonical feed URL to parsed Channel.

    Keys are unique: ``add`` and ``add_from_file`` refuse existing keys,
    while ``update_one`` is the upsert path and replaces freely. The store
    is single-owner and does no locking; callers refreshing concurrently
    must route every mutation through one writer.

    Example:
        >>> store = FeedStore()
        >>> store.add("https://blog.apnic.net/feed/")
        >>> store.get("https://blog.apnic.net/feed/").title
        'APNIC Blog'
    """

    def __init__(
        self,
        fetcher: FeedFetcher | None = None,
        channels: dict[str, Channel] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            fetcher: Fetcher used for network adds and refreshes. A default
                FeedFetcher is created on first use if omitted.
            channels: Initial contents (used when loading persisted state)
        """
        self._fetcher = fetcher
        self._channels: dict[str, Channel] = dict(channels or {})

    @property
    def fetcher(self) -> FeedFetcher:
        if self._fetcher is None:
            self._fetcher = FeedFetcher()
        return self._fetcher

    def get(self, url: str) -> Channel | None:
        """Look up a channel. Never raises."""
        return self._channels.get(url)

    def add(self, url: str) -> None:
        """Fetch a feed and store it under the given URL.

        Args:
            url: Feed URL, used verbatim as the key

        Raises:
            DuplicateFeedError: If the URL is already stored (nothing is fetched)
            FetchError: If the download fails
            FeedParseError: If the document is not a valid feed
        """
        if url in self._channels:
            raise DuplicateFeedError(f"Feed '{url}' already exists. Use update to refresh it.")

        channel = self._download(url)
        self.insert(IdentitySource.caller(url), channel)

    def add_from_file(self, path: Path | str) -> str:
        """Parse a local feed document and store it under its self-link.

        Args:
            path: Path to an RSS or Atom file

        Returns:
            The canonical URL the channel was stored under

        Raises:
            StorageError: If the file cannot be read
            FeedParseError: If the document is not a valid feed
            MissingLinkError: If the document has no atom:link self-link
            DuplicateFeedError: If the self-link URL is already stored
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise StorageError(f"Cannot read feed file {path}: {e}") from e

        channel = parse_channel(data)
        url = self.insert(IdentitySource.self_link(), channel)
        logger.info(f"Channel link is: {url}")
        return url

    def insert(self, identity: IdentitySource, channel: Channel, replace: bool = False) -> str:
        """Store a channel under the key derived from ``identity``.

        Every ingestion path ends here.

        Args:
            identity: How to derive the key
            channel: Parsed channel
            replace: Overwrite an existing entry instead of failing

        Returns:
            The key used

        Raises:
            MissingLinkError: If a self-link identity cannot be resolved
            DuplicateFeedError: If the key exists and ``replace`` is False
            FeedError: If the derived key is empty
        """
        url = identity.resolve(channel)
        if not url:
            raise FeedError("Feed URL must be a non-empty string")

        if not replace and url in self._channels:
            raise DuplicateFeedError(f"Feed '{url}' already exists. Use update to refresh it.")

        self._channels[url] = channel
        logger.info(f"{'Updated' if replace else 'Added'} feed {url}")
        return url

    def remove(self, url: str) -> Channel:
        """Remove a channel and return it.

        Raises:
            FeedNotFoundError: If the URL is not stored
        """
        if url not in self._channels:
            raise FeedNotFoundError(f"Feed '{url}' not found")

        channel = self._channels.pop(url)
        logger.info(f"Removed feed {url}")
        return channel

    def update_one(self, url: str) -> None:
        """Fetch a feed and insert or replace it under the given URL.

        The key stays the URL given here even if the fetched document
        declares a different self-link.

        Raises:
            FetchError: If the download fails
            FeedParseError: If the document is not a valid feed
        """
        channel = self._download(url)
        self.insert(IdentitySource.caller(url), channel, replace=True)

    def update_all(self, keep_going: bool = False) -> BatchResult:
        """Refresh every stored feed, one at a time.

        The set of keys is captured before the first fetch.

        Args:
            keep_going: Record failures and continue instead of stopping at
                the first one

        Returns:
            BatchResult listing refreshed and failed keys

        Raises:
            FeedStoreError: The first failure, unless ``keep_going`` is set.
                Keys after the failing one are left as they were.
        """
        result = BatchResult()
        for url in list(self._channels):
            try:
                self.update_one(url)
            except FeedStoreError as e:
                if not keep_going:
                    raise
                logger.warning(f"Failed to update {url}: {e}")
                result.failed[url] = e
            else:
                result.updated.append(url)
        return result

    def _download(self, url: str) -> Channel:
        return parse_channel(self.fetcher.fetch(url))

    def urls(self) -> list[str]:
        return sorted(self._channels)

    def items(self) -> Iterator[tuple[str, Channel]]:
        return iter(self._channels.items())

    def __contains__(self, url: object) -> bool:
        return url in self._channels

    def __len__(self) -> int:
        return len(self._channels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeedStore):
            return NotImplemented
        return self._channels == other._channels

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FeedStore({self.urls()!r})"
