"""Custom exceptions for feedstore."""


class FeedStoreError(Exception):
    """Base exception for all feedstore errors."""

    pass


class ConfigError(FeedStoreError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class FeedError(FeedStoreError):
    """Feed management errors."""

    pass


class FeedNotFoundError(FeedError):
    """Feed not present in the store."""

    pass


class DuplicateFeedError(FeedError):
    """Feed already exists."""

    pass


class FeedParseError(FeedError):
    """Feed document could not be parsed."""

    pass


class MissingLinkError(FeedError):
    """Feed document has no self-referencing atom:link."""

    pass


class NetworkError(FeedStoreError):
    """Network-related errors."""

    pass


class FetchError(NetworkError):
    """A feed URL could not be fetched.

    Attributes:
        url: URL that was requested
        status_code: HTTP status of the final response, if one was received
    """

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class StorageError(FeedStoreError):
    """Reading or writing a persisted store failed."""

    pass


class CorruptDatabaseError(StorageError):
    """Persisted store is not a JSON object of URL to document text."""

    pass


class CorruptEntryError(StorageError):
    """A persisted document failed to parse back into a channel."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Stored feed '{url}' is corrupt: {reason}")
        self.url = url
        self.reason = reason
