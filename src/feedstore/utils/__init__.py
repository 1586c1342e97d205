"""Utility functions and helpers for feedstore."""

from feedstore.utils.errors import (
    ConfigError,
    CorruptDatabaseError,
    CorruptEntryError,
    DuplicateFeedError,
    FeedError,
    FeedNotFoundError,
    FeedParseError,
    FeedStoreError,
    FetchError,
    InvalidConfigError,
    MissingLinkError,
    NetworkError,
    StorageError,
)
from feedstore.utils.paths import (
    get_config_dir,
    get_config_file,
)

__all__ = [
    # Errors
    "FeedStoreError",
    "ConfigError",
    "InvalidConfigError",
    "FeedError",
    "FeedNotFoundError",
    "DuplicateFeedError",
    "FeedParseError",
    "MissingLinkError",
    "NetworkError",
    "FetchError",
    "StorageError",
    "CorruptDatabaseError",
    "CorruptEntryError",
    # Paths
    "get_config_dir",
    "get_config_file",
]
